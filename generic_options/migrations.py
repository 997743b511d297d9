"""Alembic helpers for option tables.

Usage inside a revision::

    from generic_options.migrations import create_option_table

    def upgrade() -> None:
        create_option_table(
            op,
            "shop_settings",
            sa.Column("id", sa.Integer, primary_key=True),
            sa.Column("shop_id", sa.Integer, sa.ForeignKey("shops.id"), nullable=False),
        )
"""

from typing import Any

import sqlalchemy as sa
from alembic.operations import Operations

from generic_options.constants import KEY_COLUMN, KEY_MAX_LENGTH, VALUE_COLUMN


def option_columns() -> list[sa.Column]:
    """Fresh ``opt_key`` / ``opt_value`` columns for a new table."""
    return [
        sa.Column(KEY_COLUMN, sa.String(KEY_MAX_LENGTH), nullable=False),
        sa.Column(VALUE_COLUMN, sa.Text(), nullable=True),
    ]


def create_option_table(op: Operations, name: str, *columns: Any, **kw: Any) -> sa.Table:
    """Create table *name* with *columns* followed by the option columns."""
    return op.create_table(name, *columns, *option_columns(), **kw)
