"""Entity lookup capability used to resolve options referencing other rows.

These protocols enable plugging any storage into option resolution, and
decouple the accessors from concrete SQLAlchemy sessions.
"""

from collections.abc import Callable
from typing import Any, Protocol

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

QueryFilter = Callable[[Select], Select]


class EntityFinder(Protocol):
    """Find zero or one entity by the value of an identifying field."""

    def find_one(
        self,
        entity_type: type[Any],
        id_field: str,
        entity_id: Any,
        extra_filter: QueryFilter | None = None,
    ) -> Any | None: ...


class AsyncEntityFinder(Protocol):
    """Async counterpart of :class:`EntityFinder`."""

    async def find_one(
        self,
        entity_type: type[Any],
        id_field: str,
        entity_id: Any,
        extra_filter: QueryFilter | None = None,
    ) -> Any | None: ...


def build_lookup(
    entity_type: type[Any],
    id_field: str,
    entity_id: Any,
    extra_filter: QueryFilter | None = None,
) -> Select:
    """Build ``SELECT entity WHERE id_field = entity_id``, then apply *extra_filter*.

    Raises:
        ValueError: If *entity_type* has no attribute named *id_field*.
    """
    column = getattr(entity_type, id_field, None)
    if column is None:
        raise ValueError(f"{entity_type.__name__} has no field {id_field!r}")
    query = select(entity_type).where(column == entity_id)
    if extra_filter is not None:
        query = extra_filter(query)
    return query


class SessionEntityFinder:
    """:class:`EntityFinder` backed by a SQLAlchemy ``Session``."""

    def __init__(self, session: Session):
        self.session = session

    def find_one(
        self,
        entity_type: type[Any],
        id_field: str,
        entity_id: Any,
        extra_filter: QueryFilter | None = None,
    ) -> Any | None:
        """Return the matching entity, or ``None`` if there is none.

        Raises:
            sqlalchemy.exc.MultipleResultsFound: If more than one row matches.
        """
        query = build_lookup(entity_type, id_field, entity_id, extra_filter)
        return self.session.execute(query).scalar_one_or_none()


class AsyncSessionEntityFinder:
    """:class:`AsyncEntityFinder` backed by a SQLAlchemy ``AsyncSession``."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_one(
        self,
        entity_type: type[Any],
        id_field: str,
        entity_id: Any,
        extra_filter: QueryFilter | None = None,
    ) -> Any | None:
        query = build_lookup(entity_type, id_field, entity_id, extra_filter)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()
