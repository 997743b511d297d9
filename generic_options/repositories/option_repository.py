"""Repository for option record data access."""

from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, select
from sqlalchemy.ext.asyncio import AsyncSession

from generic_options.models.option import GenericOption

OptionT = TypeVar("OptionT", bound=GenericOption)


class OptionRepository(Generic[OptionT]):
    """Async data access layer for one option model.

    ``criteria`` narrow every query to one owner, e.g.
    ``ShopSetting.shop_id == shop.id``.
    """

    def __init__(self, session: AsyncSession, model: type[OptionT]):
        self.session = session
        self.model = model

    async def get(self, key: Any, *criteria: ColumnElement[bool]) -> OptionT | None:
        """Get the record holding *key*, or ``None``."""
        query = self.model.where_key(select(self.model), key)
        if criteria:
            query = query.where(*criteria)
        result = await self.session.execute(query)
        return result.scalars().first()

    async def get_all(self, *criteria: ColumnElement[bool]) -> list[OptionT]:
        """Get every record matching *criteria*, ordered by key."""
        query = select(self.model).order_by(self.model.key)
        if criteria:
            query = query.where(*criteria)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_or_new(self, key: Any, **owner: Any) -> OptionT:
        """Get the record holding *key*, or a new pending one.

        ``owner`` gives both the lookup criteria and the attributes of the
        new record.
        """
        criteria = [getattr(self.model, name) == value for name, value in owner.items()]
        option = await self.get(key, *criteria)
        if option is None:
            option = self.model.for_key(key, **owner)
            self.session.add(option)
        return option

    async def set_raw(self, key: Any, value: str | None, **owner: Any) -> OptionT:
        """Insert or update the raw value of *key*."""
        option = await self.get_or_new(key, **owner)
        option.raw_value = value
        await self.session.flush()
        await self.session.refresh(option)
        return option
