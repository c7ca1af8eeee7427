import asyncio
from typing import Any, AsyncIterator, Awaitable, Generic, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import ColumnElement, Select, func, select
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dto.common import ListQuery, PaginationModel
from app.infrastructure.config.config import DB_CONFIG
from app.infrastructure.database.models.base import Base
from app.infrastructure.errors.base import ServiceUnavailable
from app.infrastructure.logging import get_logger
from app.utils.enums import SortOrderEnum


ModelType = TypeVar("ModelType", bound=Base)
ResultType = TypeVar("ResultType")

logger = get_logger(__name__)


class SqlAlchemyRepository(Generic[ModelType]):
    """
    Resource store for one mapped entity.

    Every call to the database is bounded by DB_CONFIG.QUERY_TIMEOUT; timeouts
    and connectivity failures surface as ServiceUnavailable.

    Subclasses describe their list contract through `sort_fields` (public
    field name -> model attribute), `_search_condition` and `_base_query`.
    """

    sort_fields: dict[str, str] = {
        "createdAt": "created_at",
        "updatedAt": "updated_at",
    }

    def __init__(self, session: AsyncSession, model: type[ModelType]):
        self.session = session
        self.model = model

    async def _run(self, awaitable: Awaitable[ResultType]) -> ResultType:
        try:
            return await asyncio.wait_for(awaitable, timeout=DB_CONFIG.QUERY_TIMEOUT)
        except asyncio.TimeoutError as exc:
            logger.error(
                "store_call_timed_out",
                model=self.model.__name__,
                timeout=DB_CONFIG.QUERY_TIMEOUT,
            )
            raise ServiceUnavailable("Storage call timed out") from exc
        except (OperationalError, InterfaceError) as exc:
            logger.error("store_unreachable", model=self.model.__name__, error=str(exc))
            raise ServiceUnavailable() from exc

    async def commit(self) -> None:
        await self._run(self.session.commit())

    async def rollback(self) -> None:
        await self.session.rollback()

    async def add_item(self, item: ModelType) -> ModelType:
        self.session.add(item)
        await self.commit()
        await self._run(self.session.refresh(item))
        return item

    async def save_item(self, item: ModelType) -> ModelType:
        await self.commit()
        await self._run(self.session.refresh(item))
        return item

    async def get_item(self, item_id: UUID) -> ModelType | None:
        query = self._base_query().where(self.model.id == item_id)
        result = await self._run(self.session.execute(query))
        return result.scalars().one_or_none()

    async def get_for_update(self, item_id: UUID) -> ModelType | None:
        """Load a row inside the current transaction, locked until commit/rollback."""
        query = (
            select(self.model)
            .where(self.model.id == item_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await self._run(self.session.execute(query))
        return result.scalars().one_or_none()

    async def get_by_filter(self, one_or_none: bool = False, **filters: Any) -> ModelType | list[ModelType] | None:
        query = select(self.model).filter_by(**filters)
        result = await self._run(self.session.execute(query))
        if one_or_none:
            return result.scalars().one_or_none()
        return list(result.scalars().all())

    async def delete_item(self, item: ModelType) -> None:
        await self._run(self.session.delete(item))
        await self.commit()

    async def count_by(self, column: ColumnElement) -> dict[Any, int]:
        query = select(column, func.count(self.model.id)).group_by(column)
        result = await self._run(self.session.execute(query))
        return {key: count for key, count in result.all()}

    def _base_query(self) -> Select:
        return select(self.model)

    def _search_condition(self, term: str) -> ColumnElement[bool] | None:
        return None

    def _apply_filters(self, query: Select, params: ListQuery) -> Select:
        if params.status:
            query = query.where(self.model.status == params.status)
        if params.date_from:
            query = query.where(self.model.created_at >= params.date_from)
        if params.date_to:
            query = query.where(self.model.created_at <= params.date_to)
        if params.search:
            condition = self._search_condition(params.search)
            if condition is not None:
                query = query.where(condition)
        return query

    def _apply_sorting(self, query: Select, params: ListQuery) -> Select:
        column = getattr(self.model, self.sort_fields[params.sort_by])
        # id as tie-breaker keeps pages stable when sort keys collide
        if params.sort_order == SortOrderEnum.ASC:
            return query.order_by(column.asc(), self.model.id.asc())
        return query.order_by(column.desc(), self.model.id.desc())

    @classmethod
    def is_sortable(cls, sort_by: str) -> bool:
        return sort_by in cls.sort_fields

    def filtered_query(self, params: ListQuery) -> Select:
        return self._apply_sorting(
            self._apply_filters(self._base_query(), params),
            params,
        )

    async def list(self, params: ListQuery) -> tuple[list[ModelType], PaginationModel]:
        filtered = self._apply_filters(self._base_query(), params)

        count_query = select(func.count()).select_from(filtered.order_by(None).subquery())
        total_items = (await self._run(self.session.execute(count_query))).scalar_one()

        page_query = (
            self._apply_sorting(filtered, params)
            .limit(params.limit)
            .offset(params.offset)
        )
        result = await self._run(self.session.execute(page_query))
        items = list(result.scalars().unique().all())

        pagination = PaginationModel.build(
            total_items=total_items,
            page=params.page,
            page_size=params.limit,
        )
        return items, pagination

    async def stream(self, params: ListQuery, batch_size: int) -> AsyncIterator[Sequence[ModelType]]:
        """Every item matching `params`, ignoring page/limit, in batches of `batch_size`."""
        query = self.filtered_query(params).execution_options(yield_per=batch_size)
        result = await self._run(self.session.stream_scalars(query))
        while True:
            batch = await self._run(result.fetchmany(batch_size))
            if not batch:
                break
            yield batch


def contains(column: Any, term: str) -> ColumnElement[bool]:
    """Case-insensitive substring match."""
    return column.ilike(f"%{escape_like(term)}%", escape="\\")


def escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
