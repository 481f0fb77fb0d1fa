from typing import Any, List, Sequence, Tuple, Type, TypeVar
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from app.core.errors import ConflictError, NotFoundError
from app.utils.pagination import offset

logger = get_logger()

ModelT = TypeVar("ModelT")


async def list_page(
    db: AsyncSession,
    model: Type[ModelT],
    conditions: Sequence[Any],
    page: int,
    limit: int,
    order_by: Sequence[Any],
) -> Tuple[List[ModelT], int]:
    """One page of ``model`` rows matching every condition, plus the total match count."""
    query = select(model).where(*conditions).order_by(*order_by).offset(offset(page, limit)).limit(limit)
    count_query = select(func.count()).select_from(model).where(*conditions)
    items = (await db.scalars(query)).all()
    total = (await db.execute(count_query)).scalar_one()
    return list(items), total


async def get_or_404(db: AsyncSession, model: Type[ModelT], id: UUID, message: str) -> ModelT:
    item = await db.get(model, id)
    if item is None:
        raise NotFoundError(message)
    return item


async def delete_or_404(db: AsyncSession, model: Type[ModelT], id: UUID, message: str) -> None:
    item = await get_or_404(db, model, id, message)
    await db.delete(item)
    await db.commit()


async def commit_or_conflict(db: AsyncSession, message: str, item: Any = None) -> None:
    """Commit, translating a unique-constraint violation into ConflictError.

    ``item`` is reloaded afterwards so server-assigned columns are readable
    outside the session's async context.
    """
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        logger.info("Unique constraint violated", error=str(e.orig))
        raise ConflictError(message) from e
    if item is not None:
        await db.refresh(item)
