import uuid
from datetime import datetime, timezone
from typing import List

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from app.models import PageStat

logger = get_logger()

_INSERTS = {"postgresql": pg_insert, "sqlite": sqlite_insert}


async def track_page(db: AsyncSession, page_name: str) -> PageStat:
    """Count one click on ``page_name``.

    A single INSERT .. ON CONFLICT DO UPDATE, so concurrent clicks on the same
    page never overwrite each other's increment.
    """
    dialect = db.get_bind().dialect.name
    insert = _INSERTS.get(dialect)
    if insert is None:
        raise RuntimeError(f"Page tracking is not supported on {dialect}")
    now = datetime.now(timezone.utc)
    stmt = insert(PageStat).values(
        id=uuid.uuid4(),
        page_name=page_name,
        click_count=1,
        last_clicked=now,
        created_at=now,
        updated_at=now,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=[PageStat.page_name],
        set_={
            "click_count": PageStat.click_count + 1,
            "last_clicked": now,
            "updated_at": now,
        },
    ).returning(PageStat)
    stat = (
        await db.scalars(stmt, execution_options={"populate_existing": True})
    ).one()
    await db.commit()
    logger.info("Page click tracked", page_name=page_name, click_count=stat.click_count)
    return stat


async def list_page_stats(db: AsyncSession) -> List[PageStat]:
    query = select(PageStat).order_by(PageStat.click_count.desc(), PageStat.page_name.asc())
    return list((await db.scalars(query)).all())
