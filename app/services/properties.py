from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from app.core.errors import NotFoundError
from app.models import Builder, Property, PropertyConfiguration
from app.schemas.property import BuilderIn, PropertyFilter, PropertyIn
from app.services.crud import commit_or_conflict, delete_or_404, get_or_404, list_page
from app.services.filters import property_conditions
from app.utils.slug import generate_slug

logger = get_logger()

NOT_FOUND = "Property not found"
SLUG_TAKEN = "A property with this slug already exists"


async def search_properties(db: AsyncSession, filters: PropertyFilter) -> Tuple[List[Property], int]:
    return await list_page(
        db,
        Property,
        property_conditions(filters),
        filters.page,
        filters.limit,
        order_by=[Property.created_at.desc(), Property.id],
    )


async def get_property(db: AsyncSession, property_id: UUID) -> Property:
    return await get_or_404(db, Property, property_id, NOT_FOUND)


async def get_property_by_key(db: AsyncSession, key: str) -> Property:
    """Look a listing up by id, falling back to its slug."""
    try:
        return await get_property(db, UUID(key))
    except (ValueError, NotFoundError):
        pass
    item = await db.scalar(select(Property).where(Property.slug == key))
    if item is None:
        raise NotFoundError(NOT_FOUND)
    return item


def _configurations(data: PropertyIn) -> List[PropertyConfiguration]:
    return [
        PropertyConfiguration(
            position=position,
            config_type=config.config_type,
            carpet_area_sqft=config.carpet_area_sqft,
            price=config.price if config.price is not None else 0,
            floor_plan_image=config.floor_plan_image,
        )
        for position, config in enumerate(data.configurations or [])
    ]


def _columns(data: PropertyIn) -> dict:
    values = data.model_dump(exclude={"configurations"})
    # An omitted slug leaves the stored one alone
    if data.slug is None:
        del values["slug"]
    return values


async def _free_slug(db: AsyncSession, name: str) -> Optional[str]:
    """Slug derived from ``name``, suffixed with -2, -3, ... until unused."""
    base = generate_slug(name)
    if not base:
        return None
    query = select(Property.slug).where(or_(Property.slug == base, Property.slug.like(f"{base}-%")))
    taken = set((await db.scalars(query)).all())
    slug, n = base, 1
    while slug in taken:
        n += 1
        slug = f"{base}-{n}"
    return slug


async def create_property(db: AsyncSession, data: PropertyIn) -> Property:
    values = _columns(data)
    if data.slug is None:
        values["slug"] = await _free_slug(db, data.name)
    item = Property(**values, configurations=_configurations(data))
    db.add(item)
    await commit_or_conflict(db, SLUG_TAKEN, item)
    logger.info("Property created", property_id=str(item.id), slug=item.slug)
    return item


async def update_property(db: AsyncSession, property_id: UUID, data: PropertyIn) -> Property:
    item = await get_property(db, property_id)
    for field, value in _columns(data).items():
        setattr(item, field, value)
    # Configurations are replaced wholesale, and only when the payload carries them
    if data.configurations is not None:
        item.configurations = _configurations(data)
    await commit_or_conflict(db, SLUG_TAKEN, item)
    logger.info("Property updated", property_id=str(property_id))
    return item


async def delete_property(db: AsyncSession, property_id: UUID) -> None:
    await delete_or_404(db, Property, property_id, NOT_FOUND)
    logger.info("Property deleted", property_id=str(property_id))


async def names_by_id(db: AsyncSession, ids: List[UUID]) -> dict:
    if not ids:
        return {}
    rows = await db.execute(select(Property.id, Property.name).where(Property.id.in_(set(ids))))
    return {row.id: row.name for row in rows}


async def list_builders(db: AsyncSession) -> List[Builder]:
    return list((await db.scalars(select(Builder).order_by(Builder.name.asc()))).all())


async def save_builder(db: AsyncSession, data: BuilderIn) -> Builder:
    """Create the builder, or refresh its description if the name exists."""
    item: Optional[Builder] = await db.scalar(select(Builder).where(Builder.name == data.name))
    if item is None:
        item = Builder(name=data.name, about=data.about)
        db.add(item)
    elif data.about:
        item.about = data.about
    await commit_or_conflict(db, "A builder with this name already exists", item)
    return item
