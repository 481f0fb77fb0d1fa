from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from app.core.errors import unexpected_failure
from app.db import get_session
from app.dependencies.auth import get_current_admin
from app.dependencies.query import query_model
from app.schemas.common import Envelope, Page
from app.schemas.content import BlogFilter, BlogIn, BlogOut, VideoOut
from app.schemas.property import PropertyFilter, PropertyOut
from app.services import content as content_service
from app.services import properties as property_service
from app.utils.pagination import paginated

logger = get_logger()
router = APIRouter(prefix="/api", tags=["public"])


@router.get("/properties", response_model=Envelope[Page[PropertyOut]])
async def list_properties(
    filters: PropertyFilter = Depends(query_model(PropertyFilter)),
    db: AsyncSession = Depends(get_session),
):
    with unexpected_failure("Failed to fetch properties", filters=filters.model_dump(mode="json")):
        items, total = await property_service.search_properties(db, filters)
    logger.info("Properties listed", page=filters.page, result_count=len(items), total=total)
    return {"success": True, "data": paginated(items, filters.page, filters.limit, total)}


@router.get("/properties/{key}", response_model=Envelope[PropertyOut])
async def get_property(key: str, db: AsyncSession = Depends(get_session)):
    """Fetch a listing by id or by slug."""
    with unexpected_failure("Failed to fetch property", key=key):
        item = await property_service.get_property_by_key(db, key)
    return {"success": True, "data": item}


@router.get("/blogs", response_model=Envelope[Page[BlogOut]])
async def list_blogs(
    filters: BlogFilter = Depends(query_model(BlogFilter)),
    db: AsyncSession = Depends(get_session),
):
    # Drafts are only listed on the admin route
    filters.published = True
    with unexpected_failure("Failed to fetch blogs"):
        items, total = await content_service.search_blogs(db, filters)
    return {"success": True, "data": paginated(items, filters.page, filters.limit, total)}


@router.post(
    "/blogs",
    response_model=Envelope[BlogOut],
    dependencies=[Depends(get_current_admin)],
)
async def create_blog(data: BlogIn, db: AsyncSession = Depends(get_session)):
    with unexpected_failure("Failed to create blog"):
        blog = await content_service.create_blog(db, data)
    return {"success": True, "data": blog, "message": "Blog created successfully"}


@router.get("/blogs/{slug}", response_model=Envelope[BlogOut])
async def get_blog(slug: str, db: AsyncSession = Depends(get_session)):
    with unexpected_failure("Failed to fetch blog", slug=slug):
        blog = await content_service.get_published_blog(db, slug)
    return {"success": True, "data": blog}


@router.get("/videos", response_model=Envelope[List[VideoOut]])
async def list_videos(db: AsyncSession = Depends(get_session)):
    with unexpected_failure("Failed to fetch videos"):
        videos = await content_service.list_videos(db)
    return {"success": True, "data": videos}


@router.get("/videos/{video_id}", response_model=Envelope[VideoOut])
async def get_video(video_id: UUID, db: AsyncSession = Depends(get_session)):
    with unexpected_failure("Failed to fetch video", video_id=str(video_id)):
        video = await content_service.get_video(db, video_id)
    return {"success": True, "data": video}
