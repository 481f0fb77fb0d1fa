from typing import List, Tuple
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from app.core.errors import NotFoundError, ValidationError
from app.models import Blog, Video
from app.schemas.content import BlogFilter, BlogIn, VideoFilter, VideoIn
from app.services.crud import commit_or_conflict, delete_or_404, get_or_404, list_page
from app.services.filters import blog_conditions, video_conditions
from app.utils.slug import generate_slug

logger = get_logger()

BLOG_NOT_FOUND = "Blog not found"
BLOG_SLUG_TAKEN = "A blog with this slug already exists"
VIDEO_NOT_FOUND = "Video not found"


async def search_blogs(db: AsyncSession, filters: BlogFilter) -> Tuple[List[Blog], int]:
    return await list_page(
        db, Blog, blog_conditions(filters), filters.page, filters.limit,
        order_by=[Blog.created_at.desc(), Blog.id],
    )


async def get_blog(db: AsyncSession, blog_id: UUID) -> Blog:
    return await get_or_404(db, Blog, blog_id, BLOG_NOT_FOUND)


async def get_published_blog(db: AsyncSession, slug: str) -> Blog:
    blog = await db.scalar(select(Blog).where(Blog.slug == slug))
    if blog is None or not blog.published:
        raise NotFoundError("Blog post not found")
    return blog


def _blog_columns(data: BlogIn) -> dict:
    values = data.model_dump()
    values["slug"] = data.slug or generate_slug(data.title)
    if not values["slug"]:
        raise ValidationError("Slug is required when the title has no letters or digits")
    return values


async def create_blog(db: AsyncSession, data: BlogIn) -> Blog:
    values = _blog_columns(data)
    blog = Blog(**values)
    db.add(blog)
    await commit_or_conflict(db, BLOG_SLUG_TAKEN, blog)
    logger.info("Blog created", blog_id=str(blog.id), slug=blog.slug)
    return blog


async def update_blog(db: AsyncSession, blog_id: UUID, data: BlogIn) -> Blog:
    blog = await get_blog(db, blog_id)
    values = data.model_dump()
    # Editing without a slug keeps the published URL
    if data.slug is None:
        del values["slug"]
    for field, value in values.items():
        setattr(blog, field, value)
    await commit_or_conflict(db, BLOG_SLUG_TAKEN, blog)
    logger.info("Blog updated", blog_id=str(blog_id))
    return blog


async def delete_blog(db: AsyncSession, blog_id: UUID) -> None:
    await delete_or_404(db, Blog, blog_id, BLOG_NOT_FOUND)
    logger.info("Blog deleted", blog_id=str(blog_id))


async def list_videos(db: AsyncSession) -> List[Video]:
    return list((await db.scalars(select(Video).order_by(Video.order.asc(), Video.created_at.asc()))).all())


async def search_videos(db: AsyncSession, filters: VideoFilter) -> Tuple[List[Video], int]:
    return await list_page(
        db, Video, video_conditions(filters), filters.page, filters.limit,
        order_by=[Video.order.asc(), Video.created_at.asc()],
    )


async def get_video(db: AsyncSession, video_id: UUID) -> Video:
    return await get_or_404(db, Video, video_id, VIDEO_NOT_FOUND)


async def create_video(db: AsyncSession, data: VideoIn) -> Video:
    video = Video(**data.model_dump())
    db.add(video)
    await db.commit()
    await db.refresh(video)
    logger.info("Video created", video_id=str(video.id))
    return video


async def update_video(db: AsyncSession, video_id: UUID, data: VideoIn) -> Video:
    video = await get_video(db, video_id)
    for field, value in data.model_dump().items():
        setattr(video, field, value)
    await db.commit()
    await db.refresh(video)
    logger.info("Video updated", video_id=str(video_id))
    return video


async def delete_video(db: AsyncSession, video_id: UUID) -> None:
    await delete_or_404(db, Video, video_id, VIDEO_NOT_FOUND)
    logger.info("Video deleted", video_id=str(video_id))
