import enum

from sqlalchemy import Boolean, Column, Enum, Integer, String, Text

from app.models import Base, TimestampedMixin


class BlogType(str, enum.Enum):
    TEXT = "TEXT"
    VIDEO = "VIDEO"


class Blog(TimestampedMixin, Base):
    __tablename__ = "blogs"
    title = Column(String(200), nullable=False)
    slug = Column(String(200), unique=True, nullable=False)
    type = Column(Enum(BlogType, name="blogtype"), nullable=False, server_default=BlogType.TEXT.value)
    content = Column(Text, nullable=False)
    excerpt = Column(String(500))
    image = Column(String(500))
    video_url = Column(String(500))
    video_thumbnail = Column(String(500))
    meta_title = Column(String(200))
    meta_keywords = Column(String(500))
    meta_description = Column(String(500))
    published = Column(Boolean, nullable=False, default=False, index=True)


class Video(TimestampedMixin, Base):
    __tablename__ = "videos"
    title = Column(String(200), nullable=False)
    video_link = Column(String(500), nullable=False)
    thumbnail = Column(String(500))
    description = Column(Text)
    order = Column(Integer, nullable=False, default=0)
