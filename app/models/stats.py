from sqlalchemy import Column, DateTime, Integer, String

from app.models import Base, TimestampedMixin


class PageStat(TimestampedMixin, Base):
    __tablename__ = "page_stats"
    page_name = Column(String(100), unique=True, nullable=False)
    click_count = Column(Integer, nullable=False, default=0)
    last_clicked = Column(DateTime(timezone=True), nullable=True)
