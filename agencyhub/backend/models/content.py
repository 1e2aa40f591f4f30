"""
Content Post Model.

Entries of the content calendar, scheduled per client across one or
more social platforms and moved through an approval workflow.
"""

from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from agencyhub.backend.models.base import Base, TimestampMixin, UUIDMixin


class ContentPost(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "content_posts"

    client_id: Mapped[str] = mapped_column(
        ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    platforms: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    caption: Mapped[str | None] = mapped_column(Text, nullable=True)
    media_urls: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    scheduled_for: Mapped[datetime | None] = mapped_column(DateTime, nullable=True, index=True)
    approval_status: Mapped[str] = mapped_column(String(20), nullable=False, default="draft")
    client_feedback: Mapped[str | None] = mapped_column(Text, nullable=True)
    visible_to_client: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_by: Mapped[str | None] = mapped_column(String(36), nullable=True)
