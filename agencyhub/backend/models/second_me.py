"""
Second Me Models.

A client's AI avatar request and the content produced for it.
"""

from sqlalchemy import JSON, Boolean, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from agencyhub.backend.models.base import Base, TimestampMixin, UUIDMixin


class SecondMeRequest(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "second_me_requests"

    client_id: Mapped[str] = mapped_column(
        ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    photo_urls: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    avatar_url: Mapped[str | None] = mapped_column(String(2000), nullable=True)
    setup_paid: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    weekly_subscription_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)


class SecondMeContent(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "second_me_content"

    request_id: Mapped[str] = mapped_column(
        ForeignKey("second_me_requests.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    client_id: Mapped[str] = mapped_column(
        ForeignKey("clients.id", ondelete="CASCADE"), nullable=False,
    )
    content_type: Mapped[str] = mapped_column(String(20), nullable=False)
    media_url: Mapped[str] = mapped_column(String(2000), nullable=False)
    caption: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
