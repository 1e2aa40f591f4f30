"""
Vault Item Model.

Passwords and notes are persisted encrypted (see core/encryption.py).
"""

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from agencyhub.backend.models.base import Base, TimestampMixin, UUIDMixin


class VaultItem(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "vault_items"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    username: Mapped[str | None] = mapped_column(String(300), nullable=True)
    url: Mapped[str | None] = mapped_column(String(2000), nullable=True)
    encrypted_password: Mapped[str] = mapped_column(Text, nullable=False)
    encrypted_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[str | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), nullable=True,
    )
