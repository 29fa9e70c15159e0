"""
SQLAlchemy ORM models
"""
from datetime import datetime

from sqlalchemy import String, Text, TIMESTAMP, func
from sqlalchemy.orm import Mapped, mapped_column

from habitboard.infrastructure.db.session import Base


class KeyValueEntry(Base):
    """
    One stored document per key (habits, kanban board, todos, counter).

    value holds the serialized JSON text exactly as the stores produce it.
    """
    __tablename__ = "key_value_store"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)

    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
