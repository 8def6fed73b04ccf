from datetime import datetime, timezone
from typing import Optional
from sqlalchemy import text
from sqlmodel import SQLModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BaseModel(SQLModel):
    """
    Optional base for table models: integer primary key plus timestamps.

    BaseRepository works with any SQLModel table class; extend this one
    when the entity wants generated ids and created/updated timestamps.

    Example:
        class Product(BaseModel, table=True):
            __tablename__ = "products"
            name: str
            description: str | None = None
    """
    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")}
    )
    updated_at: datetime = Field(
        default_factory=utcnow,
        sa_column_kwargs={"onupdate": utcnow}
    )
