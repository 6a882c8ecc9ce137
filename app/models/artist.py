"""Artist model storing optional image and Spotify metadata, keyed by name."""

import uuid as uuid_lib
from datetime import datetime
from typing import Optional

from sqlalchemy import String, DateTime, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Artist(Base):
    """Artist metadata. `name` is the join key to the names in Song.artist."""

    __tablename__ = "artists"

    id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid_lib.uuid4,
    )
    name: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    image_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    spotify_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now()
    )

    def __repr__(self) -> str:
        return f"<Artist {self.name}>"
