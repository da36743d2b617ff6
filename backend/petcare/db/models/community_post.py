"""Module: community_post."""

from datetime import datetime

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from petcare.db.base import Base

POST_TAGS = ("daily", "qa", "rescue")


def encode_tags(tags: list[str]) -> str:
    # ",daily,qa," so a single LIKE '%,tag,%' matches on any dialect.
    return "," + ",".join(tags) + "," if tags else ""


def decode_tags(raw: str | None) -> list[str]:
    return [t for t in (raw or "").split(",") if t]


class CommunityPost(Base):
    __tablename__ = "community_posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    author_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    content: Mapped[str] = mapped_column(Text, nullable=False)
    tags: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    # [{"id", "type": "image"|"video", "uri", "thumbnail"?}]
    media: Mapped[list] = mapped_column(JSON, nullable=True)

    # Engagement counters, only moved by like toggles and comments.
    likes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    comments: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True)
