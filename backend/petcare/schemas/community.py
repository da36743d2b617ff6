"""Module: community."""

from datetime import datetime
from typing import Literal

from pydantic import Field

from petcare.schemas.common import CamelModel

Tag = Literal["daily", "qa", "rescue"]


class MediaItem(CamelModel):
    id: str
    type: Literal["image", "video"]
    uri: str
    # Poster frame for videos.
    thumbnail: str | None = None


class PostCreate(CamelModel):
    content: str = Field(min_length=1)
    tags: list[Tag] = Field(default_factory=list)
    media: list[MediaItem] | None = None


class PostOut(CamelModel):
    id: str
    author_id: str
    author_name: str
    author_avatar: str | None = None
    created_at: datetime
    content: str
    media: list[MediaItem] | None = None
    tags: list[str]
    likes: int
    comments: int
    liked_by_me: bool = False


class PostPage(CamelModel):
    items: list[PostOut]
    page: int
    has_more: bool


class LikeRequest(CamelModel):
    liked: bool = True


class CommentRequest(CamelModel):
    text: str = Field(min_length=1)


class QuestionCreate(CamelModel):
    question: str = Field(min_length=1)
    tags: list[Tag] = Field(default_factory=list)


class AnswerCreate(CamelModel):
    text: str = Field(min_length=1)


class AcceptRequest(CamelModel):
    answer_id: str


class AnswerOut(CamelModel):
    id: str
    author_id: str
    author_name: str
    author_avatar: str | None = None
    text: str
    created_at: datetime
    is_accepted: bool = False


class QuestionOut(CamelModel):
    id: str
    question: str
    author_id: str
    author_name: str
    author_avatar: str | None = None
    created_at: datetime
    tags: list[str]
    answers: list[AnswerOut]
