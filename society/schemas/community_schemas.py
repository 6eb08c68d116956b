from datetime import datetime
from pydantic import BaseModel, Field
from society.models.community import PostCategory


class PostCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=5000)
    category: PostCategory = PostCategory.DISCUSSION
    hashtags: list[str] = Field(default_factory=list)
    event_date: datetime | None = None
    event_location: str | None = Field(None, max_length=255)


class CommentCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=2000)


class CommentResponse(BaseModel):
    id: int
    author_id: int
    author_name: str
    content: str
    created_at: datetime


class PostResponse(BaseModel):
    id: int
    author_id: int
    author_name: str
    content: str
    category: PostCategory
    hashtags: list[str]
    event_date: datetime | None
    event_location: str | None
    like_count: int
    liked_by_me: bool
    comments: list[CommentResponse]
    created_at: datetime


class LikeResponse(BaseModel):
    liked: bool
    like_count: int
