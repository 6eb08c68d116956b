"""Community feed: posts, their comments, and likes."""

from datetime import datetime
from enum import Enum as PyEnum

from sqlalchemy import String, Integer, ForeignKey, Enum, DateTime, Text, JSON, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from society.models.base import Base, TimestampMixin


class PostCategory(str, PyEnum):
    DISCUSSION = "discussion"
    EVENT = "event"
    POLL = "poll"
    ANNOUNCEMENT = "announcement"


class CommunityPost(Base, TimestampMixin):
    __tablename__ = "community_posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    site_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("sites.id"), nullable=True, index=True
    )
    author_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[PostCategory] = mapped_column(
        Enum(PostCategory, native_enum=False, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=PostCategory.DISCUSSION,
    )
    hashtags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    event_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    event_location: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Relationships
    comments: Mapped[list["PostComment"]] = relationship(
        "PostComment",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="PostComment.id",
    )
    likes: Mapped[list["PostLike"]] = relationship(
        "PostLike",
        back_populates="post",
        cascade="all, delete-orphan",
    )


class PostComment(Base, TimestampMixin):
    __tablename__ = "post_comments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("community_posts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    author_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    post: Mapped["CommunityPost"] = relationship("CommunityPost", back_populates="comments")


class PostLike(Base, TimestampMixin):
    __tablename__ = "post_likes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("community_posts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)

    post: Mapped["CommunityPost"] = relationship("CommunityPost", back_populates="likes")

    __table_args__ = (UniqueConstraint("post_id", "user_id", name="uq_post_like_user"),)
