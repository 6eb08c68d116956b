from datetime import datetime

from sqlalchemy.orm import Session, selectinload

from society.models.community import CommunityPost, PostCategory, PostComment, PostLike


class CommunityRepository:
    """Repository for community posts, comments and likes"""

    def __init__(self, db: Session):
        self.db = db

    def get_post(self, post_id: int, site_id: int | None) -> CommunityPost | None:
        return (
            self.db.query(CommunityPost)
            .filter(CommunityPost.id == post_id, CommunityPost.site_id == site_id)
            .first()
        )

    def get_site_posts(self, site_id: int | None, limit: int = 50) -> list[CommunityPost]:
        """Posts of a site, newest first, with comments and likes loaded"""
        return (
            self.db.query(CommunityPost)
            .options(selectinload(CommunityPost.comments), selectinload(CommunityPost.likes))
            .filter(CommunityPost.site_id == site_id)
            .order_by(CommunityPost.created_at.desc(), CommunityPost.id.desc())
            .limit(limit)
            .all()
        )

    def get_upcoming_events(
        self, site_id: int | None, after: datetime, limit: int
    ) -> list[CommunityPost]:
        return (
            self.db.query(CommunityPost)
            .filter(
                CommunityPost.site_id == site_id,
                CommunityPost.category == PostCategory.EVENT,
                CommunityPost.event_date >= after,
            )
            .order_by(CommunityPost.event_date.asc())
            .limit(limit)
            .all()
        )

    def get_like(self, post_id: int, user_id: int) -> PostLike | None:
        return (
            self.db.query(PostLike)
            .filter(PostLike.post_id == post_id, PostLike.user_id == user_id)
            .first()
        )

    def create(self, post: CommunityPost) -> CommunityPost:
        self.db.add(post)
        self.db.commit()
        self.db.refresh(post)
        return post

    def add_comment(self, comment: PostComment) -> PostComment:
        self.db.add(comment)
        self.db.commit()
        self.db.refresh(comment)
        return comment

    def add_like(self, like: PostLike) -> PostLike:
        self.db.add(like)
        self.db.commit()
        return like

    def remove_like(self, like: PostLike) -> None:
        self.db.delete(like)
        self.db.commit()
