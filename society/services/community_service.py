from sqlalchemy.orm import Session

from society.core.exceptions import NotFoundException
from society.models.community import CommunityPost, PostComment, PostLike
from society.models.principal import Principal
from society.repositories.community_repository import CommunityRepository
from society.repositories.user_repository import UserRepository
from society.schemas.community_schemas import CommentCreate, PostCreate

UNKNOWN_AUTHOR = "A Resident"


class CommunityService:
    """Service layer for the community feed"""

    def __init__(self, db: Session):
        self.db = db
        self.community_repo = CommunityRepository(db)
        self.user_repo = UserRepository(db)

    def list_posts(self, principal: Principal) -> list[dict]:
        """Posts of the caller's site, newest first"""
        posts = self.community_repo.get_site_posts(principal.site_id)
        names = self._author_names(principal)
        return [self._serialize(post, principal, names) for post in posts]

    def create_post(self, data: PostCreate, principal: Principal) -> dict:
        post = self.community_repo.create(
            CommunityPost(
                site_id=principal.site_id,
                author_id=principal.user.id,
                content=data.content,
                category=data.category,
                hashtags=data.hashtags,
                event_date=data.event_date,
                event_location=data.event_location,
            )
        )
        return self._serialize(post, principal, {principal.user.id: principal.user.name})

    def toggle_like(self, post_id: int, principal: Principal) -> dict:
        """
        Like the post, or remove the caller's like if present.

        Returns:
            Dict shaped like LikeResponse
        """
        post = self._get_post(post_id, principal)
        like = self.community_repo.get_like(post.id, principal.user.id)
        if like:
            self.community_repo.remove_like(like)
            liked = False
        else:
            self.community_repo.add_like(PostLike(post_id=post.id, user_id=principal.user.id))
            liked = True

        self.db.refresh(post)
        return {"liked": liked, "like_count": len(post.likes)}

    def add_comment(self, post_id: int, data: CommentCreate, principal: Principal) -> dict:
        post = self._get_post(post_id, principal)
        comment = self.community_repo.add_comment(
            PostComment(post_id=post.id, author_id=principal.user.id, content=data.content)
        )
        return {
            "id": comment.id,
            "author_id": comment.author_id,
            "author_name": principal.user.name,
            "content": comment.content,
            "created_at": comment.created_at,
        }

    def _get_post(self, post_id: int, principal: Principal) -> CommunityPost:
        post = self.community_repo.get_post(post_id, principal.site_id)
        if not post:
            raise NotFoundException("Post not found")
        return post

    def _author_names(self, principal: Principal) -> dict[int, str]:
        return {user.id: user.name for user in self.user_repo.get_site_users(principal.site_id)}

    @staticmethod
    def _serialize(post: CommunityPost, principal: Principal, names: dict[int, str]) -> dict:
        return {
            "id": post.id,
            "author_id": post.author_id,
            "author_name": names.get(post.author_id, UNKNOWN_AUTHOR),
            "content": post.content,
            "category": post.category,
            "hashtags": post.hashtags or [],
            "event_date": post.event_date,
            "event_location": post.event_location,
            "like_count": len(post.likes),
            "liked_by_me": any(like.user_id == principal.user.id for like in post.likes),
            "comments": [
                {
                    "id": comment.id,
                    "author_id": comment.author_id,
                    "author_name": names.get(comment.author_id, UNKNOWN_AUTHOR),
                    "content": comment.content,
                    "created_at": comment.created_at,
                }
                for comment in post.comments
            ],
            "created_at": post.created_at,
        }
