"""Post service for creating, listing, editing and deleting posts."""

import logging
from dataclasses import dataclass
from pathlib import Path

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from src.errors import ForbiddenError, InputValidationError, NotFoundError
from src.models.post import Post
from src.models.user import User
from src.services.image_service import clear_image

logger = logging.getLogger(__name__)

MIN_TITLE_LENGTH = 5
MIN_CONTENT_LENGTH = 5

# Sent by clients that kept the existing image on edit
UNCHANGED_IMAGE = "undefined"


@dataclass
class PostPage:
    """One page of posts plus the unpaginated total."""

    posts: list[Post]
    total_posts: int


def validate_post_input(title: str | None, content: str | None) -> list[dict[str, str]]:
    """Collect field errors for a post's title and content."""
    errors = []
    if not title or len(title) < MIN_TITLE_LENGTH:
        errors.append({"message": "Title is invalid."})
    if not content or len(content) < MIN_CONTENT_LENGTH:
        errors.append({"message": "Content is invalid."})
    return errors


def parse_post_id(post_id: str | int) -> int:
    """Convert an external identifier; anything unparsable cannot exist."""
    try:
        return int(post_id)
    except (TypeError, ValueError):
        raise NotFoundError("Post not found.") from None


class PostService:
    """Service for post operations on behalf of a signed-in user."""

    def __init__(self, db: Session, upload_dir: Path):
        self.db = db
        self.upload_dir = upload_dir

    def create_post(
        self, user_id: int, title: str, content: str, image_url: str | None = None
    ) -> Post:
        """Create a post owned by ``user_id``."""
        errors = validate_post_input(title, content)
        if errors:
            raise InputValidationError(errors)

        user = self.db.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found.")

        # Appending to the owner's collection and inserting the post share one commit
        post = Post(title=title, content=content, image_url=image_url)
        user.posts.append(post)
        self.db.commit()
        self.db.refresh(post)

        logger.info(f"User {user_id} created post {post.id}")
        return post

    def list_posts(self, page: int | None = 1, per_page: int = 2) -> PostPage:
        """Return one page of posts, newest first."""
        if not page or page < 1:
            page = 1

        total_posts = self.db.query(func.count(Post.id)).scalar()
        posts = (
            self.db.query(Post)
            .options(joinedload(Post.creator))
            .order_by(Post.created_at.desc(), Post.id.desc())
            .offset((page - 1) * per_page)
            .limit(per_page)
            .all()
        )
        return PostPage(posts=posts, total_posts=total_posts)

    def get_post(self, post_id: str | int) -> Post:
        post = (
            self.db.query(Post)
            .options(joinedload(Post.creator))
            .filter(Post.id == parse_post_id(post_id))
            .first()
        )
        if post is None:
            raise NotFoundError("Post not found.")
        return post

    def get_owned_post(self, post_id: str | int, user_id: int) -> Post:
        """Get a post, requiring that ``user_id`` created it."""
        post = self.get_post(post_id)
        if post.creator_id != user_id:
            logger.warning(f"User {user_id} denied access to post {post.id}")
            raise ForbiddenError()
        return post

    def update_post(
        self,
        post_id: str | int,
        user_id: int,
        title: str,
        content: str,
        image_url: str | None = None,
    ) -> Post:
        """Edit a post's title, content and optionally its image."""
        post = self.get_owned_post(post_id, user_id)

        errors = validate_post_input(title, content)
        if errors:
            raise InputValidationError(errors)

        replaced_image = None
        post.title = title
        post.content = content
        if image_url is not None and image_url != UNCHANGED_IMAGE and image_url != post.image_url:
            replaced_image = post.image_url
            post.image_url = image_url

        self.db.commit()
        self.db.refresh(post)

        if replaced_image:
            clear_image(replaced_image, self.upload_dir)

        logger.info(f"User {user_id} updated post {post.id}")
        return post

    def delete_post(self, post_id: str | int, user_id: int) -> bool:
        """Delete a post and its image; the owner's collection follows the row."""
        post = self.get_owned_post(post_id, user_id)
        image_url = post.image_url
        deleted_id = post.id

        self.db.delete(post)
        self.db.commit()

        clear_image(image_url, self.upload_dir)
        logger.info(f"User {user_id} deleted post {deleted_id}")
        return True
