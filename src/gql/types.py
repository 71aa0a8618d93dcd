"""GraphQL object and input types."""

from datetime import UTC, datetime

import strawberry

from src.models.post import Post
from src.models.user import User


def to_iso(value: datetime) -> str:
    """ISO-8601 timestamp; naive values from the database are UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.isoformat()


@strawberry.type(name="User")
class UserType:
    id: strawberry.ID = strawberry.field(name="_id")
    name: str
    email: str
    status: str
    model: strawberry.Private[User]

    @strawberry.field
    def posts(self) -> list["PostType"]:
        return [PostType.from_model(post) for post in self.model.posts]

    @classmethod
    def from_model(cls, user: User) -> "UserType":
        return cls(
            id=strawberry.ID(str(user.id)),
            name=user.name,
            email=user.email,
            status=user.status,
            model=user,
        )


@strawberry.type(name="Post")
class PostType:
    id: strawberry.ID = strawberry.field(name="_id")
    title: str
    content: str
    image_url: str | None
    creator: UserType
    created_at: str
    updated_at: str

    @classmethod
    def from_model(cls, post: Post) -> "PostType":
        return cls(
            id=strawberry.ID(str(post.id)),
            title=post.title,
            content=post.content,
            image_url=post.image_url,
            creator=UserType.from_model(post.creator),
            created_at=to_iso(post.created_at),
            updated_at=to_iso(post.updated_at),
        )


@strawberry.type
class AuthData:
    token: str
    user_id: str


@strawberry.type
class PostData:
    posts: list[PostType]
    total_posts: int


@strawberry.input(name="UserInputData")
class UserInput:
    email: str
    name: str
    password: str


@strawberry.input(name="PostInputData")
class PostInput:
    title: str
    content: str
    image_url: str | None = None
