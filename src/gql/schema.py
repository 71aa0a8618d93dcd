"""GraphQL queries, mutations and the FastAPI router serving them."""

import strawberry
from strawberry.fastapi import GraphQLRouter

from src.config import Settings
from src.gql.context import GraphQLContext, get_context
from src.gql.extensions import MaskInternalErrors
from src.gql.types import AuthData, PostData, PostInput, PostType, UserInput, UserType
from src.services import auth as auth_service

Info = strawberry.Info[GraphQLContext, None]


@strawberry.type
class Query:
    @strawberry.field
    def login(self, info: Info, email: str, password: str) -> AuthData:
        """Exchange credentials for a signed token."""
        ctx = info.context
        token, user = auth_service.login(ctx.db, email, password, ctx.settings)
        return AuthData(token=token, user_id=str(user.id))

    @strawberry.field
    def posts(self, info: Info, page: int | None = 1) -> PostData:
        """One page of posts, newest first."""
        ctx = info.context
        ctx.require_user_id()
        result = ctx.posts.list_posts(page, ctx.settings.posts_per_page)
        return PostData(
            posts=[PostType.from_model(post) for post in result.posts],
            total_posts=result.total_posts,
        )

    @strawberry.field
    def post(self, info: Info, id: strawberry.ID) -> PostType:
        ctx = info.context
        ctx.require_user_id()
        return PostType.from_model(ctx.posts.get_post(id))

    @strawberry.field
    def user(self, info: Info) -> UserType:
        """Profile of the signed-in user."""
        ctx = info.context
        user_id = ctx.require_user_id()
        return UserType.from_model(ctx.users.get_user(user_id))


@strawberry.type
class Mutation:
    @strawberry.mutation
    def create_user(self, info: Info, user_input: UserInput) -> UserType:
        ctx = info.context
        user = auth_service.create_user(
            ctx.db,
            email=user_input.email,
            name=user_input.name,
            password=user_input.password,
            rounds=ctx.settings.bcrypt_rounds,
        )
        return UserType.from_model(user)

    @strawberry.mutation
    def create_post(self, info: Info, post_input: PostInput) -> PostType:
        ctx = info.context
        user_id = ctx.require_user_id()
        post = ctx.posts.create_post(
            user_id, post_input.title, post_input.content, post_input.image_url
        )
        return PostType.from_model(post)

    @strawberry.mutation
    def update_post(self, info: Info, id: strawberry.ID, post_input: PostInput) -> PostType:
        ctx = info.context
        user_id = ctx.require_user_id()
        post = ctx.posts.update_post(
            id, user_id, post_input.title, post_input.content, post_input.image_url
        )
        return PostType.from_model(post)

    @strawberry.mutation
    def delete_post(self, info: Info, id: strawberry.ID) -> bool:
        ctx = info.context
        user_id = ctx.require_user_id()
        return ctx.posts.delete_post(id, user_id)

    @strawberry.mutation
    def update_status(self, info: Info, status: str) -> UserType:
        ctx = info.context
        user_id = ctx.require_user_id()
        return UserType.from_model(ctx.users.update_status(user_id, status))


schema = strawberry.Schema(query=Query, mutation=Mutation, extensions=[MaskInternalErrors])


def create_graphql_router(settings: Settings) -> GraphQLRouter:
    """GraphQL endpoint, with GraphiQL when enabled."""
    return GraphQLRouter(
        schema,
        graphql_ide="graphiql" if settings.graphiql else None,
        context_getter=get_context,
    )
