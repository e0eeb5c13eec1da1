"""Feed endpoints shared by member posts and organization posts.

``build_feed_router`` produces the same set of routes for each ``PostKind``:
posts, their reactions and reactors, and comments with comment reactions.
"""

from typing import Any

from fastapi import APIRouter, HTTPException, Query, Response, status

from onerfp.api.v1.dependencies import (
    CurrentUserDep,
    OptionalUserDep,
    SessionDep,
    service_errors,
)
from onerfp.schemas import (
    CommentCreate,
    CommentResponse,
    CommentUpdate,
    PostCreate,
    PostResponse,
    PostUpdate,
    ReactionCreate,
    ReactionState,
    Reactor,
)
from onerfp.schemas.reaction import ReactionType
from onerfp.services import comments as comment_service
from onerfp.services import posts as post_service
from onerfp.services import reactions, social
from onerfp.services.feed_tables import PostKind, ReactionTarget


def _state(value: Any) -> ReactionState:
    return ReactionState.model_validate(value, from_attributes=True)


def build_feed_router(kind: PostKind, prefix: str, tag: str) -> APIRouter:
    """Return a router exposing the feed API for one post kind."""
    router = APIRouter(prefix=prefix, tags=[tag])

    # Comment routes are registered first so /comments/... never reaches /{post_id}.

    @router.patch("/comments/{comment_id}", response_model=CommentResponse)
    async def edit_comment(
        comment_id: int,
        payload: CommentUpdate,
        current_user: CurrentUserDep,
        db: SessionDep,
    ) -> Any:
        """Edit a comment; only its author may do so."""
        changes = payload.model_dump(exclude_unset=True)
        with service_errors():
            return comment_service.edit_comment(db, kind, comment_id, current_user, changes)

    @router.delete("/comments/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_comment(
        comment_id: int,
        current_user: CurrentUserDep,
        db: SessionDep,
    ) -> Response:
        with service_errors():
            comment_service.delete_comment(db, kind, comment_id, current_user)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @router.post("/comments/{comment_id}/reactions", response_model=ReactionState)
    async def react_to_comment(
        comment_id: int,
        payload: ReactionCreate,
        current_user: CurrentUserDep,
        db: SessionDep,
    ) -> ReactionState:
        with service_errors():
            state = reactions.react(
                db, kind, ReactionTarget.COMMENT, comment_id, current_user.id, payload.reaction_type
            )
        return _state(state)

    @router.get("/comments/{comment_id}/reactions", response_model=ReactionState)
    async def read_comment_reactions(
        comment_id: int,
        viewer: OptionalUserDep,
        db: SessionDep,
    ) -> ReactionState:
        with service_errors():
            comment_service.get_comment(db, kind, comment_id)
        state = reactions.reaction_state(
            db, kind, ReactionTarget.COMMENT, comment_id, viewer.id if viewer else None
        )
        return _state(state)

    @router.get("/comments/{comment_id}/reactors", response_model=list[Reactor])
    async def list_comment_reactors(
        comment_id: int,
        db: SessionDep,
        reaction_type: ReactionType | None = Query(None),
    ) -> list[Reactor]:
        with service_errors():
            comment_service.get_comment(db, kind, comment_id)
        rows = reactions.list_reactors(
            db, kind, ReactionTarget.COMMENT, comment_id, reaction_type
        )
        return [Reactor.model_validate(row, from_attributes=True) for row in rows]

    # Posts

    @router.get("/", response_model=list[PostResponse])
    async def list_posts(
        db: SessionDep,
        viewer: OptionalUserDep,
        limit: int = Query(20, ge=1, le=100, description="Maximum number of posts to return"),
        before_id: int | None = Query(None, description="Return posts older than this id"),
        organization_id: int | None = Query(None, description="Only this organization's posts"),
        following: bool = Query(False, description="Only posts by profiles the caller follows"),
    ) -> list[Any]:
        """List posts newest first with cursor pagination."""
        author_ids = None
        if following:
            if viewer is None:
                raise HTTPException(
                    status_code=status.HTTP_401_UNAUTHORIZED,
                    detail="Could not validate credentials",
                )
            author_ids = social.following_ids(db, viewer.id) | {viewer.id}
        return post_service.list_posts(
            db,
            kind,
            limit=limit,
            before_id=before_id,
            organization_id=organization_id,
            author_ids=author_ids,
        )

    @router.post("/", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
    async def create_post(
        payload: PostCreate,
        current_user: CurrentUserDep,
        db: SessionDep,
    ) -> Any:
        with service_errors():
            return post_service.create_post(
                db,
                kind,
                current_user,
                content=payload.content,
                image_urls=payload.image_urls,
                tags=payload.tags,
                organization_id=payload.organization_id,
                mentions=[mention.model_dump() for mention in payload.mentions],
            )

    @router.get("/{post_id}", response_model=PostResponse)
    async def read_post(post_id: int, db: SessionDep) -> Any:
        with service_errors():
            return post_service.get_post(db, kind, post_id)

    @router.patch("/{post_id}", response_model=PostResponse)
    async def update_post(
        post_id: int,
        payload: PostUpdate,
        current_user: CurrentUserDep,
        db: SessionDep,
    ) -> Any:
        with service_errors():
            return post_service.update_post(
                db, kind, post_id, current_user, payload.model_dump(exclude_unset=True)
            )

    @router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_post(
        post_id: int,
        current_user: CurrentUserDep,
        db: SessionDep,
    ) -> Response:
        with service_errors():
            post_service.delete_post(db, kind, post_id, current_user)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @router.post("/{post_id}/reactions", response_model=ReactionState)
    async def react_to_post(
        post_id: int,
        payload: ReactionCreate,
        current_user: CurrentUserDep,
        db: SessionDep,
    ) -> ReactionState:
        """Toggle or switch the caller's reaction on a post."""
        with service_errors():
            state = reactions.react(
                db, kind, ReactionTarget.POST, post_id, current_user.id, payload.reaction_type
            )
        return _state(state)

    @router.get("/{post_id}/reactions", response_model=ReactionState)
    async def read_post_reactions(
        post_id: int,
        viewer: OptionalUserDep,
        db: SessionDep,
    ) -> ReactionState:
        with service_errors():
            post_service.get_post(db, kind, post_id)
        state = reactions.reaction_state(
            db, kind, ReactionTarget.POST, post_id, viewer.id if viewer else None
        )
        return _state(state)

    @router.get("/{post_id}/reactors", response_model=list[Reactor])
    async def list_post_reactors(
        post_id: int,
        db: SessionDep,
        reaction_type: ReactionType | None = Query(None),
    ) -> list[Reactor]:
        with service_errors():
            post_service.get_post(db, kind, post_id)
        rows = reactions.list_reactors(db, kind, ReactionTarget.POST, post_id, reaction_type)
        return [Reactor.model_validate(row, from_attributes=True) for row in rows]

    @router.get("/{post_id}/comments", response_model=list[CommentResponse])
    async def list_comments(post_id: int, db: SessionDep) -> list[Any]:
        with service_errors():
            return comment_service.list_comments(db, kind, post_id)

    @router.post(
        "/{post_id}/comments",
        response_model=CommentResponse,
        status_code=status.HTTP_201_CREATED,
    )
    async def add_comment(
        post_id: int,
        payload: CommentCreate,
        current_user: CurrentUserDep,
        db: SessionDep,
    ) -> Any:
        with service_errors():
            return comment_service.add_comment(
                db,
                kind,
                post_id,
                current_user,
                content=payload.content,
                image_urls=payload.image_urls,
                mentions=[mention.model_dump() for mention in payload.mentions],
            )

    return router


router = build_feed_router(PostKind.MEMBER, "/posts", "posts")
organization_posts_router = build_feed_router(
    PostKind.ORGANIZATION, "/organization-posts", "organization-posts"
)
