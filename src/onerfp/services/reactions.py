"""Typed reactions on posts and comments.

A user holds at most one reaction per entity. Reacting with the type already
selected removes the reaction; any other type replaces it in place.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from onerfp.models import DEFAULT_REACTION, REACTION_TYPES, Profile

from . import procedures
from .errors import NotFoundError, ValidationError
from .feed_tables import PostKind, ReactionTarget, tables_for


@dataclass
class ReactionSummaryItem:
    type: str
    count: int


@dataclass
class ReactionState:
    selected_reaction: str | None
    total_count: int
    summary: list[ReactionSummaryItem] = field(default_factory=list)


@dataclass
class Reactor:
    user_id: str
    full_name: str
    avatar_url: str | None
    title: str | None
    organization_name: str | None
    role: str | None
    reaction_type: str
    created_at: datetime


def _type_of(row: Any) -> str:
    return row.reaction_type or DEFAULT_REACTION


def _order_key(item: ReactionSummaryItem) -> tuple[int, int]:
    try:
        rank = REACTION_TYPES.index(item.type)
    except ValueError:
        rank = len(REACTION_TYPES)
    return (-item.count, rank)


def _summarize(rows: list[Any]) -> list[ReactionSummaryItem]:
    counts = Counter(_type_of(row) for row in rows)
    items = [ReactionSummaryItem(type=name, count=total) for name, total in counts.items()]
    return sorted(items, key=_order_key)


def _require_entity(db: Session, kind: PostKind, target: ReactionTarget, entity_id: int) -> None:
    tables = tables_for(kind)
    model = tables.post if target is ReactionTarget.POST else tables.comment
    if db.query(model.id).filter(model.id == entity_id).first() is None:
        raise NotFoundError("Post not found" if target is ReactionTarget.POST else "Comment not found")


def _rows(db: Session, kind: PostKind, target: ReactionTarget, entity_id: int) -> list[Any]:
    tables = tables_for(kind)
    model = tables.reaction_model(target)
    return db.query(model).filter(tables.reaction_fk_column(target) == entity_id).all()


def reaction_summary(
    db: Session,
    kind: PostKind,
    target: ReactionTarget,
    entity_id: int,
) -> list[ReactionSummaryItem]:
    """Per-type counts, highest first; ties follow the canonical type order."""
    return _summarize(_rows(db, kind, target, entity_id))


def reaction_state(
    db: Session,
    kind: PostKind,
    target: ReactionTarget,
    entity_id: int,
    user_id: str | None,
) -> ReactionState:
    rows = _rows(db, kind, target, entity_id)
    selected = None
    if user_id is not None:
        mine = next((row for row in rows if row.user_id == user_id), None)
        selected = _type_of(mine) if mine is not None else None
    return ReactionState(
        selected_reaction=selected,
        total_count=len(rows),
        summary=_summarize(rows),
    )


def _refresh_post_counter(db: Session, kind: PostKind, post_id: int) -> None:
    if kind is PostKind.ORGANIZATION:
        procedure = procedures.update_organization_post_likes_count
    else:
        procedure = procedures.update_post_likes_count
    procedures.run_best_effort(db, procedure, post_id)


def _existing_reaction(
    db: Session, kind: PostKind, target: ReactionTarget, entity_id: int, user_id: str
) -> Any:
    tables = tables_for(kind)
    model = tables.reaction_model(target)
    return db.query(model).filter(
        tables.reaction_fk_column(target) == entity_id,
        model.user_id == user_id,
    ).first()


def _insert_reaction(
    db: Session,
    kind: PostKind,
    target: ReactionTarget,
    entity_id: int,
    user_id: str,
    reaction_type: str,
) -> None:
    """Insert the row, or update the one a concurrent request just inserted."""
    tables = tables_for(kind)
    row = tables.reaction_model(target)(
        **{tables.reaction_fk_name(target): entity_id},
        user_id=user_id,
        reaction_type=reaction_type,
    )
    try:
        with db.begin_nested():
            db.add(row)
            db.flush()
    except IntegrityError:
        existing = _existing_reaction(db, kind, target, entity_id, user_id)
        if existing is None:
            raise
        existing.reaction_type = reaction_type
        db.add(existing)


def react(
    db: Session,
    kind: PostKind,
    target: ReactionTarget,
    entity_id: int,
    user_id: str,
    reaction_type: str = DEFAULT_REACTION,
) -> ReactionState:
    """Toggle or switch the user's reaction and return the resulting state."""
    if reaction_type not in REACTION_TYPES:
        raise ValidationError(f"Unknown reaction type: {reaction_type}")
    _require_entity(db, kind, target, entity_id)

    existing = _existing_reaction(db, kind, target, entity_id, user_id)
    if existing is not None and _type_of(existing) == reaction_type:
        db.delete(existing)
    elif existing is not None:
        existing.reaction_type = reaction_type
        db.add(existing)
    else:
        _insert_reaction(db, kind, target, entity_id, user_id, reaction_type)
    db.commit()

    if target is ReactionTarget.POST:
        _refresh_post_counter(db, kind, entity_id)

    return reaction_state(db, kind, target, entity_id, user_id)


def list_reactors(
    db: Session,
    kind: PostKind,
    target: ReactionTarget,
    entity_id: int,
    reaction_type: str | None = None,
) -> list[Reactor]:
    """Profiles that reacted, newest first; profiles without a name are skipped."""
    tables = tables_for(kind)
    model = tables.reaction_model(target)
    query = (
        db.query(model, Profile)
        .join(Profile, Profile.id == model.user_id)
        .filter(tables.reaction_fk_column(target) == entity_id)
    )
    if reaction_type is not None:
        if reaction_type == DEFAULT_REACTION:
            query = query.filter(
                or_(model.reaction_type == reaction_type, model.reaction_type.is_(None))
            )
        else:
            query = query.filter(model.reaction_type == reaction_type)

    reactors: list[Reactor] = []
    for row, profile in query.order_by(model.created_at.desc(), model.id.desc()).all():
        if not profile.full_name:
            continue
        reactors.append(
            Reactor(
                user_id=profile.id,
                full_name=profile.full_name,
                avatar_url=profile.avatar_url,
                title=profile.title,
                organization_name=profile.organization_name,
                role=profile.role,
                reaction_type=_type_of(row),
                created_at=row.created_at,
            )
        )
    return reactors
