"""Service-level tests for reactions, comments and counter procedures."""

from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from onerfp.models import PostLike
from onerfp.services import comments, procedures, reactions
from onerfp.services.errors import NotFoundError, ValidationError
from onerfp.services.feed_tables import FEED_TABLES, PostKind, ReactionTarget, tables_for


def test_registry_covers_both_kinds() -> None:
    assert set(FEED_TABLES) == set(PostKind)
    assert tables_for("organization").post_fk == "organization_post_id"
    member = tables_for(PostKind.MEMBER)
    assert member.reaction_model(ReactionTarget.POST) is PostLike
    assert member.reaction_fk_name(ReactionTarget.COMMENT) == "comment_id"


def test_switching_reaction_keeps_one_row(db_session, test_post, test_user) -> None:
    reactions.react(
        db_session, PostKind.MEMBER, ReactionTarget.POST, test_post.id, test_user.id, "love"
    )
    state = reactions.react(
        db_session, PostKind.MEMBER, ReactionTarget.POST, test_post.id, test_user.id, "like"
    )
    assert state.total_count == 1
    assert [(item.type, item.count) for item in state.summary] == [("like", 1)]
    assert db_session.query(PostLike).filter(PostLike.post_id == test_post.id).count() == 1


def test_legacy_null_reaction_reads_as_like(db_session, test_post, test_user) -> None:
    db_session.add(PostLike(post_id=test_post.id, user_id=test_user.id, reaction_type=None))
    db_session.flush()

    state = reactions.reaction_state(
        db_session, PostKind.MEMBER, ReactionTarget.POST, test_post.id, test_user.id
    )
    assert state.selected_reaction == "like"
    likers = reactions.list_reactors(
        db_session, PostKind.MEMBER, ReactionTarget.POST, test_post.id, "like"
    )
    assert [r.user_id for r in likers] == [test_user.id]

    # Reacting "like" again removes the legacy row.
    state = reactions.react(
        db_session, PostKind.MEMBER, ReactionTarget.POST, test_post.id, test_user.id, "like"
    )
    assert state.total_count == 0


def test_react_rejects_unknown_type(db_session, test_post, test_user) -> None:
    with pytest.raises(ValidationError):
        reactions.react(
            db_session, PostKind.MEMBER, ReactionTarget.POST, test_post.id, test_user.id, "wow"
        )


def test_react_to_missing_comment(db_session, test_user) -> None:
    with pytest.raises(NotFoundError):
        reactions.react(
            db_session, PostKind.ORGANIZATION, ReactionTarget.COMMENT, 42, test_user.id
        )


def test_failed_counter_refresh_does_not_undo_reaction(db_session, test_post, test_user) -> None:
    failing = MagicMock(side_effect=OperationalError("UPDATE", {}, Exception("locked")))
    failing.__name__ = "update_post_likes_count"
    with patch.object(procedures, "update_post_likes_count", failing), \
            patch.object(db_session, "rollback") as rollback:
        state = reactions.react(
            db_session, PostKind.MEMBER, ReactionTarget.POST, test_post.id, test_user.id
        )
    failing.assert_called_once_with(db_session, test_post.id)
    rollback.assert_called_once()
    assert state.total_count == 1
    assert state.selected_reaction == "like"


def test_run_best_effort_logs_failures(caplog) -> None:
    db = MagicMock()
    procedure = MagicMock(side_effect=OperationalError("UPDATE", {}, Exception("boom")))
    procedure.__name__ = "update_organization_post_comments_count"

    with caplog.at_level("WARNING", logger="onerfp.services.procedures"):
        procedures.run_best_effort(db, procedure, 5)

    db.rollback.assert_called_once()
    assert "update_organization_post_comments_count" in caplog.text


def test_counter_procedures_recount(db_session, org_post, test_user, other_user) -> None:
    for user in (test_user, other_user):
        comments.add_comment(db_session, PostKind.ORGANIZATION, org_post.id, user, content="hi")
    org_post.comments_count = 99
    db_session.flush()

    assert procedures.update_organization_post_comments_count(db_session, org_post.id) == 2
    assert org_post.comments_count == 2


def test_organization_comment_delete_refreshes_counter_once(
    db_session, org_post, test_user
) -> None:
    comment = comments.add_comment(
        db_session, PostKind.ORGANIZATION, org_post.id, test_user, content="<p>Great</p>"
    )
    with patch(
        "onerfp.services.procedures.update_organization_post_comments_count"
    ) as refresh:
        comments.delete_comment(db_session, PostKind.ORGANIZATION, comment.id, test_user)
    refresh.assert_called_once_with(db_session, org_post.id)


def test_member_comment_counter_is_transactional(db_session, test_post, test_user) -> None:
    with patch("onerfp.services.procedures.run_best_effort") as best_effort:
        comment = comments.add_comment(
            db_session, PostKind.MEMBER, test_post.id, test_user, content="first"
        )
    best_effort.assert_not_called()
    assert test_post.comments_count == 1

    comments.delete_comment(db_session, PostKind.MEMBER, comment.id, test_user)
    assert test_post.comments_count == 0


def test_edit_comment_sets_updated_at(db_session, test_post, test_user) -> None:
    comment = comments.add_comment(
        db_session, PostKind.MEMBER, test_post.id, test_user, content="draft"
    )
    created = comment.updated_at
    edited = comments.edit_comment(
        db_session, PostKind.MEMBER, comment.id, test_user, {"mentions": []}
    )
    assert edited.content == "draft"
    assert edited.mentions is None
    assert edited.updated_at >= created
