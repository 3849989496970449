"""Unit tests for comments and comment notification emails."""

from __future__ import annotations

from datetime import timedelta

import pytest

from cask.domain.model import Comment, User
from cask.service_layer.commands import AddComment, AddTasting
from cask.service_layer.errors import InvalidInputError, NotFoundError
from cask.service_layer.handlers.comment_handlers import (
    COMMENT_SUBJECT,
    build_comment_email,
    comment_url,
)

from tests.fixtures.datagen import NOW

from .base import HandlerTestBase
from .fakes import FakeMailer

# pylint: disable=attribute-defined-outside-init


class CommentTestBase(HandlerTestBase):
    """Seeds one tasting by alice on the 12 year malt."""

    seed_uses = ("mailer",)

    def _seed_bus(self, request) -> None:
        tasting = self.bus.handle(
            AddTasting(
                bottle_id=self.seed.malt_12,
                user_id=self.seed.alice,
                created_at=NOW - timedelta(hours=1),
            )
        )
        self.tasting_id = tasting.id

    def comment(self, user_id: int, text: str = "Nice notes!") -> Comment:
        return self.bus.handle(
            AddComment(tasting_id=self.tasting_id, user_id=user_id, comment=text)
        )


class TestAddComment(CommentTestBase):
    """Tests for the add_comment handler."""

    def test_adds_comment_and_bumps_counter(self):
        """The comment is stored and the tasting's counter moves."""
        comment = self.comment(self.seed.bob, "  Agreed, very honeyed.  ")

        assert comment.comment == "Agreed, very honeyed."
        assert comment.created_by_id == self.seed.bob
        assert comment.created_at == NOW
        assert self.uow.comments.get(comment.id) == comment
        assert self.uow.tastings.get(self.tasting_id).comments == 1
        self.assert_committed()

    def test_blank_comment(self):
        """Whitespace-only comments are rejected."""
        with pytest.raises(InvalidInputError, match="Comment is required"):
            self.comment(self.seed.bob, "   ")

    def test_unknown_tasting(self):
        """Commenting on a missing tasting is a client error."""
        with pytest.raises(NotFoundError, match="Could not identify tasting"):
            self.bus.handle(AddComment(tasting_id=999, user_id=self.seed.bob, comment="x"))

    def test_unknown_user(self):
        """Commenting as a missing user is a client error."""
        with pytest.raises(NotFoundError, match="Could not identify user"):
            self.comment(999)
        assert self.uow.tastings.get(self.tasting_id).comments == 0


class TestCommentNotifications(CommentTestBase):
    """Tests for the notify_comment event handler."""

    def test_author_is_notified(self):
        """Bob's comment on alice's tasting emails alice with a link to it."""
        comment = self.comment(self.seed.bob)

        mailer: FakeMailer = self.fx.mailer
        assert mailer.recipients == ["alice@example.com"]
        sent = mailer.sent[0]
        assert sent.subject == COMMENT_SUBJECT
        url = f"https://cask.example/tastings/{self.tasting_id}#c_{comment.id}"
        assert url in sent.text
        assert url in sent.html

    def test_own_comment_notifies_nobody(self):
        """Authors commenting on their own tasting trigger no email."""
        self.comment(self.seed.bob)
        self.fx.mailer.sent.clear()

        self.comment(self.seed.alice)
        assert not self.fx.mailer.sent

    def test_previous_commenters_are_notified(self):
        """Earlier commenters follow the tasting, the commenter is skipped."""
        self.comment(self.seed.bob)
        self.fx.mailer.sent.clear()

        self.comment(self.seed.carol)
        assert self.fx.mailer.recipients == ["alice@example.com", "bob@example.com"]

    def test_opted_out_users_are_skipped(self):
        """Carol commented but turned notifications off."""
        self.comment(self.seed.carol)
        self.fx.mailer.sent.clear()

        self.comment(self.seed.bob)
        assert self.fx.mailer.recipients == ["alice@example.com"]

    def test_failed_send_does_not_stop_others_or_fail_command(self, caplog):
        """A refused recipient is logged; the comment still stands."""
        self.comment(self.seed.bob)
        self.fx.mailer.sent.clear()
        self.fx.mailer.fail_for.add("alice@example.com")

        with caplog.at_level("ERROR"):
            comment = self.comment(self.seed.carol)

        assert self.uow.comments.get(comment.id) is not None
        assert self.fx.mailer.recipients == ["bob@example.com"]
        assert any("Failed to send comment" in r.getMessage() for r in caplog.records)


class TestNotificationsWithoutEmail(CommentTestBase):
    """Email not configured: comments work, nothing is sent."""

    seed_uses = ()

    @pytest.fixture
    def bus_params(self, clock):
        return {"mailer": None, "clock": clock}

    def test_comment_without_mailer(self, caplog):
        """The handler logs the skip and the command succeeds."""
        with caplog.at_level("INFO", logger="cask"):
            comment = self.comment(self.seed.bob)
        assert comment.id is not None
        assert any("Email is not configured" in r.getMessage() for r in caplog.records)


# --- rendering ----------------------------------------------------------------


def _comment(text: str = "Lovely") -> Comment:
    return Comment(id=7, tasting_id=3, created_by_id=2, comment=text, created_at=NOW)


def test_comment_url_trims_trailing_slash():
    """The link anchors the comment on its tasting page."""
    assert comment_url("https://cask.example/", _comment()) == (
        "https://cask.example/tastings/3#c_7"
    )


def test_email_names_the_commenter():
    """Display name is preferred, then username, then a placeholder."""
    url = "https://cask.example/tastings/3#c_7"
    named = User(id=2, username="bob", email="b@x", display_name="Bob B.")
    assert build_comment_email(_comment(), named, url).text.startswith("Bob B. left")
    plain = User(id=2, username="bob", email="b@x")
    assert build_comment_email(_comment(), plain, url).text.startswith("bob left")
    assert build_comment_email(_comment(), None, url).text.startswith("Someone left")


def test_email_html_is_escaped():
    """Comment text cannot inject markup into the HTML part."""
    email = build_comment_email(
        _comment("<script>alert(1)</script>"), None, "https://x/tastings/3#c_7"
    )
    assert "<script>" not in email.html
    assert "&lt;script&gt;" in email.html
    assert "<script>alert(1)</script>" in email.text
