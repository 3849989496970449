"""Handlers for tasting comments and the email notifications they trigger."""

from __future__ import annotations

import html
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from cask.domain.events import CommentAdded
from cask.domain.model import Comment, User
from cask.interfaces.errors import MissingReferenceError
from cask.interfaces.mailer import Mailer, MailerError
from cask.interfaces.unit_of_work import AbstractUnitOfWork
from cask.service_layer import commands
from cask.service_layer.errors import InvalidInputError, NotFoundError

logger = logging.getLogger(__name__)

COMMENT_SUBJECT = "New Comment on Tasting"


@dataclass(frozen=True, slots=True)
class CommentEmail:
    """Rendered notification for one comment."""

    subject: str
    text: str
    html: str


def add_comment(
    cmd: commands.AddComment,
    uow: AbstractUnitOfWork,
    clock: Callable[[], datetime],
) -> Comment:
    """Comment on a tasting and bump its comment counter.

    Raises:
        InvalidInputError: If the comment is blank.
        NotFoundError: If the tasting or user cannot be identified.
    """
    if not (text := cmd.comment.strip()):
        raise InvalidInputError("Comment is required")

    with uow:
        if uow.tastings.get(cmd.tasting_id) is None:
            raise NotFoundError("Could not identify tasting")
        try:
            comment = uow.comments.add(cmd.tasting_id, cmd.user_id, text, clock())
        except MissingReferenceError as e:
            raise NotFoundError("Could not identify user") from e
        uow.tastings.increment_comments(cmd.tasting_id)
        uow.record(
            CommentAdded(
                comment_id=comment.id, tasting_id=cmd.tasting_id, user_id=cmd.user_id
            )
        )
        uow.commit()

    return comment


def comment_url(url_prefix: str, comment: Comment) -> str:
    """Absolute link to a comment on the web frontend."""
    return f"{url_prefix.rstrip('/')}/tastings/{comment.tasting_id}#c_{comment.id}"


def build_comment_email(comment: Comment, author: User | None, url: str) -> CommentEmail:
    """Render the notification email for ``comment``."""
    who = (author.display_name or author.username) if author else "Someone"
    text = (
        f"{who} left a comment on a tasting:\n\n"
        f"{comment.comment}\n\n"
        f"View it at {url}\n"
    )
    body = (
        f"<p>{html.escape(who)} left a comment on a tasting:</p>"
        f"<blockquote>{html.escape(comment.comment)}</blockquote>"
        f'<p><a href="{html.escape(url, quote=True)}">View Comment</a></p>'
    )
    return CommentEmail(subject=COMMENT_SUBJECT, text=text, html=body)


def notify_comment(
    event: CommentAdded, uow: AbstractUnitOfWork, mailer: Mailer | None
) -> None:
    """Email the people following a tasting about a new comment.

    Recipients are the tasting's author and everyone who commented on it
    before, minus the commenter, restricted to users who opted in to comment
    notifications. Nothing is sent when email is not configured or when the
    author comments on their own tasting. A failed send is logged and the
    remaining recipients are still attempted.
    """
    if mailer is None:
        logger.info(
            "Email is not configured; skipping notification for comment %s",
            event.comment_id,
        )
        return

    with uow:
        comment = uow.comments.get(event.comment_id)
        tasting = uow.tastings.get(event.tasting_id)
        if comment is None or tasting is None:
            logger.warning("Comment %s vanished before notification", event.comment_id)
            return
        if comment.created_by_id == tasting.created_by_id:
            logger.debug(
                "Comment %s is by the tasting's author; not notifying", comment.id
            )
            return

        follower_ids = {tasting.created_by_id} | uow.comments.commenter_ids(tasting.id)
        follower_ids.discard(comment.created_by_id)
        recipients = [u for u in uow.users.get_many(follower_ids) if u.notify_comments]
        author = uow.users.get(comment.created_by_id)

    email = build_comment_email(comment, author, comment_url(mailer.url_prefix, comment))
    for recipient in recipients:
        try:
            mailer.send(recipient.email, email.subject, email.text, email.html)
        except MailerError:
            logger.exception(
                "Failed to send comment %s notification to user %s",
                comment.id,
                recipient.id,
            )
        else:
            logger.info(
                "Sent comment %s notification to user %s", comment.id, recipient.id
            )


COMMAND_HANDLERS: dict[type, Callable[..., object]] = {
    commands.AddComment: add_comment,
}

EVENT_HANDLERS: dict[type, list[Callable[..., None]]] = {
    CommentAdded: [notify_comment],
}
