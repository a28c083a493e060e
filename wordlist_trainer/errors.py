"""Exceptions raised by the learning engine and its storage."""
from __future__ import annotations


class NoContentError(Exception):
    """The word list has no words to practice."""

    def __init__(self, list_id: str | None = None):
        self.list_id = list_id
        msg = "No words found in this list"
        if list_id is not None:
            msg = f"No words found in list {list_id}"
        super().__init__(msg)


class StorageError(Exception):
    """A fetch or persist call to the word store failed."""


class InvariantViolation(Exception):
    """A generated question does not have 4 distinct options containing the answer."""


class SessionStateError(Exception):
    """An operation was attempted that the session's state does not allow."""


class SessionCompletedError(SessionStateError):
    """The session has no more questions to serve."""
