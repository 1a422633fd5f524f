from __future__ import annotations

from typing import List, Optional


class TrackCodecError(Exception):
    pass


class ValidationError(TrackCodecError, ValueError):
    """A record failed its precondition checks.

    `field` names the first failing field when the check stops early;
    `errors` lists every violation when the check collects them all.
    """

    def __init__(self, message: str, field: Optional[str] = None, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.field = field
        self.errors = list(errors) if errors else [message]


class MalformedTokenError(TrackCodecError, ValueError):
    """The token is not valid base64, or its bytes are not a JSON object."""
