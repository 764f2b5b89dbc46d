"""Error taxonomy shared by controllers and routes.

Every failure is terminal for the action that triggered it: nothing is
retried, and the HTTP layer turns each class into an error envelope so the
caller can simply re-submit.
"""
from typing import Iterable, Optional


class EventEyeError(Exception):
    status_code = 500
    title = "Request failed"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(EventEyeError):
    """An expected row is missing, e.g. a profile without its extension."""
    status_code = 404
    title = "Not found"


class ValidationError(EventEyeError):
    """Required input is missing. Raised before any write is issued."""
    status_code = 422
    title = "Validation failed"

    def __init__(self, message: str, fields: Iterable[str] = ()):
        super().__init__(message)
        self.fields = list(fields)


class BackendError(EventEyeError):
    """Any failure reported by the store or the auth service."""
    status_code = 400
    title = "Backend error"


class PartialUpdateError(BackendError):
    """A multi-step write stopped half way. Earlier steps stay committed."""
    status_code = 500
    title = "Partial update"

    def __init__(self, message: str, failed_step: str, completed_steps: Iterable[str] = ()):
        super().__init__(message)
        self.failed_step = failed_step
        self.completed_steps = list(completed_steps)


class AuthError(EventEyeError):
    status_code = 401
    title = "Not authenticated"


class PermissionDeniedError(EventEyeError):
    status_code = 403
    title = "Forbidden"


class MutationInProgressError(EventEyeError):
    status_code = 409
    title = "Busy"


# substring -> user facing text
KNOWN_MESSAGES = (
    ("already registered", "An account with this email already exists. Please sign in instead."),
    ("Invalid login credentials", "Invalid email or password. Please try again."),
    ("UNIQUE constraint", "This record already exists."),
    ("duplicate key", "This record already exists."),
)


def friendly_message(error: Optional[BaseException], action: Optional[str] = None) -> str:
    """Map a raw backend message onto something a user can act on.

    Unrecognised messages become "Failed to <action>", or stay as they are
    when no action is given.
    """
    raw = getattr(error, "message", None) or (str(error) if error else "")
    for needle, text in KNOWN_MESSAGES:
        if needle.lower() in raw.lower():
            return text
    return f"Failed to {action}" if action else raw
