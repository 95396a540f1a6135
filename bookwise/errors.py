"""
Domain errors raised by the services.

Every error carries a ``kind`` (NotFound / Conflict / Unauthorized /
StoreUnavailable / Validation), the HTTP status the controllers answer with
and a short message that can be shown to the user as-is.
"""

from __future__ import annotations


class LibraryError(Exception):
    kind = "Error"
    status_code = 400
    message = "Operation failed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        if message:
            self.message = message

    def to_dict(self) -> dict:
        return {"success": False, "error": self.kind, "message": self.message}


class NotFound(LibraryError):
    kind = "NotFound"
    status_code = 404
    message = "Not found"


class UserNotFound(NotFound):
    message = "User not found"


class BookNotFound(NotFound):
    message = "Book not found"


class RecordNotFound(NotFound):
    message = "No active borrow record found for this book"


class Conflict(LibraryError):
    kind = "Conflict"
    status_code = 409
    message = "Conflict"


class BookUnavailable(Conflict):
    message = "Book is not available for borrowing"


class AlreadyBorrowed(Conflict):
    message = "You have already borrowed this book"


class InvalidTransition(Conflict):
    message = "This change is not allowed in the current state"


class Unauthorized(LibraryError):
    kind = "Unauthorized"
    status_code = 403
    message = "Unauthorized"


class StoreUnavailable(LibraryError):
    kind = "StoreUnavailable"
    status_code = 503
    message = "The library database is unavailable, please try again"


class ValidationError(LibraryError):
    kind = "Validation"
    status_code = 400
    message = "Invalid request"
