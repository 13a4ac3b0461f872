"""Module: errors."""

from __future__ import annotations


class ConsoleError(Exception):
    """Base class for every error the console raises on purpose."""

    status_code = 500
    detail = "Unexpected console error."

    def __init__(self, detail: str | None = None):
        super().__init__(detail or self.detail)
        if detail:
            self.detail = detail


class BackendError(ConsoleError):
    """A call to the external admin backend failed."""

    status_code = 502

    def __init__(self, table: str, operation: str, detail: str | None = None):
        self.table = table
        self.operation = operation
        super().__init__(detail)


class FetchError(BackendError):
    # Page-level failure: the whole view load is abandoned.
    detail = "Failed to fetch records."


class MutationError(BackendError):
    # Create/update/delete/toggle/notify failure; nothing was changed locally.
    detail = "Operation failed. Please try again."


class RecordNotFound(ConsoleError):
    status_code = 404
    detail = "Record not found"


class SlotToggleInProgress(ConsoleError):
    status_code = 409
    detail = "This slot is already being updated. Please wait."


class SlotPolicyError(ConsoleError):
    status_code = 409
    detail = "This date is blocked for the whole day."
