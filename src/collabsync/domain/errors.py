"""Error taxonomy shared by the dispatcher, the run guard and the adapters."""

from __future__ import annotations


class CollabSyncError(Exception):
    """Base class for every error raised by collabsync."""


class ValidationError(CollabSyncError):
    """Local validation failed; nothing was sent to the remote side."""


class MissingAddressbookError(ValidationError):
    def __init__(self) -> None:
        super().__init__("Address book is required")


class MissingNameError(ValidationError):
    def __init__(self) -> None:
        super().__init__("Address book's name is required")


class UnclassifiableDescriptorError(CollabSyncError):
    """The descriptor has no shape that maps to a remote operation."""

    def __init__(self, message: str, *, descriptor: object = None) -> None:
        super().__init__(message)
        self.descriptor = descriptor


class RemoteRejectedError(CollabSyncError):
    """The remote operation settled with a failure."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        payload: object = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


class NotManagerError(CollabSyncError):
    """Only managers of a collaboration may invite users into it."""
