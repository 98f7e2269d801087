"""
Console exceptions

Every failure of a core operation is one of these. None of them leave
partial state behind except PersistenceError, where the store decides.
"""


class ConsoleError(Exception):
    """Base exception for all console errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ConsoleError):
    """Input rejected before any mutation (missing field, duplicate, bad CSV)."""
    pass


class DuplicateExtensionError(ValidationError):
    """Extension already held by an active or pending user of the company."""

    def __init__(self, extension: str):
        super().__init__(f"Extension {extension} is already used in this company.")
        self.extension = extension


class InvalidStateError(ValidationError):
    """User lifecycle transition attempted from the wrong status."""

    def __init__(self, action: str, status: str):
        super().__init__(f"Cannot {action} user in status: {status}")
        self.action = action
        self.status = status


class CsvImportError(ValidationError):
    """CSV upload is empty or lacks the required columns."""
    pass


class EditorAccountExistsError(ValidationError):
    """User already has an editor login."""

    def __init__(self):
        super().__init__("Editor account already exists.")


class NotFoundError(ConsoleError):
    """Company, user or account does not exist."""
    pass


class AuthorizationError(ConsoleError):
    """Acting session may not perform the requested action."""
    pass


class PersistenceError(ConsoleError):
    """
    Store unreachable or write rejected.

    Carries a generic message for the caller. The driver exception is
    chained and logged by the raiser.
    """

    def __init__(self, message: str = "Operation failed. Please try again."):
        super().__init__(message)
