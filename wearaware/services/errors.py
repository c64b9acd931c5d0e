"""Exceptions raised by the service layer."""


class InvalidScanError(ValueError):
    """Scan payload is missing the owner or the fiber composition."""


class ScanNotFoundError(LookupError):
    """Scan does not exist or belongs to another user."""


class GuestAccessError(PermissionError):
    """Operation requires a registered user."""


class UserNotFoundError(LookupError):
    """No user is registered under the given uid."""
