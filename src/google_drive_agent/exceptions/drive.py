from .base import APIError, AuthenticationError


class DriveError(APIError):
    """Base exception for Drive API errors."""
    pass


class DriveAuthenticationError(DriveError, AuthenticationError):
    """Raised when Drive credentials are rejected or cannot be refreshed."""
    pass


class DrivePermissionError(DriveError):
    """Raised when the user lacks permission for a Drive operation."""
    pass


class DriveNotFoundError(DriveError):
    """Raised when a file or folder is not found."""
    pass


class DriveQueryError(DriveError):
    """Raised when Drive rejects a request as malformed, e.g. a bad filter expression."""
    pass
