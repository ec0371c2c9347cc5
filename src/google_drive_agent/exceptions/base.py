class DriveAgentError(Exception):
    """Base exception for all Drive agent errors."""
    pass


class AuthenticationError(DriveAgentError):
    """Raised when authentication fails."""
    pass


class APIError(DriveAgentError):
    """Raised when API calls fail."""
    pass


class ValidationError(DriveAgentError):
    """Raised when input or output validation fails."""
    pass


class ConfigError(DriveAgentError):
    """Raised when the process configuration cannot be loaded."""
    pass
