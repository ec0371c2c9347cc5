from .base import DriveAgentError, ValidationError


class RegistrationError(DriveAgentError):
    """Raised when a function cannot be added to the registry."""
    pass


class UnknownFunctionError(DriveAgentError):
    """Raised when a function name is not registered."""
    pass


class FunctionInputError(ValidationError):
    """Raised when call arguments do not match a function's input schema."""
    pass


class FunctionOutputError(ValidationError):
    """Raised when a handler's result does not match its output schema."""
    pass
