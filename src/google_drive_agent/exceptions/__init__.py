from .base import DriveAgentError, AuthenticationError, APIError, ValidationError, ConfigError
from .drive import (
    DriveError, DriveAuthenticationError, DrivePermissionError, DriveNotFoundError, DriveQueryError
)
from .registry import RegistrationError, UnknownFunctionError, FunctionInputError, FunctionOutputError

__all__ = [
    "DriveAgentError",
    "AuthenticationError",
    "APIError",
    "ValidationError",
    "ConfigError",
    "DriveError",
    "DriveAuthenticationError",
    "DrivePermissionError",
    "DriveNotFoundError",
    "DriveQueryError",
    "RegistrationError",
    "UnknownFunctionError",
    "FunctionInputError",
    "FunctionOutputError",
]
