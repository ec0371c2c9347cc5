from .credentials import (
    SCOPES,
    build_credentials,
    get_drive_service,
    to_user_creds,
    to_client_creds,
    run_authorization_flow,
)

__all__ = [
    "SCOPES",
    "build_credentials",
    "get_drive_service",
    "to_user_creds",
    "to_client_creds",
    "run_authorization_flow",
]
