"""Google Drive knowledge agent: Drive operations exposed as agent functions."""

from .agent import AgentSession, build_session
from .config import AgentSettings, load_settings
from .registry import FunctionRegistry
from .services.drive import DriveService, AsyncDriveService

__all__ = [
    "AgentSession",
    "AgentSettings",
    "AsyncDriveService",
    "DriveService",
    "FunctionRegistry",
    "build_session",
    "load_settings",
]
