"""Google Drive service layer exposed to the agent."""

from .api_service import DriveService
from .async_api_service import AsyncDriveService
from .types import FileDescriptor, SearchResult, ReadResult, FolderCreateResult, MoveResult

__all__ = [
    # Service layer
    "DriveService",
    "AsyncDriveService",

    # Result types
    "FileDescriptor",
    "SearchResult",
    "ReadResult",
    "FolderCreateResult",
    "MoveResult",
]
