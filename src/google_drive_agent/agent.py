"""
Registers the Drive operations with a function registry for the agent host.

The host framework itself (transport, lifecycle) is external: it receives an
``AgentSession`` and dispatches remote calls through its registry.
"""

import logging
from dataclasses import dataclass, field
from typing import Union

from .config import DEFAULT_SERVICE_NAME
from .registry import FunctionRegistry
from .schemas import (
    SearchFilesInput, SearchFilesOutput,
    ReadFileContentInput, ReadFileContentOutput,
    CreateFolderInput, CreateFolderOutput,
    MoveFileInput, MoveFileOutput,
)
from .services.drive import DriveService, AsyncDriveService

logger = logging.getLogger(__name__)


@dataclass
class AgentSession:
    """A named set of functions ready to be handed to the agent host."""
    service_name: str
    registry: FunctionRegistry = field(default_factory=FunctionRegistry)


def register_drive_functions(registry: FunctionRegistry, service: Union[DriveService, AsyncDriveService]) -> None:
    """
    Registers searchFiles, readFileContent, createFolder and moveFile.
    Works with the sync and the async service; async handlers are awaited
    by FunctionRegistry.ainvoke.
    """
    registry.register(
        "searchFiles",
        lambda args: service.search_files(args.query, args.limit),
        description="Search for files in Google Drive.",
        input_schema=SearchFilesInput,
        output_schema=SearchFilesOutput,
    )
    registry.register(
        "readFileContent",
        lambda args: service.read_file_content(args.fileId),
        description="Read the text content of a file (Google Docs or plain text) for summarization or analysis.",
        input_schema=ReadFileContentInput,
        output_schema=ReadFileContentOutput,
    )
    registry.register(
        "createFolder",
        lambda args: service.create_folder(args.name, args.parentId),
        description="Create a new folder in Google Drive.",
        input_schema=CreateFolderInput,
        output_schema=CreateFolderOutput,
    )
    registry.register(
        "moveFile",
        lambda args: service.move_file(args.fileId, args.folderId),
        description="Move a file to a different folder.",
        input_schema=MoveFileInput,
        output_schema=MoveFileOutput,
    )


def build_session(service: Union[DriveService, AsyncDriveService],
                  service_name: str = DEFAULT_SERVICE_NAME) -> AgentSession:
    """
    Build an AgentSession exposing the Drive operations of ``service``.

    Args:
        service: A DriveService or AsyncDriveService.
        service_name: Name the agent host shows for this service.

    Returns:
        AgentSession with all Drive functions registered.
    """
    session = AgentSession(service_name=service_name)
    register_drive_functions(session.registry, service)
    logger.info("Registered %d functions for service %s", len(session.registry), service_name)
    return session
