import asyncio
from typing import Optional, Any, List
import logging
from contextlib import asynccontextmanager

from aiogoogle import Aiogoogle
from aiogoogle.excs import HTTPError
from google.auth.exceptions import RefreshError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials

from ...auth.credentials import (
    DRIVE_API_NAME, DRIVE_API_VERSION, build_credentials, to_user_creds, to_client_creds
)
from ...utils.log_sanitizer import sanitize_for_logging
from ...exceptions.drive import DriveError, DriveAuthenticationError
from .types import FileDescriptor, SearchResult, ReadResult, FolderCreateResult, MoveResult
from . import utils
from .constants import (
    GOOGLE_DOCS_MIME_TYPE, PLAIN_TEXT_MIME_TYPE, SEARCH_FIELDS,
    MIME_TYPE_FIELDS, FOLDER_FIELDS, PARENTS_FIELDS, MOVE_FIELDS
)

logger = logging.getLogger(__name__)


class AsyncDriveService:
    """
    Async version of DriveService built on aiogoogle.

    Same operations, same results and the same never-raise contract. The
    access token is refreshed with google-auth when missing or expired and
    handed to aiogoogle as user credentials.
    """

    def __init__(self, credentials: Credentials):
        self._credentials = credentials
        self._drive = None
        self._refresh_lock = asyncio.Lock()

    @classmethod
    def from_credentials(cls, client_id: str, client_secret: str, refresh_token: str) -> "AsyncDriveService":
        return cls(build_credentials(client_id, client_secret, refresh_token))

    @asynccontextmanager
    async def _session(self):
        """Yields an (aiogoogle, drive) pair with a valid access token."""
        async with self._refresh_lock:
            if not self._credentials.valid:
                logger.info("Refreshing Drive access token")
                try:
                    await asyncio.to_thread(self._credentials.refresh, Request())
                except RefreshError as e:
                    raise DriveAuthenticationError(f"Could not refresh access token: {e}") from e

        async with Aiogoogle(
                user_creds=to_user_creds(self._credentials),
                client_creds=to_client_creds(self._credentials)
        ) as aiogoogle:
            if self._drive is None:
                self._drive = await aiogoogle.discover(DRIVE_API_NAME, DRIVE_API_VERSION)
            yield aiogoogle, self._drive

    async def search_files(self, query: str, limit: Optional[int] = None) -> SearchResult:
        """Searches Drive for files matching a query (async). See DriveService.search_files."""
        q = utils.build_search_query(query)
        page_size = utils.resolve_page_size(limit)
        sanitized = sanitize_for_logging(query=q, limit=page_size)
        logger.info("Searching files with query=%s, page_size=%s (async)", sanitized['query'], sanitized['limit'])

        try:
            files = await self._list_files(q, page_size)
        except DriveError as e:
            logger.error("Error searching files (%s): %s", type(e).__name__, e)
            return SearchResult.failed()
        except Exception as e:
            logger.exception("Unexpected error searching files: %s", e)
            return SearchResult.failed()

        result = SearchResult(files=files)
        logger.info("Found %d files", len(result))
        return result

    async def read_file_content(self, file_id: str) -> ReadResult:
        """Reads the text content of a file (async). See DriveService.read_file_content."""
        logger.info("Reading content of file %s (async)", sanitize_for_logging(file_id=file_id)['file_id'])

        try:
            content = await self._fetch_content(file_id)
        except DriveError as e:
            logger.error("Error reading file (%s): %s", type(e).__name__, e)
            return ReadResult.failed()
        except Exception as e:
            logger.exception("Unexpected error reading file: %s", e)
            return ReadResult.failed()

        logger.info("Read %d characters", len(content))
        return ReadResult.succeeded(content)

    async def create_folder(self, name: str, parent_id: Optional[str] = None) -> FolderCreateResult:
        """Creates a new folder (async). See DriveService.create_folder."""
        sanitized = sanitize_for_logging(name=name, parent_id=parent_id)
        logger.info("Creating folder name=%s in parent=%s (async)",
                    sanitized['name'], sanitized['parent_id'] or "root")

        try:
            async with self._session() as (aiogoogle, drive):
                created = await self._send(
                    aiogoogle,
                    drive.files.create(json=utils.build_folder_metadata(name, parent_id), fields=FOLDER_FIELDS),
                    "creating folder"
                )
            result = FolderCreateResult.succeeded(created.get('id'), created.get('webViewLink'))
        except DriveError as e:
            logger.error("Error creating folder (%s): %s", type(e).__name__, e)
            return FolderCreateResult.failed()
        except Exception as e:
            logger.exception("Unexpected error creating folder: %s", e)
            return FolderCreateResult.failed()

        logger.info("Folder created successfully with ID: %s",
                    sanitize_for_logging(folder_id=result.folder_id)['folder_id'])
        return result

    async def move_file(self, file_id: str, folder_id: str) -> MoveResult:
        """
        Moves a file into a folder (async). Two requests, not atomic; see
        DriveService.move_file.
        """
        sanitized = sanitize_for_logging(file_id=file_id, folder_id=folder_id)
        logger.info("Moving file %s to folder %s (async)", sanitized['file_id'], sanitized['folder_id'])

        try:
            async with self._session() as (aiogoogle, drive):
                current = await self._send(
                    aiogoogle, drive.files.get(fileId=file_id, fields=PARENTS_FIELDS), "getting file parents"
                )
                logger.debug("Removing previous parents %s",
                             sanitize_for_logging(parents=current.get('parents') or [])['parents'])
                await self._send(
                    aiogoogle,
                    drive.files.update(
                        fileId=file_id,
                        addParents=folder_id,
                        removeParents=utils.join_parents(current.get('parents')),
                        fields=MOVE_FIELDS
                    ),
                    "updating file parents"
                )
        except DriveError as e:
            logger.error("Error moving file (%s): %s", type(e).__name__, e)
            return MoveResult.failed()
        except Exception as e:
            logger.exception("Unexpected error moving file: %s", e)
            return MoveResult.failed()

        logger.info("File moved successfully")
        return MoveResult.succeeded()

    async def _list_files(self, q: str, page_size: int) -> List[FileDescriptor]:
        async with self._session() as (aiogoogle, drive):
            response = await self._send(
                aiogoogle, drive.files.list(q=q, pageSize=page_size, fields=SEARCH_FIELDS), "searching files"
            )
        return [utils.from_google_file(f) for f in response.get('files') or []]

    async def _fetch_content(self, file_id: str) -> str:
        async with self._session() as (aiogoogle, drive):
            metadata = await self._send(
                aiogoogle, drive.files.get(fileId=file_id, fields=MIME_TYPE_FIELDS), "getting file metadata"
            )

            if metadata.get('mimeType') == GOOGLE_DOCS_MIME_TYPE:
                request = drive.files.export(fileId=file_id, mimeType=PLAIN_TEXT_MIME_TYPE)
            else:
                request = drive.files.get(fileId=file_id, alt='media')

            body = await self._send(aiogoogle, request, "downloading file content")
        return utils.normalize_content(body)

    @staticmethod
    async def _send(aiogoogle: Any, request: Any, action: str) -> Any:
        """Sends a prepared request as the user, translating failures into DriveError."""
        try:
            return await aiogoogle.as_user(request)
        except HTTPError as e:
            status = getattr(e.res, 'status_code', None)
            raise utils.error_for_status(status, f"{action}: {e}") from e
        except Exception as e:
            raise DriveError(f"Unexpected error {action}: {e}") from e
