from typing import Optional, Any, Dict, List
import logging
import threading

import httplib2
from google.auth.exceptions import RefreshError
from google.oauth2.credentials import Credentials
from google_auth_httplib2 import AuthorizedHttp, Request
from googleapiclient.errors import HttpError

from ...auth.credentials import build_credentials, get_drive_service
from ...utils.log_sanitizer import sanitize_for_logging
from ...exceptions.drive import DriveError, DriveAuthenticationError
from .types import FileDescriptor, SearchResult, ReadResult, FolderCreateResult, MoveResult
from . import utils
from .constants import (
    GOOGLE_DOCS_MIME_TYPE, PLAIN_TEXT_MIME_TYPE, SEARCH_FIELDS,
    MIME_TYPE_FIELDS, FOLDER_FIELDS, PARENTS_FIELDS, MOVE_FIELDS
)

logger = logging.getLogger(__name__)


class DriveService:
    """
    Service layer for the Drive operations exposed to the agent.

    Every public operation returns a structurally valid result and never
    raises: Drive failures are classified into DriveError subclasses by the
    private helpers and turned into the operation's failure value at the
    public boundary.

    httplib2 connections are not thread-safe. When credentials are given,
    every request is executed on its own authorized transport, so one
    instance can serve concurrent calls; token refreshes are serialized.
    """

    def __init__(self, service: Any, credentials: Optional[Credentials] = None):
        """
        Initialize Drive service.

        Args:
            service: The Drive API service instance
            credentials: Credentials used to authorize a fresh transport per
                request. Without them requests run on the resource's own http.
        """
        self._service = service
        self._credentials = credentials
        self._refresh_lock = threading.Lock()

    @classmethod
    def from_credentials(cls, client_id: str, client_secret: str, refresh_token: str) -> "DriveService":
        """
        Create a DriveService for the account behind a refresh token.
        Authentication problems surface on the first call, not here.
        """
        credentials = build_credentials(client_id, client_secret, refresh_token)
        return cls(get_drive_service(credentials), credentials)

    def search_files(self, query: str, limit: Optional[int] = None) -> SearchResult:
        """
        Searches Drive for files matching a query.

        Args:
            query: A Drive filter expression (e.g. "fullText contains 'budget'") or plain
                text, which is matched against file names.
            limit: Maximum number of files to return (default: 10).

        Returns:
            A SearchResult; empty when nothing matched or the search failed.
        """
        q = utils.build_search_query(query)
        page_size = utils.resolve_page_size(limit)
        sanitized = sanitize_for_logging(query=q, limit=page_size)
        logger.info("Searching files with query=%s, page_size=%s", sanitized['query'], sanitized['limit'])

        try:
            files = self._list_files(q, page_size)
        except DriveError as e:
            logger.error("Error searching files (%s): %s", type(e).__name__, e)
            return SearchResult.failed()
        except Exception as e:
            logger.exception("Unexpected error searching files: %s", e)
            return SearchResult.failed()

        result = SearchResult(files=files)
        logger.info("Found %d files", len(result))
        return result

    def read_file_content(self, file_id: str) -> ReadResult:
        """
        Reads the text content of a file.

        Google Docs are exported as plain text; any other file is downloaded
        as is. Binary formats such as PDFs or images are not converted and
        come back as undecodable text or fail.

        Args:
            file_id: The ID of the file to read.

        Returns:
            A ReadResult holding the content, or the fixed error message on failure.
        """
        logger.info("Reading content of file %s", sanitize_for_logging(file_id=file_id)['file_id'])

        try:
            content = self._fetch_content(file_id)
        except DriveError as e:
            logger.error("Error reading file (%s): %s", type(e).__name__, e)
            return ReadResult.failed()
        except Exception as e:
            logger.exception("Unexpected error reading file: %s", e)
            return ReadResult.failed()

        logger.info("Read %d characters", len(content))
        return ReadResult.succeeded(content)

    def create_folder(self, name: str, parent_id: Optional[str] = None) -> FolderCreateResult:
        """
        Creates a new folder.

        Args:
            name: Name of the folder.
            parent_id: ID of the parent folder. Defaults to the Drive root.

        Returns:
            A FolderCreateResult with the new folder's id and link.
        """
        sanitized = sanitize_for_logging(name=name, parent_id=parent_id)
        logger.info("Creating folder name=%s in parent=%s", sanitized['name'], sanitized['parent_id'] or "root")

        try:
            created = self._execute(
                self._service.files().create(
                    body=utils.build_folder_metadata(name, parent_id),
                    fields=FOLDER_FIELDS
                ),
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

    def move_file(self, file_id: str, folder_id: str) -> MoveResult:
        """
        Moves a file into a folder, detaching it from all of its current parents.

        This takes two requests: one to read the current parents and one
        update that adds the new parent and removes the old ones. The two
        are not atomic. If the parents change in between, the removal list
        is stale, and a failed update is not rolled back.

        Args:
            file_id: The ID of the file to move.
            folder_id: The ID of the destination folder.

        Returns:
            A MoveResult.
        """
        sanitized = sanitize_for_logging(file_id=file_id, folder_id=folder_id)
        logger.info("Moving file %s to folder %s", sanitized['file_id'], sanitized['folder_id'])

        try:
            self._move(file_id, folder_id)
        except DriveError as e:
            logger.error("Error moving file (%s): %s", type(e).__name__, e)
            return MoveResult.failed()
        except Exception as e:
            logger.exception("Unexpected error moving file: %s", e)
            return MoveResult.failed()

        logger.info("File moved successfully")
        return MoveResult.succeeded()

    def _list_files(self, q: str, page_size: int) -> List[FileDescriptor]:
        response = self._execute(
            self._service.files().list(q=q, pageSize=page_size, fields=SEARCH_FIELDS),
            "searching files"
        )
        return [utils.from_google_file(f) for f in response.get('files') or []]

    def _fetch_content(self, file_id: str) -> str:
        metadata = self._execute(
            self._service.files().get(fileId=file_id, fields=MIME_TYPE_FIELDS),
            "getting file metadata"
        )

        if metadata.get('mimeType') == GOOGLE_DOCS_MIME_TYPE:
            request = self._service.files().export(fileId=file_id, mimeType=PLAIN_TEXT_MIME_TYPE)
        else:
            request = self._service.files().get_media(fileId=file_id)

        return utils.normalize_content(self._execute(request, "downloading file content"))

    def _move(self, file_id: str, folder_id: str) -> Dict[str, Any]:
        current = self._execute(
            self._service.files().get(fileId=file_id, fields=PARENTS_FIELDS),
            "getting file parents"
        )
        logger.debug("Removing previous parents %s",
                     sanitize_for_logging(parents=current.get('parents') or [])['parents'])
        previous_parents = utils.join_parents(current.get('parents'))

        return self._execute(
            self._service.files().update(
                fileId=file_id,
                addParents=folder_id,
                removeParents=previous_parents,
                fields=MOVE_FIELDS
            ),
            "updating file parents"
        )

    def _execute(self, request: Any, action: str) -> Any:
        """
        Executes a prepared API request, translating failures into DriveError.

        Args:
            request: An HttpRequest built from the Drive resource.
            action: Short description of the request for error messages.

        Returns:
            The decoded response body.
        """
        try:
            if self._credentials is None:
                return request.execute()
            return request.execute(http=self._authorized_http())
        except HttpError as e:
            raise utils.error_for_status(e.resp.status, f"{action}: {e}") from e
        except RefreshError as e:
            raise DriveAuthenticationError(f"Could not refresh access token while {action}: {e}") from e
        except Exception as e:
            raise DriveError(f"Unexpected error {action}: {e}") from e

    def _authorized_http(self) -> AuthorizedHttp:
        """A new transport for one request, after making sure the access token is valid."""
        with self._refresh_lock:
            if not self._credentials.valid:
                logger.info("Refreshing Drive access token")
                self._credentials.refresh(Request(httplib2.Http()))
        return AuthorizedHttp(self._credentials, http=httplib2.Http())
