import json
from typing import Optional, Dict, Any, List
import logging

from .types import FileDescriptor
from .constants import (
    DEFAULT_PAGE_SIZE, RAW_QUERY_MARKERS, NAME_CONTAINS_QUERY,
    FOLDER_MIME_TYPE, DEFAULT_FILE_NAME
)
from ...exceptions.drive import (
    DriveError, DriveAuthenticationError, DrivePermissionError,
    DriveNotFoundError, DriveQueryError
)

logger = logging.getLogger(__name__)


def build_search_query(query: str) -> str:
    """
    Turn a caller query into a Drive filter expression.

    Queries containing '=' or 'contains' are taken to be filter expressions
    already and are passed through unchanged. Anything else is matched
    against file names. This is a heuristic, not a parser.

    Args:
        query: Plain text or a Drive filter expression.

    Returns:
        The filter expression to send as the 'q' parameter.
    """
    if any(marker in query for marker in RAW_QUERY_MARKERS):
        return query
    return NAME_CONTAINS_QUERY.format(query=query)


def resolve_page_size(limit: Optional[int]) -> int:
    """Falls back to the default page size when no limit (or 0) is given."""
    return limit or DEFAULT_PAGE_SIZE


def from_google_file(google_file: Dict[str, Any]) -> FileDescriptor:
    """
    Creates a FileDescriptor from a Drive API file resource, filling in
    defaults for missing fields.
    """
    return FileDescriptor(
        id=google_file.get("id") or "",
        name=google_file.get("name") or DEFAULT_FILE_NAME,
        mime_type=google_file.get("mimeType") or "",
        web_view_link=google_file.get("webViewLink") or None,
    )


def normalize_content(body: Any) -> str:
    """
    Coerce a downloaded or exported response body to a string.

    Strings pass through, bytes are decoded as UTF-8 (undecodable bytes are
    replaced) and anything else, such as a parsed JSON file, is serialized.
    """
    if isinstance(body, str):
        return body
    if isinstance(body, (bytes, bytearray)):
        return bytes(body).decode("utf-8", errors="replace")
    return json.dumps(body, default=str)


def build_folder_metadata(name: str, parent_id: Optional[str] = None) -> Dict[str, Any]:
    """
    Builds the request body for a new folder. The parent is only set when
    given; otherwise Drive places the folder in the user's root.
    """
    metadata = {
        "name": name,
        "mimeType": FOLDER_MIME_TYPE,
    }
    if parent_id:
        metadata["parents"] = [parent_id]
    return metadata


def join_parents(parents: Optional[List[str]]) -> str:
    """Formats parent ids as the comma-separated list Drive expects for removeParents."""
    return ",".join(parents or [])


def error_for_status(status: Optional[int], message: str) -> DriveError:
    """
    Maps an HTTP status from the Drive API onto the matching exception.

    Args:
        status: HTTP status code of the failed response, if any.
        message: Description of the failure.

    Returns:
        A DriveError subclass instance (not raised).
    """
    if status == 400:
        return DriveQueryError(f"Invalid request: {message}")
    elif status == 401:
        return DriveAuthenticationError(f"Authentication failed: {message}")
    elif status == 403:
        return DrivePermissionError(f"Permission denied: {message}")
    elif status == 404:
        return DriveNotFoundError(f"Not found: {message}")
    else:
        return DriveError(f"Drive API error: {message}")
