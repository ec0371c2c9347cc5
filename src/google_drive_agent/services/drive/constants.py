# MIME types
GOOGLE_DOCS_MIME_TYPE = "application/vnd.google-apps.document"
FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"
PLAIN_TEXT_MIME_TYPE = "text/plain"

# Search
DEFAULT_PAGE_SIZE = 10
RAW_QUERY_MARKERS = ("=", "contains")
NAME_CONTAINS_QUERY = "name contains '{query}'"

# Partial response field masks
SEARCH_FIELDS = "files(id, name, mimeType, webViewLink)"
MIME_TYPE_FIELDS = "mimeType"
FOLDER_FIELDS = "id, webViewLink"
PARENTS_FIELDS = "parents"
MOVE_FIELDS = "id, parents"

# Defaults returned to callers; callers may depend on the literal values
DEFAULT_FILE_NAME = "Untitled"
READ_ERROR_MESSAGE = (
    "Error reading file content. It might be a binary file or require different permissions."
)
