from typing import Optional, List
from dataclasses import dataclass, field

from .constants import DEFAULT_FILE_NAME, READ_ERROR_MESSAGE


@dataclass
class FileDescriptor:
    """
    Represents a file or folder returned by a Drive search.
    Args:
        id: The unique identifier for the file.
        name: The name of the file.
        mime_type: The MIME type of the file.
        web_view_link: Link to view the file in Drive web interface.
    """
    id: str = ""
    name: str = DEFAULT_FILE_NAME
    mime_type: str = ""
    web_view_link: Optional[str] = None

    def to_dict(self) -> dict:
        """
        Converts the FileDescriptor instance to its exposed dictionary shape.
        Returns:
            A dictionary with id, name, mimeType and, when known, webViewLink.
        """
        result = {
            "id": self.id,
            "name": self.name,
            "mimeType": self.mime_type,
        }
        if self.web_view_link:
            result["webViewLink"] = self.web_view_link
        return result


@dataclass
class SearchResult:
    """
    Result of a file search. An empty list is also the failure value, so a
    failed search cannot be told apart from one without matches.
    """
    files: List[FileDescriptor] = field(default_factory=list)

    @classmethod
    def failed(cls) -> "SearchResult":
        return cls()

    def to_dict(self) -> dict:
        return {"files": [f.to_dict() for f in self.files]}

    def __len__(self):
        return len(self.files)


@dataclass
class ReadResult:
    """
    Result of reading a file's content.
    Args:
        content: Exported or downloaded text, or the fixed error message.
        success: Whether the content was read.
    """
    content: str
    success: bool

    @classmethod
    def succeeded(cls, content: str) -> "ReadResult":
        return cls(content=content, success=True)

    @classmethod
    def failed(cls) -> "ReadResult":
        return cls(content=READ_ERROR_MESSAGE, success=False)

    def to_dict(self) -> dict:
        return {"content": self.content, "success": self.success}


@dataclass
class FolderCreateResult:
    """
    Result of creating a folder. A failed result carries no folder id.
    """
    success: bool
    folder_id: Optional[str] = None
    web_view_link: Optional[str] = None

    @classmethod
    def succeeded(cls, folder_id: Optional[str], web_view_link: Optional[str]) -> "FolderCreateResult":
        return cls(success=True, folder_id=folder_id or None, web_view_link=web_view_link or None)

    @classmethod
    def failed(cls) -> "FolderCreateResult":
        return cls(success=False)

    def to_dict(self) -> dict:
        result = {}
        if self.folder_id:
            result["folderId"] = self.folder_id
        if self.web_view_link:
            result["webViewLink"] = self.web_view_link
        result["success"] = self.success
        return result


@dataclass
class MoveResult:
    """Result of moving a file between folders."""
    success: bool

    @classmethod
    def succeeded(cls) -> "MoveResult":
        return cls(success=True)

    @classmethod
    def failed(cls) -> "MoveResult":
        return cls(success=False)

    def to_dict(self) -> dict:
        return {"success": self.success}
