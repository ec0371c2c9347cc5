"""
Input and output schemas of the functions exposed to the agent host.

Field names are the camelCase names callers see on the wire. Optional
output fields are left out of serialized results when they have no value.
"""

from typing import Optional, List

from pydantic import BaseModel, Field


class SearchFilesInput(BaseModel):
    query: str = Field(
        description="Search query (e.g., 'name contains \"project\"' or 'fullText contains \"budget\"')"
    )
    limit: Optional[int] = Field(default=None, description="Number of files to return (default 10)")


class FileDescriptorOutput(BaseModel):
    id: str
    name: str
    mimeType: str
    webViewLink: Optional[str] = None


class SearchFilesOutput(BaseModel):
    files: List[FileDescriptorOutput]


class ReadFileContentInput(BaseModel):
    fileId: str = Field(description="The ID of the file to read")


class ReadFileContentOutput(BaseModel):
    content: str = Field(description="Text content of the file")
    success: bool


class CreateFolderInput(BaseModel):
    name: str = Field(description="Name of the folder")
    parentId: Optional[str] = Field(default=None, description="ID of the parent folder (optional)")


class CreateFolderOutput(BaseModel):
    folderId: Optional[str] = None
    webViewLink: Optional[str] = None
    success: bool


class MoveFileInput(BaseModel):
    fileId: str = Field(description="The ID of the file to move")
    folderId: str = Field(description="The ID of the destination folder")


class MoveFileOutput(BaseModel):
    success: bool
