"""Remote sync API request/response schemas

Bodies mirror what the editor front end sends:
    fetch:   {host, port?, username, password, path?, protocol?}
    publish: the same plus files: [{name, content}]
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr


class RemoteFileSchema(BaseModel):
    """A text file exchanged with the remote tree"""
    name: str = Field(..., description="Path relative to the remote root, without leading slash")
    content: str = Field(..., description="File content as text")

    model_config = ConfigDict(from_attributes=True)


class RemoteCredentialsRequest(BaseModel):
    """Connection parameters shared by fetch and publish.

    host and protocol are validated by the service so that a missing host
    or unknown protocol is reported as a 400 before any connection attempt.
    """
    host: str = Field("", description="Remote hostname (required)")
    port: Optional[int] = Field(None, ge=0, le=65535, description="Remote port; default 21 (FTP) or 22 (SFTP)")
    username: str = Field("", description="Login name")
    password: SecretStr = Field(SecretStr(""), description="Login password")
    path: Optional[str] = Field(None, description="Remote base directory (default '/')")
    protocol: Optional[str] = Field(None, description="'ftp' or 'sftp'; inferred from port when omitted")


class FetchRequest(RemoteCredentialsRequest):
    """Request body for POST /ftp"""
    pass


class PublishRequest(RemoteCredentialsRequest):
    """Request body for PUT /ftp"""
    files: List[RemoteFileSchema] = Field(default_factory=list, description="Files to write under path")


class FetchResponse(BaseModel):
    """Response for a successful fetch"""
    ok: bool = True
    files: List[RemoteFileSchema] = Field(..., description="Fetched files in visit order")


class PublishedFileResponse(BaseModel):
    """Outcome for one published file"""
    name: str
    remote_path: str
    ok: bool
    error: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class DirectoryResultResponse(BaseModel):
    """Outcome for one ancestor directory"""
    path: str
    status: str = Field(..., description="existed | created | failed")
    error: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class PublishResponse(BaseModel):
    """Response for publish (also used when some files failed)"""
    ok: bool
    error: Optional[str] = None
    files: List[PublishedFileResponse] = Field(default_factory=list)
    directories: List[DirectoryResultResponse] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Error body shared by all sync endpoints"""
    ok: bool = False
    error: str = Field(..., description="Human-readable error message")
    details: Optional[List[dict]] = Field(None, description="Field-level validation details")
