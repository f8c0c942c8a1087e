"""Remote sync API endpoints

POST /ftp pulls the text assets of a remote site; PUT /ftp pushes edited
files back. Both are stateless: credentials arrive with every request and
one connection is opened and closed per call.

Endpoints are plain functions so FastAPI runs the blocking FTP/SFTP work in
its threadpool.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from ..auth.dependencies import CurrentUser
from ..config import get_settings
from ..domain.remote import FetchedFile, PublishReport
from .schemas import (
    DirectoryResultResponse,
    ErrorResponse,
    FetchRequest,
    FetchResponse,
    PublishedFileResponse,
    PublishRequest,
    PublishResponse,
    RemoteFileSchema,
)
from .service import RemoteSyncService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ftp", tags=["Remote Sync"])

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing or invalid request fields"},
    500: {"model": ErrorResponse, "description": "Connection, listing or transfer failure"},
}


def get_sync_service() -> RemoteSyncService:
    """Dependency for the sync service (overridden in tests)."""
    return RemoteSyncService(get_settings())


def _publish_response(report: PublishReport, error: Optional[str] = None) -> PublishResponse:
    return PublishResponse(
        ok=error is None,
        error=error,
        files=[
            PublishedFileResponse(name=f.name, remote_path=f.remote_path, ok=f.ok, error=f.error)
            for f in report.files
        ],
        directories=[
            DirectoryResultResponse(path=d.path, status=d.status.value, error=d.error)
            for d in report.directories
        ],
    )


@router.post("", response_model=FetchResponse, responses=_ERROR_RESPONSES)
def fetch_remote_files(
    request: FetchRequest,
    current_user: CurrentUser,
    service: Annotated[RemoteSyncService, Depends(get_sync_service)],
):
    """Fetch the text assets (.html, .htm, .css, .js) below a remote path.

    Files that cannot be read are left out silently; a connection or
    listing failure fails the whole request.

    Example:
        curl -X POST https://api.example.com/api/ftp \\
             -H "Authorization: Bearer $TOKEN" \\
             -d '{"host": "ftp.example.com", "username": "web", "password": "...", "path": "/public_html"}'
    """
    logger.info(f"Fetch request from user_id={current_user.id}")
    credentials = service.build_credentials(
        host=request.host,
        port=request.port,
        username=request.username,
        password=request.password.get_secret_value(),
        path=request.path,
        protocol=request.protocol,
    )
    result = service.fetch(credentials)
    return FetchResponse(
        ok=True,
        files=[RemoteFileSchema(name=f.name, content=f.content) for f in result.files],
    )


@router.put("", response_model=PublishResponse, responses=_ERROR_RESPONSES)
def publish_remote_files(
    request: PublishRequest,
    current_user: CurrentUser,
    service: Annotated[RemoteSyncService, Depends(get_sync_service)],
):
    """Write files under a remote path, creating missing directories.

    Returns 200 when every file was written. When some uploads fail the
    batch still runs to the end and a 500 carries the per-file report
    (unless PUBLISH_FAIL_FAST is set, in which case the first failure aborts
    the batch with a plain error body).
    """
    logger.info(f"Publish request from user_id={current_user.id}")
    credentials = service.build_credentials(
        host=request.host,
        port=request.port,
        username=request.username,
        password=request.password.get_secret_value(),
        path=request.path,
        protocol=request.protocol,
    )
    files = [FetchedFile(name=f.name, content=f.content) for f in request.files]
    report = service.publish(credentials, files)

    if not report.ok:
        message = f"{len(report.failed)} of {len(report.files)} files failed to upload"
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_publish_response(report, error=message).model_dump(),
        )
    return _publish_response(report)
