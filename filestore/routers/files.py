"""Files API: upload, list, download and delete user files."""

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, Response, UploadFile

from filestore.errors import BucketValidationError, ObjectNotFoundError, UploadError
from filestore.schemas.files import FileDescriptor, UploadOptions
from filestore.schemas.responses import ListFilesResponse, UploadResponse
from filestore.services.file_service import FileService, get_file_service
from filestore.services.mime_types import DEFAULT_MIME_TYPE

router = APIRouter(prefix="/files", tags=["Files"])


def _to_http_error(e: Exception) -> HTTPException:
    if isinstance(e, ObjectNotFoundError):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, BucketValidationError):
        return HTTPException(status_code=503, detail=str(e))
    if isinstance(e, UploadError):
        return HTTPException(status_code=502, detail=str(e))
    return HTTPException(status_code=400, detail=str(e))


@router.post(
    "",
    response_model=UploadResponse,
    status_code=201,
    summary="Upload a file",
    description="Store the file under [user_id/][directory/] and return its public URL. "
    "Public read is best effort; the URL may not be anonymously reachable.",
    operation_id="uploadFile",
)
async def upload_file(
    file: UploadFile = File(..., description="File to store"),
    user_id: str | None = Form(None, description="Owner (defaults to DEFAULT_USER_ID)"),
    directory: str | None = Form(None, description="Directory under the user prefix"),
    type: str | None = Form(None, description="Custom type stored in object metadata"),
    make_public: bool | None = Form(None, description="Grant public read (defaults to ALLOW_PUBLIC_ACCESS)"),
    service: FileService = Depends(get_file_service),
) -> UploadResponse:
    content = await file.read()
    # Multipart clients often send octet-stream for everything; fall back to the extension table then
    mime_type = file.content_type if file.content_type and file.content_type != DEFAULT_MIME_TYPE else None
    descriptor = FileDescriptor.from_bytes(file.filename or "", content, mime_type=mime_type)
    options = UploadOptions(user_id=user_id, directory=directory, type=type, make_public=make_public)
    try:
        url = await service.upload(descriptor, options)
    except (BucketValidationError, UploadError) as e:
        raise _to_http_error(e) from e
    return UploadResponse(url=url)


@router.get(
    "",
    response_model=ListFilesResponse,
    summary="List files",
    description="Files under [user_id/][directory/]; the whole bucket when neither is set and no default user exists.",
    operation_id="listFiles",
)
async def list_files(
    directory: str | None = Query(None, description="Directory under the user prefix"),
    user_id: str | None = Query(None, description="Owner (defaults to DEFAULT_USER_ID)"),
    service: FileService = Depends(get_file_service),
) -> ListFilesResponse:
    try:
        files = await service.list_files(directory=directory, user_id=user_id)
    except BucketValidationError as e:
        raise _to_http_error(e) from e
    return ListFilesResponse(files=files)


@router.get(
    "/content",
    summary="Download a file",
    description="Raw content of the object addressed by its public URL or raw key.",
    operation_id="downloadFile",
)
async def download_file(
    url: str = Query(..., description="Public URL or object key"),
    service: FileService = Depends(get_file_service),
) -> Response:
    try:
        descriptor = await service.fetch_by_url(url)
    except (ObjectNotFoundError, BucketValidationError, ValueError) as e:
        raise _to_http_error(e) from e
    return Response(
        content=descriptor.content,
        media_type=descriptor.mime_type,
        headers={"Content-Disposition": f'attachment; filename="{descriptor.file_name}"'},
    )


@router.delete(
    "",
    status_code=204,
    summary="Delete a file",
    description="Delete the object addressed by its public URL or raw key.",
    operation_id="deleteFile",
)
async def delete_file(
    url: str = Query(..., description="Public URL or object key"),
    service: FileService = Depends(get_file_service),
) -> Response:
    try:
        await service.delete(url)
    except (ObjectNotFoundError, BucketValidationError, ValueError) as e:
        raise _to_http_error(e) from e
    return Response(status_code=204)
