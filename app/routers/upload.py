# app/routers/upload.py
from fastapi import APIRouter, Depends, File, Query, UploadFile, status

from app.core.auth import require_auth
from app.core.config import Settings
from app.core.deps import get_app_settings, get_storage
from app.core.storage_utils import SupabaseStorage
from app.models.user import User
from app.schemas.common import ApiResponse, ok
from app.schemas.upload import MultiUploadRead, UploadRead
from app.services.upload_service import DEFAULT_FOLDER, UploadService

router = APIRouter(prefix="/upload", tags=["Upload"])


def get_upload_service(
    storage: SupabaseStorage = Depends(get_storage),
    settings: Settings = Depends(get_app_settings),
) -> UploadService:
    return UploadService(storage, settings.MAX_UPLOAD_BYTES)


@router.post(
    "",
    response_model=ApiResponse[UploadRead],
    status_code=status.HTTP_201_CREATED,
)
def upload_file(
    file: UploadFile = File(...),
    folder: str = Query(default=DEFAULT_FOLDER, max_length=50),
    service: UploadService = Depends(get_upload_service),
    current_user: User = Depends(require_auth),
):
    """
    Upload a single image (JPEG, PNG, WEBP).

    Returns the public URL of the stored file.
    """
    file_bytes = file.file.read()
    result = service.upload(current_user.id, file.content_type, file_bytes, folder)
    return ok(result, "File uploaded successfully")


@router.post(
    "/multiple",
    response_model=ApiResponse[MultiUploadRead],
    status_code=status.HTTP_201_CREATED,
)
def upload_multiple_files(
    files: list[UploadFile] = File(...),
    folder: str = Query(default=DEFAULT_FOLDER, max_length=50),
    service: UploadService = Depends(get_upload_service),
    current_user: User = Depends(require_auth),
):
    """
    Upload up to 10 images at once.

    Invalid files are skipped and listed in `errors`.
    """
    payload = [(f.filename or "file", f.content_type, f.file.read()) for f in files]
    result = service.upload_many(current_user.id, payload, folder)
    return ok(result, f"{len(result['urls'])} file(s) uploaded successfully")


@router.delete("", response_model=ApiResponse[None])
def delete_file(
    url: str = Query(..., min_length=1),
    service: UploadService = Depends(get_upload_service),
    current_user: User = Depends(require_auth),
):
    service.delete(current_user.id, url)
    return ok(None, "File deleted successfully")
