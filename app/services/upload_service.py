# app/services/upload_service.py
import logging
import re
import uuid

from app.core.errors import ForbiddenError, ValidationError
from app.core.storage_utils import SupabaseStorage, generate_filename

logger = logging.getLogger(__name__)

# MIME type -> file extension
ALLOWED_IMAGE_CONTENT_TYPES = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}

MAX_FILES_PER_REQUEST = 10
DEFAULT_FOLDER = "images"

_FOLDER_RE = re.compile(r"^[a-z0-9][a-z0-9_-]{0,49}$")


class UploadService:
    """
    Image uploads to the public storage bucket.

    Objects are stored as `<folder>/<user_id>/<uuid>.<ext>`, so every
    object path carries its owner.
    """

    def __init__(self, storage: SupabaseStorage, max_bytes: int):
        self.storage = storage
        self.max_bytes = max_bytes

    # ----- Validation -----

    def _validate_folder(self, folder: str | None) -> str:
        folder = (folder or DEFAULT_FOLDER).strip().lower()
        if not _FOLDER_RE.match(folder):
            raise ValidationError("Invalid folder name")
        return folder

    def _validate_and_get_ext(self, content_type: str | None, file_bytes: bytes) -> str:
        """
        Validate MIME type and size.

        Raises:
            ValidationError(400): empty, too large or unsupported file.
        """
        if content_type not in ALLOWED_IMAGE_CONTENT_TYPES:
            raise ValidationError("Invalid file type. Only JPEG, PNG, and WebP are allowed.")
        if not file_bytes:
            raise ValidationError("Uploaded file is empty")
        if len(file_bytes) > self.max_bytes:
            max_mb = round(self.max_bytes / 1024 / 1024)
            raise ValidationError(f"File size exceeds maximum allowed ({max_mb}MB)")
        return ALLOWED_IMAGE_CONTENT_TYPES[content_type]

    # ----- Upload -----

    def upload(
        self,
        user_id: uuid.UUID,
        content_type: str | None,
        file_bytes: bytes,
        folder: str | None = None,
    ) -> dict[str, str]:
        """Store one image and return {url, filename}."""
        folder = self._validate_folder(folder)
        ext = self._validate_and_get_ext(content_type, file_bytes)
        filename = generate_filename(ext)
        path = f"{folder}/{user_id}/{filename}"

        url = self.storage.upload(path, file_bytes, content_type)
        logger.info("User %s uploaded %s (%d bytes)", user_id, path, len(file_bytes))
        return {"url": url, "filename": filename}

    def upload_many(
        self,
        user_id: uuid.UUID,
        files: list[tuple[str, str | None, bytes]],
        folder: str | None = None,
    ) -> dict[str, list[str]]:
        """
        Store several images.

        Args:
            files: list of (original filename, content_type, file_bytes)

        Returns:
            {urls, errors}. Invalid files are reported in `errors` and the
            rest are still stored.

        Raises:
            ValidationError(400): no files, too many files, or every file failed.
        """
        if not files:
            raise ValidationError("No files provided")
        if len(files) > MAX_FILES_PER_REQUEST:
            raise ValidationError(f"Too many files (max {MAX_FILES_PER_REQUEST})")
        folder = self._validate_folder(folder)

        urls: list[str] = []
        errors: list[str] = []
        for name, content_type, file_bytes in files:
            try:
                urls.append(self.upload(user_id, content_type, file_bytes, folder)["url"])
            except ValidationError as e:
                errors.append(f"{name}: {e.message}")

        if not urls:
            raise ValidationError("Failed to upload files: " + "; ".join(errors))
        return {"urls": urls, "errors": errors}

    # ----- Delete -----

    def delete(self, user_id: uuid.UUID, url: str) -> None:
        """
        Delete an object by its public URL.

        Raises:
            ValidationError(400): URL does not point into the bucket.
            ForbiddenError(403): object was uploaded by another user.
        """
        path = self.storage.extract_path_from_public_url(url)
        if not path:
            raise ValidationError("Invalid file URL")

        parts = path.split("/")
        if len(parts) < 3 or parts[1] != str(user_id):
            raise ForbiddenError("You can only delete your own files")

        self.storage.delete(path)
        logger.info("User %s deleted %s", user_id, path)
