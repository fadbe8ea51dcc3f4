# app/core/storage_utils.py
import logging
import uuid

from supabase import Client

from app.core.errors import ExternalServiceError

logger = logging.getLogger(__name__)


def generate_filename(ext: str) -> str:
    """
    Generate a random filename using UUID4.

    Args:
        ext: File extension without dot (e.g. "png", "jpg")

    Returns:
        A filename like "<uuid4>.png"
    """
    return f"{uuid.uuid4()}.{ext}"


class SupabaseStorage:
    """
    Object storage for user uploads (Supabase Storage, one public bucket).

    The Supabase client is created lazily on first use so the app can
    start without storage credentials.
    """

    def __init__(self, client_factory, bucket: str):
        self._client_factory = client_factory
        self._client: Client | None = None
        self.bucket = bucket

    @property
    def client(self) -> Client:
        if self._client is None:
            try:
                self._client = self._client_factory()
            except RuntimeError as e:
                raise ExternalServiceError(str(e)) from e
        return self._client

    def upload(self, path: str, file_bytes: bytes, content_type: str) -> str:
        """
        Upload raw bytes and return the public URL.

        If a file already exists at this path, it is overwritten
        thanks to the 'upsert' option.

        Args:
            path: Full object path inside the bucket.
                  Example: "images/<user_id>/<uuid>.png"
            file_bytes: File content in bytes.
            content_type: MIME type stored with the object.

        Raises:
            ExternalServiceError: if the Supabase call fails.
        """
        bucket = self.client.storage.from_(self.bucket)
        try:
            bucket.upload(path, file_bytes, {"content-type": content_type, "upsert": "true"})
        except Exception as e:
            logger.error("Storage upload of %s failed: %s", path, e)
            raise ExternalServiceError("Failed to upload file") from e
        return bucket.get_public_url(path)

    def delete(self, path: str) -> None:
        """
        Delete a file by its object path (relative to bucket).
        """
        try:
            # Supabase Python client expects a list of paths.
            self.client.storage.from_(self.bucket).remove([path])
        except Exception as e:
            logger.error("Storage delete of %s failed: %s", path, e)
            raise ExternalServiceError("Failed to delete file") from e

    def extract_path_from_public_url(self, url: str) -> str | None:
        """
        Given a public URL, extract the object path relative to the bucket.

        Example:
            https://<proj>.supabase.co/storage/v1/object/public/assets/images/u/a.png
            -> 'images/u/a.png'
        """
        marker = f"/storage/v1/object/public/{self.bucket}/"
        idx = url.find(marker)
        if idx == -1:
            return None
        return url[idx + len(marker):].split("?", 1)[0]
