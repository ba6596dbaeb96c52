# pos_app/core/storage_utils.py
import httpx
from storage3.utils import StorageException

from pos_app.core.config import get_settings
from pos_app.core.errors import StoreError
from pos_app.core.supabase_client import supabase_admin


def _bucket_name() -> str:
    return get_settings().PRODUCT_IMAGE_BUCKET


def _bucket():
    return supabase_admin().storage.from_(_bucket_name())


def upload_to_storage(path: str, file_bytes: bytes, content_type: str) -> str:
    """
    Upload raw bytes to the product image bucket and return a public URL.

    If a file already exists at this path, it will be overwritten
    thanks to the 'upsert' option.

    Args:
        path: Object path inside the bucket, e.g. "<product_id>.png"
        file_bytes: File content in bytes.
        content_type: MIME type stored with the object.

    Raises:
        StoreError if Supabase Storage rejects the upload or is unreachable.
    """
    bucket = _bucket()
    try:
        bucket.upload(
            path,
            file_bytes,
            {"upsert": "true", "content-type": content_type},
        )
        return bucket.get_public_url(path)
    except (StorageException, httpx.HTTPError) as exc:
        raise StoreError(f"Upload image failed: {exc}") from exc


def delete_from_storage(path: str) -> None:
    """
    Delete an object from the product image bucket by its path.
    """
    try:
        # The client expects a list of paths.
        _bucket().remove([path])
    except (StorageException, httpx.HTTPError) as exc:
        raise StoreError(f"Delete image failed: {exc}") from exc


def extract_path_from_public_url(url: str) -> str | None:
    """
    Given a public URL, extract the object path relative to the bucket.

    Example:
        https://<proj>.supabase.co/storage/v1/object/public/product-images/<id>.png
        -> '<id>.png'
    """
    marker = f"/storage/v1/object/public/{_bucket_name()}/"
    idx = url.find(marker)
    if idx == -1:
        return None
    path = url[idx + len(marker):].split("?", 1)[0]
    return path or None


def delete_public_url(url: str) -> None:
    """
    Convenience helper: delete a file by its public URL.
    No-op if the URL does not belong to this bucket.
    """
    path = extract_path_from_public_url(url)
    if path:
        delete_from_storage(path)


def image_path_for(product_id: str, ext: str) -> str:
    """
    Deterministic object path so a new upload replaces the old image.
    """
    return f"{product_id}.{ext}"
