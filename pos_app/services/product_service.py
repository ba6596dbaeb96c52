# pos_app/services/product_service.py
import logging
import math
import uuid

from fastapi import HTTPException, status

from pos_app.core.errors import StoreError
from pos_app.core.storage_utils import (
    delete_public_url,
    image_path_for,
    upload_to_storage,
)
from pos_app.models.product import Product
from pos_app.repositories.product_repo import ProductRepository
from pos_app.schemas.product import ProductCreate, ProductPage, ProductRead, ProductUpdate

logger = logging.getLogger(__name__)


# --- Image config ---

MAX_IMAGE_BYTES = 5 * 1024 * 1024  # 5MB per image

ALLOWED_IMAGE_CONTENT_TYPES: dict[str, str] = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/gif": "gif",
}


class ProductService:
    """
    Business logic for catalog management.

    Responsibilities:
      - pagination over the catalog
      - validation beyond pydantic
      - image upload orchestration with Supabase Storage

    Deleting a product leaves historical transaction items untouched;
    reports show a placeholder name for them.
    """

    def __init__(self, repo: ProductRepository):
        self.repo = repo

    # ----- Helpers -----

    @staticmethod
    def _validate_and_get_ext(content_type: str, file_bytes: bytes) -> str:
        if content_type not in ALLOWED_IMAGE_CONTENT_TYPES:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Unsupported image type. Allowed: JPEG, PNG, WEBP, GIF.",
            )

        if not file_bytes:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Empty image file.",
            )

        if len(file_bytes) > MAX_IMAGE_BYTES:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail="Image too large (max 5MB).",
            )

        return ALLOWED_IMAGE_CONTENT_TYPES[content_type]

    # ----- Products -----

    def list_products(self, page: int = 1, page_size: int = 10) -> ProductPage:
        if page < 1:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="page must be >= 1",
            )
        if page_size < 1:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="page_size must be >= 1",
            )

        offset = (page - 1) * page_size
        products, count = self.repo.list_page(offset, page_size)
        return ProductPage(
            items=[ProductRead.model_validate(p, from_attributes=True) for p in products],
            page=page,
            page_size=page_size,
            total_count=count,
            total_pages=math.ceil(count / page_size),
        )

    def get_product(self, product_id: uuid.UUID) -> Product:
        product = self.repo.get_by_id(product_id)
        if not product:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found",
            )
        return product

    def create_product(self, payload: ProductCreate) -> Product:
        product = self.repo.create(payload.name, payload.price)
        logger.info("Product created: id=%s name=%s", product.id, product.name)
        return product

    def update_product(self, product_id: uuid.UUID, payload: ProductUpdate) -> Product:
        """
        Partial update of a product.

        Only fields present in the payload are sent to the store.
        """
        values = payload.model_dump(exclude_unset=True, exclude_none=True)
        if not values:
            return self.get_product(product_id)

        product = self.repo.update(product_id, values)
        if not product:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found",
            )
        return product

    def delete_product(self, product_id: uuid.UUID) -> None:
        product = self.get_product(product_id)
        self.repo.delete(product_id)
        logger.info("Product deleted: id=%s", product_id)

        if product.image_url:
            self._discard_image(product.image_url)

    # ----- Image -----

    def set_product_image(
        self,
        product_id: uuid.UUID,
        content_type: str,
        file_bytes: bytes,
    ) -> Product:
        """
        Upload or replace the image for a product.

        - Validates content type + size.
        - Uploads to `<product_id>.<ext>` with upsert, so re-uploading
          the same type overwrites the old object.
        - Stores the public URL on the product row.
        - Removes the previous image if it lived at another path
          (e.g. a different extension).
        """
        product = self.get_product(product_id)
        ext = self._validate_and_get_ext(content_type, file_bytes)

        url = upload_to_storage(image_path_for(str(product.id), ext), file_bytes, content_type)
        updated = self.repo.update(product.id, {"image_url": url})
        if not updated:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found",
            )

        if product.image_url and product.image_url != url:
            self._discard_image(product.image_url)
        return updated

    @staticmethod
    def _discard_image(url: str) -> None:
        # The row already points elsewhere; a leftover object is only logged.
        try:
            delete_public_url(url)
        except StoreError as exc:
            logger.warning("Image cleanup failed for %s: %s", url, exc.message)
