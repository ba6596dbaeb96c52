# pos_app/routers/products.py
import uuid

from fastapi import (
    APIRouter,
    Depends,
    File,
    HTTPException,
    Query,
    UploadFile,
    status,
)

from pos_app.core.auth import require_auth
from pos_app.repositories.product_repo import ProductRepository
from pos_app.schemas.product import (
    ProductCreate,
    ProductPage,
    ProductRead,
    ProductUpdate,
)
from pos_app.services.product_service import ProductService

router = APIRouter(
    prefix="/products",
    tags=["Products"],
    dependencies=[Depends(require_auth)],
)

repo = ProductRepository()
service = ProductService(repo)


@router.get("", response_model=ProductPage)
def list_products(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
):
    """
    List the catalog, newest first.
    """
    return service.list_products(page=page, page_size=page_size)


@router.get("/{product_id}", response_model=ProductRead)
def get_product(product_id: uuid.UUID):
    return service.get_product(product_id)


@router.post(
    "",
    response_model=ProductRead,
    status_code=status.HTTP_201_CREATED,
)
def create_product(payload: ProductCreate):
    """
    Create a new product. Upload its image afterwards via `/image`.
    """
    return service.create_product(payload)


@router.patch("/{product_id}", response_model=ProductRead)
def update_product(product_id: uuid.UUID, payload: ProductUpdate):
    return service.update_product(product_id, payload)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_product(product_id: uuid.UUID):
    """
    Delete a product.

    Past transaction items keep referencing its id.
    """
    service.delete_product(product_id)
    return None


@router.post(
    "/{product_id}/image",
    response_model=ProductRead,
    summary="Upload or replace the image for a product",
)
def upload_product_image(
    product_id: uuid.UUID,
    file: UploadFile = File(...),
):
    """
    Upload a new image for the product.

    - Accepts JPEG, PNG, WEBP, GIF.
    - Overwrites any previous image of the same type.
    """
    if not file.content_type:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing content-type for uploaded file",
        )

    file_bytes = file.file.read()
    return service.set_product_image(
        product_id=product_id,
        content_type=file.content_type,
        file_bytes=file_bytes,
    )
