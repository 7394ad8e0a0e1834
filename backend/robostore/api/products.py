from pathlib import Path

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from robostore.api.deps import get_pipeline, get_repository, get_upload_dir
from robostore.api.uploads import save_upload_files
from robostore.core.config import settings
from robostore.schemas.product import (
    MessageResponse,
    ProductListResponse,
    ProductOut,
    ProductResponse,
    ProductWriteResponse,
)
from robostore.services.product_pipeline import ProductWritePipeline
from robostore.services.product_repository import ProductRepository

products_router = APIRouter(prefix="/api/products", tags=["products"])


def _features_value(features: list[str] | None):
    # one form value may be a comma-separated list, repeated values are a list already
    if not features:
        return None
    return features[0] if len(features) == 1 else features


@products_router.post("", response_model=ProductWriteResponse, status_code=status.HTTP_201_CREATED)
def create_product(
    name: str | None = Form(None),
    description: str | None = Form(None),
    price: str | None = Form(None),
    category: str | None = Form(None),
    stock: str | None = Form(None),
    features: list[str] | None = Form(None),
    specifications: str | None = Form(None),
    images: list[UploadFile] | None = File(None),
    pipeline: ProductWritePipeline = Depends(get_pipeline),
    upload_dir: Path = Depends(get_upload_dir),
):
    local_files = save_upload_files(images, upload_dir, settings.MAX_UPLOAD_FILES)
    fields = {
        "name": name,
        "description": description,
        "price": price,
        "category": category,
        "stock": stock,
        "features": _features_value(features),
        "specifications": specifications,
    }
    product = pipeline.create(fields, local_files)
    return {
        "message": "Product created successfully",
        "data": ProductOut.model_validate(product),
    }


@products_router.get("", response_model=ProductListResponse)
def list_products(repository: ProductRepository = Depends(get_repository)):
    products = repository.find_all()
    return {
        "count": len(products),
        "data": [ProductOut.model_validate(p) for p in products],
    }


@products_router.get("/{product_id}", response_model=ProductResponse)
def get_product(product_id: str, repository: ProductRepository = Depends(get_repository)):
    return {"data": ProductOut.model_validate(repository.find_by_id(product_id))}


@products_router.put("/{product_id}", response_model=ProductWriteResponse)
def update_product(
    product_id: str,
    name: str | None = Form(None),
    description: str | None = Form(None),
    price: str | None = Form(None),
    category: str | None = Form(None),
    stock: str | None = Form(None),
    features: list[str] | None = Form(None),
    specifications: str | None = Form(None),
    keep_old_images: bool = Form(False, alias="keepOldImages"),
    images: list[UploadFile] | None = File(None),
    pipeline: ProductWritePipeline = Depends(get_pipeline),
    upload_dir: Path = Depends(get_upload_dir),
):
    local_files = save_upload_files(images, upload_dir, settings.MAX_UPLOAD_FILES)
    fields = {
        "name": name,
        "description": description,
        "price": price,
        "category": category,
        "stock": stock,
        "features": _features_value(features),
        "specifications": specifications,
    }
    product = pipeline.update(product_id, fields, local_files, keep_old_images=keep_old_images)
    return {
        "message": "Product updated successfully",
        "data": ProductOut.model_validate(product),
    }


@products_router.delete("/{product_id}", response_model=MessageResponse)
def delete_product(product_id: str, pipeline: ProductWritePipeline = Depends(get_pipeline)):
    pipeline.delete(product_id)
    return {"message": "Product deleted successfully"}
