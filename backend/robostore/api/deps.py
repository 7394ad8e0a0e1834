from pathlib import Path

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from robostore.core.config import settings
from robostore.core.db import get_db
from robostore.services.media_store import MediaStore
from robostore.services.product_pipeline import ProductWritePipeline
from robostore.services.product_repository import ProductRepository


def get_media_store(request: Request) -> MediaStore:
    return request.app.state.media_store


def get_upload_dir() -> Path:
    return Path(settings.UPLOAD_DIR)


def get_repository(db: Session = Depends(get_db)) -> ProductRepository:
    return ProductRepository(db)


def get_pipeline(
    repository: ProductRepository = Depends(get_repository),
    media_store: MediaStore = Depends(get_media_store),
) -> ProductWritePipeline:
    return ProductWritePipeline(repository, media_store)
