from robostore.services.media_store import CloudinaryMediaStore, MediaStore, build_media_store
from robostore.services.product_pipeline import ProductWritePipeline
from robostore.services.product_repository import ProductRepository

__all__ = [
    "CloudinaryMediaStore",
    "MediaStore",
    "ProductRepository",
    "ProductWritePipeline",
    "build_media_store",
]
