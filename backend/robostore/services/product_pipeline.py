"""Product writes that span the database and the hosted media store.

There is no transaction covering both sides, so the pipeline orders its steps
to keep them consistent where it can:

- uploads run one file at a time, in input order, and stop at the first failure
- images uploaded by a request that then fails are deleted again
- remote deletions of images the record no longer needs are best-effort
- local temp files handed in are removed on every exit path
"""

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path

from robostore.models.product import Product
from robostore.services.media_store import MediaStore
from robostore.services.product_input import parse_features, parse_specifications, parse_stock
from robostore.services.product_repository import ProductRepository

logger = logging.getLogger(__name__)

SCALAR_FIELDS = ("name", "description", "price", "category")


def remove_local_file(path: str | Path) -> None:
    try:
        Path(path).unlink(missing_ok=True)
    except OSError as e:
        logger.warning("Could not remove temp file %s: %s", path, e)


def discard_local_files(paths: Sequence[str | Path]) -> None:
    for path in paths:
        remove_local_file(path)


class ProductWritePipeline:
    def __init__(self, repository: ProductRepository, media_store: MediaStore):
        self.repository = repository
        self.media_store = media_store

    # -------------------------
    # Image helpers
    # -------------------------

    def _upload_files(self, local_files: Sequence[str | Path]) -> list[dict]:
        uploaded: list[dict] = []
        for path in local_files:
            try:
                image = self.media_store.upload(path)
            except Exception as e:
                logger.error("Image upload failed for %s: %s", Path(path).name, e)
                self._release_images(uploaded)
                raise
            finally:
                remove_local_file(path)
            uploaded.append(image)
        return uploaded

    def _release_images(self, images: Sequence[Mapping]) -> None:
        """Best-effort remote deletion; failures are logged and never raised."""
        for image in images:
            handle = image.get("storage_handle")
            if not handle:
                continue
            try:
                self.media_store.delete(handle)
            except Exception as e:
                logger.warning("Could not delete image %s: %s", handle, e)

    # -------------------------
    # Operations
    # -------------------------

    def create(self, fields: Mapping, local_files: Sequence[str | Path] = ()) -> Product:
        try:
            features = parse_features(fields.get("features")) or []
            specifications = parse_specifications(fields.get("specifications")) or {}
            images = self._upload_files(local_files)
        finally:
            discard_local_files(local_files)

        record = {name: fields[name] for name in SCALAR_FIELDS if fields.get(name) is not None}
        record.update(
            images=images,
            features=features,
            stock=parse_stock(fields.get("stock")),
            specifications=specifications,
        )

        try:
            return self.repository.create(record)
        except Exception:
            logger.warning("Product create failed; retracting %d uploaded image(s)", len(images))
            self._release_images(images)
            raise

    def update(
        self,
        product_id: str,
        fields: Mapping,
        local_files: Sequence[str | Path] = (),
        keep_old_images: bool = False,
    ) -> Product:
        new_images = None
        try:
            existing = self.repository.find_by_id(product_id)
            old_images = [dict(image) for image in existing.images or []]

            updates = {name: fields[name] for name in SCALAR_FIELDS if fields.get(name) is not None}
            # a blank stock field leaves the current stock alone
            stock = fields.get("stock")
            if stock is not None and not (isinstance(stock, str) and not stock.strip()):
                updates["stock"] = stock
            features = parse_features(fields.get("features"))
            if features is not None:
                updates["features"] = features
            specifications = parse_specifications(fields.get("specifications"))
            if specifications is not None:
                updates["specifications"] = specifications

            if local_files:
                new_images = self._upload_files(local_files)
        finally:
            discard_local_files(local_files)

        if new_images is not None:
            updates["images"] = old_images + new_images if keep_old_images else new_images

        try:
            product = self.repository.update_by_id(product_id, updates)
        except Exception:
            if new_images:
                logger.warning("Product update failed; retracting %d uploaded image(s)", len(new_images))
                self._release_images(new_images)
            raise

        # old references are dropped even if a remote delete fails
        if new_images is not None and not keep_old_images:
            self._release_images(old_images)
        return product

    def delete(self, product_id: str) -> None:
        product = self.repository.find_by_id(product_id)
        self._release_images(product.images or [])
        self.repository.delete_by_id(product_id)
