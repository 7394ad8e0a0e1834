import logging
from datetime import datetime, timezone

import pydantic
from sqlalchemy.orm import Session

from robostore.core.errors import NotFoundError, ValidationError
from robostore.models.product import Product
from robostore.schemas.product import ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)


def _error_messages(exc: pydantic.ValidationError) -> list[str]:
    messages = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"]) or "record"
        messages.append(f"{field}: {err['msg']}")
    return messages


class ProductRepository:
    """Product persistence over one SQLAlchemy session; every write commits."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, record: dict) -> Product:
        try:
            payload = ProductCreate.model_validate(record)
        except pydantic.ValidationError as e:
            raise ValidationError(_error_messages(e)) from e

        product = Product(**payload.model_dump(mode="json"))
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        logger.info("Created product %s (%s)", product.id, product.name)
        return product

    def find_all(self) -> list[Product]:
        return (
            self.db.query(Product)
            .order_by(Product.created_at.desc())
            .all()
        )

    def find_by_id(self, product_id: str) -> Product:
        product = self.db.get(Product, product_id)
        if not product:
            raise NotFoundError()
        return product

    def update_by_id(self, product_id: str, partial_record: dict) -> Product:
        product = self.find_by_id(product_id)

        try:
            payload = ProductUpdate.model_validate(partial_record)
        except pydantic.ValidationError as e:
            raise ValidationError(_error_messages(e)) from e

        changes = payload.model_dump(mode="json", exclude_unset=True)
        for field, value in changes.items():
            setattr(product, field, value)
        product.updated_at = datetime.now(timezone.utc)

        self.db.commit()
        self.db.refresh(product)
        logger.info("Updated product %s (%s)", product.id, ", ".join(sorted(changes)) or "no fields")
        return product

    def delete_by_id(self, product_id: str) -> None:
        product = self.find_by_id(product_id)
        self.db.delete(product)
        self.db.commit()
        logger.info("Deleted product %s", product_id)
