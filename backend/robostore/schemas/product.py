from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from robostore.models.product import Category

# largest value a 64-bit INTEGER column holds
MAX_STOCK = 2**63 - 1


class ImageRef(BaseModel):
    url: str = Field(min_length=1)
    storage_handle: str = Field(min_length=1)


class Specifications(BaseModel):
    weight: str | None = None
    dimensions: str | None = None
    power: str | None = None
    compatibility: list[str] = Field(default_factory=list)


class ProductCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    price: float = Field(ge=0, allow_inf_nan=False)
    category: Category
    images: list[ImageRef] = Field(default_factory=list)
    features: list[str] = Field(default_factory=list)
    stock: int = Field(default=0, ge=0, le=MAX_STOCK)
    specifications: Specifications = Field(default_factory=Specifications)


class ProductUpdate(BaseModel):
    """Partial update: only fields that were actually supplied are validated and applied."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str | None = Field(default=None, min_length=1)
    description: str | None = Field(default=None, min_length=1)
    price: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    category: Category | None = None
    images: list[ImageRef] | None = None
    features: list[str] | None = None
    stock: int | None = Field(default=None, ge=0, le=MAX_STOCK)
    specifications: Specifications | None = None

    @field_validator("*")
    @classmethod
    def reject_explicit_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value


class ProductOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str
    price: float
    category: str
    images: list[ImageRef] = Field(default_factory=list)
    features: list[str] = Field(default_factory=list)
    stock: int = 0
    specifications: Specifications = Field(default_factory=Specifications)
    created_at: datetime
    updated_at: datetime


# -------------------------
# Response envelopes
# -------------------------

class ProductResponse(BaseModel):
    success: bool = True
    data: ProductOut


class ProductWriteResponse(BaseModel):
    success: bool = True
    message: str
    data: ProductOut


class ProductListResponse(BaseModel):
    success: bool = True
    count: int
    data: list[ProductOut]


class MessageResponse(BaseModel):
    success: bool = True
    message: str
