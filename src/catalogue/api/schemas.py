"""Pydantic request/response schemas for the Catalogue API."""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- Product Request Schemas ---


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Classic Black T-Shirt",
                    "description": "Premium cotton crew-neck tee in black.",
                    "price": 19.9,
                    "stock": 100,
                }
            ]
        }
    }

    name: str = Field(..., max_length=255)
    description: str = ""
    price: float
    stock: int = Field(0, ge=0)
    product_id: str | None = Field(None, max_length=64)


class AdjustStockRequest(BaseModel):
    delta: int


# --- Response Schemas ---


class ProductResponse(BaseModel):
    product_id: str
    name: str
    description: str
    price: float
    stock: int
    is_placeholder: bool
