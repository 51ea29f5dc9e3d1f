"""FastAPI endpoints for the Catalogue domain."""

from fastapi import APIRouter
from protean.utils.globals import current_domain

from catalogue.api.schemas import AdjustStockRequest, CreateProductRequest, ProductResponse
from catalogue.product.creation import AdjustStock, CreateProduct
from catalogue.product.product import Product

product_router = APIRouter(prefix="/products", tags=["products"])


def _to_response(product: Product) -> ProductResponse:
    return ProductResponse(
        product_id=str(product.id),
        name=product.name,
        description=product.description or "",
        price=product.price,
        stock=product.stock,
        is_placeholder=product.is_placeholder,
    )


def _product(product_id: str) -> ProductResponse:
    return _to_response(current_domain.repository_for(Product).get(product_id))


# --- Product endpoints ---


@product_router.post("", status_code=201, response_model=ProductResponse)
async def create_product(body: CreateProductRequest) -> ProductResponse:
    command = CreateProduct(
        product_id=body.product_id,
        name=body.name,
        description=body.description,
        price=body.price,
        stock=body.stock,
    )
    product_id = current_domain.process(command, asynchronous=False)
    return _product(product_id)


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    return _product(product_id)


@product_router.put("/{product_id}/stock", response_model=ProductResponse)
async def adjust_stock(product_id: str, body: AdjustStockRequest) -> ProductResponse:
    """Add or remove units of stock."""
    current_domain.process(AdjustStock(product_id=product_id, delta=body.delta), asynchronous=False)
    return _product(product_id)
