"""Catalogue lookups made on behalf of the ordering context.

Products belong to the catalogue domain. Ordering only needs a name and a
price to snapshot onto a line item, so lookups return a ``PricedProduct``
rather than the catalogue aggregate.

Every call pushes the catalogue's own domain context. Do not call these
from inside an ordering unit of work.
"""

from typing import NamedTuple

from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.creation import RegisterPlaceholderProduct
from catalogue.product.product import Product


class PricedProduct(NamedTuple):
    product_id: str
    name: str
    price: float
    is_placeholder: bool = False


def _snapshot(product: Product) -> PricedProduct:
    return PricedProduct(
        product_id=str(product.id),
        name=product.name,
        price=product.price,
        is_placeholder=product.is_placeholder,
    )


class CatalogueClient:
    def find_product(self, product_id: str) -> PricedProduct | None:
        with catalogue.domain_context():
            product = current_domain.repository_for(Product).get_or_none(product_id)
            return _snapshot(product) if product is not None else None

    def register_placeholder(self, product_id: str, price: float) -> PricedProduct:
        """Register a stand-in product priced at ``price`` and return it.

        If the id was registered in the meantime the stored product wins.
        """
        with catalogue.domain_context():
            current_domain.process(
                RegisterPlaceholderProduct(product_id=product_id, price=price),
                asynchronous=False,
            )
            return _snapshot(current_domain.repository_for(Product).get(product_id))
