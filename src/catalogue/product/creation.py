"""Product creation and stock adjustment — commands and handler."""

from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue, logger
from catalogue.product.product import Product


@catalogue.command(part_of="Product")
class CreateProduct:
    """Add a product to the catalogue."""

    product_id = Identifier()
    name = String(required=True, max_length=255)
    description = Text()
    price = Float(required=True)
    stock = Integer(default=0)


@catalogue.command(part_of="Product")
class RegisterPlaceholderProduct:
    """Register a stand-in for a product id an order referenced but the catalogue lacks."""

    product_id = Identifier(required=True)
    price = Float(required=True)


@catalogue.command(part_of="Product")
class AdjustStock:
    product_id = Identifier(required=True)
    delta = Integer(required=True)


@catalogue.command_handler(part_of=Product)
class ProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        product = Product.create(
            name=command.name,
            description=command.description,
            price=command.price,
            stock=command.stock or 0,
            product_id=command.product_id,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("product.created", product_id=str(product.id), price=product.price)
        return str(product.id)

    @handle(RegisterPlaceholderProduct)
    def register_placeholder(self, command):
        repo = current_domain.repository_for(Product)

        # Registered concurrently by another order
        existing = repo.get_or_none(command.product_id)
        if existing is not None:
            return str(existing.id)

        product = Product.placeholder(command.product_id, command.price)
        repo.add(product)
        logger.info("product.placeholder_created", product_id=str(product.id), price=product.price)
        return str(product.id)

    @handle(AdjustStock)
    def adjust_stock(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.update_stock(command.delta)
        repo.add(product)
        return str(product.id)
