"""Product aggregate — the priced, stocked item an order line refers to.

Orders snapshot a product's name and price when the line is added, so later
catalogue changes never alter an existing order. When an order references a
product the catalogue has never seen, a placeholder product is synthesized
from the caller's expected price (see ``Product.placeholder``).
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Integer, String, Text

from catalogue.domain import catalogue


@catalogue.aggregate
class Product:
    name = String(required=True, max_length=255)
    description = Text()
    price = Float(required=True)
    stock = Integer(default=0, min_value=0)
    is_placeholder = Boolean(default=False)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def price_must_be_positive(self):
        if self.price is not None and self.price <= 0:
            raise ValidationError({"price": ["Product price must be greater than zero"]})

    @classmethod
    def create(cls, name, price, description="", stock=0, product_id=None, is_placeholder=False):
        """Create a catalogue product after checking name and price."""
        if not name or not name.strip():
            raise ValidationError({"name": ["Product name is required"]})
        if stock < 0:
            raise ValidationError({"stock": ["Stock cannot be negative"]})

        now = datetime.now(UTC)
        fields = {
            "name": name.strip(),
            "description": description or "",
            "price": price,
            "stock": stock,
            "is_placeholder": is_placeholder,
            "created_at": now,
            "updated_at": now,
        }
        if product_id:
            fields["id"] = product_id
        return cls(**fields)

    @classmethod
    def placeholder(cls, product_id, price):
        """Stand-in for a product the catalogue does not know yet."""
        return cls.create(name=f"Product {product_id}", price=price, product_id=product_id, is_placeholder=True)

    def update_stock(self, delta):
        """Add ``delta`` units (negative to remove) without going below zero."""
        if self.stock + delta < 0:
            raise ValidationError({"stock": ["Insufficient stock"]})
        self.stock += delta
        self.updated_at = datetime.now(UTC)
