"""Catalogue bounded context — products and their prices.

The ordering context reads products from here when pricing order lines and
may register placeholder products for ids it has never seen.
"""

import structlog
from protean.domain import Domain

catalogue = Domain(name="catalogue")

logger = structlog.get_logger(__name__)
