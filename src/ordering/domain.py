"""Ordering bounded context — orders and the order-payment fulfillment saga.

Owns the Order aggregate and coordinates with two collaborators it does not
own: the catalogue (product prices) and the remote payments service.
"""

import structlog
from protean.domain import Domain

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
