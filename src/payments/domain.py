"""Payments bounded context — payment processing, cancellation and refunds.

Other contexts reach this one only through its API (or the in-process
adapter that processes the same commands), never through its repositories.
"""

import structlog
from protean.domain import Domain

payments = Domain(name="payments")

logger = structlog.get_logger(__name__)
