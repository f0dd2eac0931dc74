"""
Services layer.

- Models: data + constraints
- Services: mutations, queries, cache invalidation
- Views: request parsing, response mapping
- Templates: presentation only
"""

from .invoice_service import ActionState, InvoiceService

__all__ = [
    "ActionState",
    "InvoiceService",
]
