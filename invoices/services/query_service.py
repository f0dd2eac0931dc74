"""Read-side queries for the dashboard: invoice search, pagination and overview cards."""

import math
from typing import Any, Dict, List, Optional

from django.core.exceptions import ValidationError
from django.db.models import CharField, Count, Q, Sum
from django.db.models.functions import Cast

from ..models import Customer, Invoice


ITEMS_PER_PAGE = 6
LATEST_INVOICES_COUNT = 5


def _search_queryset(query: str):
    invoices = Invoice.objects.select_related("customer").annotate(
        amount_text=Cast("amount", CharField()),
        date_text=Cast("date", CharField()),
    )
    if query:
        invoices = invoices.filter(
            Q(customer__name__icontains=query)
            | Q(customer__email__icontains=query)
            | Q(amount_text__icontains=query)
            | Q(date_text__icontains=query)
            | Q(status__icontains=query)
        )
    return invoices


def fetch_filtered_invoices(query: str, current_page: int) -> List[Invoice]:
    current_page = max(current_page, 1)
    offset = (current_page - 1) * ITEMS_PER_PAGE
    invoices = _search_queryset(query).order_by("-date", "id")
    return list(invoices[offset:offset + ITEMS_PER_PAGE])


def fetch_invoices_pages(query: str) -> int:
    count = _search_queryset(query).count()
    return math.ceil(count / ITEMS_PER_PAGE)


def fetch_invoice_by_id(invoice_id: str) -> Optional[Dict[str, Any]]:
    """Invoice as edit-form values, with the amount back in major units."""
    try:
        invoice = Invoice.objects.filter(pk=invoice_id).first()
    except ValidationError:
        return None
    if invoice is None:
        return None
    return {
        "id": str(invoice.id),
        "customer_id": str(invoice.customer_id),
        "amount": invoice.amount_in_units,
        "status": invoice.status,
        "date": invoice.date,
    }


def fetch_customers() -> List[Customer]:
    return list(Customer.objects.order_by("name"))


def fetch_latest_invoices() -> List[Invoice]:
    return list(Invoice.objects.select_related("customer").order_by("-date", "id")[:LATEST_INVOICES_COUNT])


def fetch_card_data() -> Dict[str, int]:
    totals = Invoice.objects.aggregate(
        number_of_invoices=Count("id"),
        total_paid=Sum("amount", filter=Q(status=Invoice.Status.PAID)),
        total_pending=Sum("amount", filter=Q(status=Invoice.Status.PENDING)),
    )
    return {
        "number_of_invoices": totals["number_of_invoices"],
        "number_of_customers": Customer.objects.count(),
        "total_paid": totals["total_paid"] or 0,
        "total_pending": totals["total_pending"] or 0,
    }
