import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Union

from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.http import HttpResponseRedirect
from django.shortcuts import redirect
from django.utils import timezone

from ..cache import INVOICES_PATH, revalidate_path
from ..forms import to_cents, validate_invoice_fields
from ..models import Invoice

logger = logging.getLogger(__name__)

# Value preparation (e.g. a malformed UUID) fails with ValidationError before
# the statement reaches the database; both are store faults to the caller.
STORE_ERRORS = (DatabaseError, ValidationError)


@dataclass
class ActionState:
    errors: Dict[str, List[str]] = field(default_factory=dict)
    message: Optional[str] = None

    def to_dict(self) -> Dict[str, object]:
        result: Dict[str, object] = {"message": self.message}
        if self.errors:
            result["errors"] = self.errors
        return result


ActionResult = Union[ActionState, HttpResponseRedirect]


class InvoiceService:
    """Form-driven invoice mutations.

    Create and update validate, write once, invalidate the invoice list and
    redirect to it. Delete writes once, invalidates and returns a message,
    since it is triggered from a row inside the list itself.
    """

    @staticmethod
    def create_invoice(prev_state: Optional[ActionState], form_fields: Mapping[str, str]) -> ActionResult:
        logger.debug(f"create_invoice prev_state={prev_state}")
        validated = validate_invoice_fields(form_fields)
        if not validated.success:
            return ActionState(
                errors=validated.field_errors,
                message="Missing Fields. Failed to Create Invoice.",
            )

        data = validated.data
        amount_in_cents = to_cents(data.amount)
        date = timezone.now().date()

        try:
            Invoice.objects.create(
                customer_id=data.customer_id,
                amount=amount_in_cents,
                status=data.status,
                date=date,
            )
        except STORE_ERRORS:
            logger.exception("Failed to create invoice")
            return ActionState(message="Database Error: Failed to Create Invoice")

        revalidate_path(INVOICES_PATH)
        return redirect(INVOICES_PATH)

    @staticmethod
    def update_invoice(invoice_id: str, prev_state: Optional[ActionState],
                       form_fields: Mapping[str, str]) -> ActionResult:
        logger.debug(f"update_invoice id={invoice_id} prev_state={prev_state}")
        validated = validate_invoice_fields(form_fields)
        if not validated.success:
            return ActionState(
                errors=validated.field_errors,
                message="Missing Fields. Failed to Update Invoice.",
            )

        data = validated.data
        amount_in_cents = to_cents(data.amount)

        try:
            Invoice.objects.filter(pk=invoice_id).update(
                customer_id=data.customer_id,
                amount=amount_in_cents,
                status=data.status,
            )
        except STORE_ERRORS:
            logger.exception(f"Failed to update invoice {invoice_id}")
            return ActionState(message="Database Error: Failed to Update Invoice")

        revalidate_path(INVOICES_PATH)
        return redirect(INVOICES_PATH)

    @staticmethod
    def delete_invoice(invoice_id: str) -> ActionState:
        try:
            Invoice.objects.filter(pk=invoice_id).delete()
        except STORE_ERRORS:
            logger.exception(f"Failed to delete invoice {invoice_id}")
            return ActionState(message="Database Error: Failed to Delete Invoice.")

        revalidate_path(INVOICES_PATH)
        return ActionState(message="Deleted Invoice.")
