"""
Invoice and credential forms.

The invoice form is the single validation gate for create and update: handlers
hand it a plain mapping of field name to raw string and branch on the result.
Field names match the HTML input names (``customerId``, ``amount``, ``status``).
"""
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Mapping, Optional

from django import forms

from .models import Invoice

CUSTOMER_MESSAGE = "Please select a customer."
AMOUNT_MESSAGE = "Please enter an amount greater than 0."
STATUS_MESSAGE = "Please select an invoice status."

# Upper bound of the integer amount column, in cents.
MAX_AMOUNT_CENTS = 2147483647
MAX_AMOUNT = Decimal(MAX_AMOUNT_CENTS) / 100


def to_cents(amount: Decimal) -> int:
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class BaseFormMixin:
    def add_error_class(self) -> None:
        fields = getattr(self, 'fields', {})
        errors = getattr(self, 'errors', {})
        for field_name, form_field in fields.items():
            if field_name in errors:
                form_field.widget.attrs['class'] = form_field.widget.attrs.get('class', '') + ' input-error'
                form_field.widget.attrs['aria-invalid'] = 'true'
                form_field.widget.attrs['aria-describedby'] = f'{field_name}-error'


class StrictCharField(forms.CharField):
    """CharField that rejects non-string input instead of coercing it."""

    def to_python(self, value):
        if value not in self.empty_values and not isinstance(value, str):
            raise forms.ValidationError(self.error_messages['invalid'], code='invalid')
        return super().to_python(value)


class InvoiceForm(forms.Form, BaseFormMixin):
    customerId = StrictCharField(
        error_messages={'required': CUSTOMER_MESSAGE, 'invalid': CUSTOMER_MESSAGE},
    )
    amount = forms.DecimalField(
        max_value=MAX_AMOUNT,
        error_messages={
            'required': AMOUNT_MESSAGE,
            'invalid': AMOUNT_MESSAGE,
            'max_value': AMOUNT_MESSAGE,
            'max_digits': AMOUNT_MESSAGE,
            'max_decimal_places': AMOUNT_MESSAGE,
            'max_whole_digits': AMOUNT_MESSAGE,
        },
        widget=forms.NumberInput(attrs={'step': '0.01', 'placeholder': 'Enter USD amount'}),
    )
    status = forms.ChoiceField(
        choices=Invoice.Status.choices,
        error_messages={'required': STATUS_MESSAGE, 'invalid_choice': STATUS_MESSAGE},
        widget=forms.RadioSelect,
    )

    def clean_amount(self):
        amount = self.cleaned_data['amount']
        if amount <= 0 or to_cents(amount) < 1:
            raise forms.ValidationError(AMOUNT_MESSAGE)
        return amount


@dataclass(frozen=True)
class ValidatedInvoice:
    customer_id: str
    amount: Decimal
    status: str


@dataclass
class InvoiceFormResult:
    success: bool
    data: Optional[ValidatedInvoice] = None
    field_errors: Dict[str, List[str]] = field(default_factory=dict)


def validate_invoice_fields(fields: Mapping[str, str]) -> InvoiceFormResult:
    """Run the invoice schema over raw form input.

    Returns either the normalized fields or the per-field messages, never both.
    ``id`` and ``date`` are not accepted here; they are assigned by the system.
    """
    form = InvoiceForm(data={name: fields.get(name) for name in InvoiceForm.base_fields if name in fields})
    if not form.is_valid():
        return InvoiceFormResult(
            success=False,
            field_errors={name: list(messages) for name, messages in form.errors.items()},
        )
    return InvoiceFormResult(
        success=True,
        data=ValidatedInvoice(
            customer_id=form.cleaned_data['customerId'],
            amount=form.cleaned_data['amount'],
            status=form.cleaned_data['status'],
        ),
    )


class CredentialsForm(forms.Form, BaseFormMixin):
    email = forms.EmailField(
        widget=forms.EmailInput(attrs={
            'placeholder': 'Enter your email address',
            'autocomplete': 'email',
            'autofocus': True,
        })
    )
    password = forms.CharField(
        min_length=6,
        strip=False,
        widget=forms.PasswordInput(attrs={
            'placeholder': 'Enter password',
            'autocomplete': 'current-password',
        })
    )
