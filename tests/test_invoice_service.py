"""
Invoice mutation handlers: validation, unit conversion, store writes,
list invalidation and the redirect/message outcomes.
"""
from datetime import date, datetime, timezone as dt_timezone
from decimal import Decimal
from unittest.mock import MagicMock, call, patch

import pytest
from django.db import DatabaseError
from django.http import HttpResponseRedirect

from invoices.forms import AMOUNT_MESSAGE, CUSTOMER_MESSAGE, STATUS_MESSAGE
from invoices.models import Invoice
from invoices.services.invoice_service import ActionState, InvoiceService, to_cents
from tests.factories import InvoiceFactory

SERVICE = 'invoices.services.invoice_service'
NEW_YEAR = datetime(2024, 1, 1, 15, 30, tzinfo=dt_timezone.utc)


def form(customer_id, amount='15.50', status='pending'):
    return {'customerId': str(customer_id), 'amount': amount, 'status': status}


class TestToCents:
    @pytest.mark.parametrize('amount, cents', [
        (Decimal('15.50'), 1550),
        (Decimal('15.5'), 1550),
        (Decimal('0.01'), 1),
        (Decimal('100'), 10000),
        (Decimal('15.555'), 1556),
        (Decimal('0.1'), 10),
    ])
    def test_conversion(self, amount, cents):
        assert to_cents(amount) == cents


class TestCreateInvoice:
    def test_valid_input_writes_cents_and_today(self):
        with patch(f'{SERVICE}.timezone.now', return_value=NEW_YEAR), \
                patch(f'{SERVICE}.Invoice.objects.create') as create, \
                patch(f'{SERVICE}.revalidate_path'):
            result = InvoiceService.create_invoice(ActionState(), form('c1'))

        create.assert_called_once_with(
            customer_id='c1', amount=1550, status='pending', date=date(2024, 1, 1),
        )
        assert isinstance(result, HttpResponseRedirect)
        assert result.url == '/dashboard/invoices'

    def test_invalidates_before_redirect(self):
        order = MagicMock()
        with patch(f'{SERVICE}.Invoice.objects.create'), \
                patch(f'{SERVICE}.revalidate_path', order.revalidate_path), \
                patch(f'{SERVICE}.redirect', order.redirect):
            InvoiceService.create_invoice(None, form('c1'))

        assert order.mock_calls == [
            call.revalidate_path('/dashboard/invoices'),
            call.redirect('/dashboard/invoices'),
        ]

    @pytest.mark.parametrize('amount', [
        '0', '-3', 'abc', '', '0.004', '100000000000000000', '100000000000000000000000000000',
    ])
    def test_bad_amount_returns_errors_without_write(self, amount):
        with patch(f'{SERVICE}.Invoice.objects.create') as create, \
                patch(f'{SERVICE}.revalidate_path') as revalidate:
            result = InvoiceService.create_invoice(ActionState(), form('c1', amount=amount))

        assert isinstance(result, ActionState)
        assert result.errors == {'amount': [AMOUNT_MESSAGE]}
        assert result.message == 'Missing Fields. Failed to Create Invoice.'
        create.assert_not_called()
        revalidate.assert_not_called()

    def test_bad_status_and_customer(self):
        with patch(f'{SERVICE}.Invoice.objects.create') as create:
            result = InvoiceService.create_invoice(
                ActionState(), {'customerId': '', 'amount': '10', 'status': 'draft'},
            )
        assert result.errors == {'customerId': [CUSTOMER_MESSAGE], 'status': [STATUS_MESSAGE]}
        create.assert_not_called()

    def test_store_failure_returns_message_only(self):
        with patch(f'{SERVICE}.Invoice.objects.create', side_effect=DatabaseError('connection reset')), \
                patch(f'{SERVICE}.revalidate_path') as revalidate:
            result = InvoiceService.create_invoice(ActionState(), form('c1'))

        assert result == ActionState(message='Database Error: Failed to Create Invoice')
        assert result.to_dict() == {'message': 'Database Error: Failed to Create Invoice'}
        assert 'connection reset' not in result.message
        revalidate.assert_not_called()

    @pytest.mark.django_db
    def test_persists_invoice(self, customer):
        with patch(f'{SERVICE}.timezone.now', return_value=NEW_YEAR):
            result = InvoiceService.create_invoice(ActionState(), form(customer.id, amount='250'))

        assert result.status_code == 302
        invoice = Invoice.objects.get()
        assert invoice.customer == customer
        assert invoice.amount == 25000
        assert invoice.status == 'pending'
        assert invoice.date == date(2024, 1, 1)

    @pytest.mark.django_db
    @pytest.mark.parametrize('amount', ['0.004', '100000000000000000', '100000000000000000000000000000'])
    def test_unstorable_amount_is_refused_before_the_store(self, customer, amount):
        result = InvoiceService.create_invoice(ActionState(), form(customer.id, amount=amount))

        assert result.errors == {'amount': [AMOUNT_MESSAGE]}
        assert not Invoice.objects.exists()

    @pytest.mark.django_db(transaction=True)
    def test_malformed_customer_reference_is_a_store_error(self):
        result = InvoiceService.create_invoice(ActionState(), form('c1'))
        assert result == ActionState(message='Database Error: Failed to Create Invoice')
        assert Invoice.objects.count() == 0


@pytest.mark.django_db
class TestUpdateInvoice:
    def test_replaces_fields_but_keeps_date(self, customer):
        invoice = InvoiceFactory(amount=500, status='pending', date=date(2023, 6, 1))

        result = InvoiceService.update_invoice(
            str(invoice.id), ActionState(), form(customer.id, amount='99.99', status='paid'),
        )

        assert isinstance(result, HttpResponseRedirect)
        assert result.url == '/dashboard/invoices'
        invoice.refresh_from_db()
        assert invoice.customer == customer
        assert invoice.amount == 9999
        assert invoice.status == 'paid'
        assert invoice.date == date(2023, 6, 1)

    @pytest.mark.parametrize('amount', ['0', '0.004', '100000000000000000', '100000000000000000000000000000'])
    def test_invalid_input_leaves_row_untouched(self, amount):
        invoice = InvoiceFactory(amount=500)

        result = InvoiceService.update_invoice(
            str(invoice.id), ActionState(), form(invoice.customer_id, amount=amount),
        )

        assert result.errors == {'amount': [AMOUNT_MESSAGE]}
        assert result.message == 'Missing Fields. Failed to Update Invoice.'
        invoice.refresh_from_db()
        assert invoice.amount == 500

    def test_store_failure(self):
        invoice = InvoiceFactory()
        with patch(f'{SERVICE}.Invoice.objects.filter', side_effect=DatabaseError('deadlock')), \
                patch(f'{SERVICE}.revalidate_path') as revalidate:
            result = InvoiceService.update_invoice(str(invoice.id), ActionState(), form(invoice.customer_id))

        assert result == ActionState(message='Database Error: Failed to Update Invoice')
        revalidate.assert_not_called()

    def test_invalidates_list_on_success(self, customer):
        invoice = InvoiceFactory()
        with patch(f'{SERVICE}.revalidate_path') as revalidate:
            InvoiceService.update_invoice(str(invoice.id), None, form(customer.id))
        revalidate.assert_called_once_with('/dashboard/invoices')


@pytest.mark.django_db
class TestDeleteInvoice:
    def test_deletes_and_returns_message(self):
        invoice = InvoiceFactory()
        with patch(f'{SERVICE}.revalidate_path') as revalidate:
            result = InvoiceService.delete_invoice(str(invoice.id))

        assert result == ActionState(message='Deleted Invoice.')
        assert not Invoice.objects.filter(pk=invoice.pk).exists()
        revalidate.assert_called_once_with('/dashboard/invoices')

    def test_does_not_redirect(self):
        invoice = InvoiceFactory()
        result = InvoiceService.delete_invoice(str(invoice.id))
        assert not isinstance(result, HttpResponseRedirect)

    def test_malformed_id_is_reported_not_raised(self):
        with patch(f'{SERVICE}.revalidate_path') as revalidate:
            result = InvoiceService.delete_invoice('not-a-uuid')

        assert result == ActionState(message='Database Error: Failed to Delete Invoice.')
        revalidate.assert_not_called()

    def test_store_failure(self):
        with patch(f'{SERVICE}.Invoice.objects.filter', side_effect=DatabaseError('gone')):
            result = InvoiceService.delete_invoice('3958dc9e-712f-4377-85e9-fec4b6a6442a')
        assert result.message == 'Database Error: Failed to Delete Invoice.'


def test_validation_and_store_failures_are_distinguishable():
    with patch(f'{SERVICE}.Invoice.objects.create', side_effect=DatabaseError):
        store_failure = InvoiceService.create_invoice(None, form('c1'))
    validation_failure = InvoiceService.create_invoice(None, form('c1', amount='-1'))

    assert 'errors' in validation_failure.to_dict()
    assert 'errors' not in store_failure.to_dict()
    assert validation_failure.message != store_failure.message
