import logging
from typing import Optional

from django.http import Http404, HttpResponseRedirect
from django.shortcuts import render
from django.views.decorators.http import require_http_methods, require_POST

from ..cache import INVOICES_PATH, cached_view
from ..services.invoice_service import ActionState, InvoiceService
from ..services.query_service import (
    fetch_customers,
    fetch_filtered_invoices,
    fetch_invoice_by_id,
    fetch_invoices_pages,
)

logger = logging.getLogger(__name__)


def _parse_page(raw: Optional[str]) -> int:
    try:
        page = int(raw)
    except (TypeError, ValueError):
        return 1
    return page if page > 0 else 1


def _render_invoice_list(request, action_message: Optional[str] = None):
    query = request.GET.get('query', '')
    current_page = _parse_page(request.GET.get('page'))

    listing = cached_view(
        INVOICES_PATH,
        lambda: {
            'invoices': fetch_filtered_invoices(query, current_page),
            'total_pages': fetch_invoices_pages(query),
        },
        query=query,
        page=current_page,
    )

    context = {
        'invoices': listing['invoices'],
        'total_pages': listing['total_pages'],
        'page_range': range(1, listing['total_pages'] + 1),
        'current_page': current_page,
        'query': query,
        'action_message': action_message,
        'page_title': 'Invoices',
    }
    return render(request, 'pages/invoices/list.html', context)


def invoice_list(request):
    return _render_invoice_list(request)


def _render_form(request, template: str, state: ActionState, values: dict, **extra):
    context = {
        'customers': fetch_customers(),
        'state': state,
        'values': values,
        **extra,
    }
    return render(request, template, context)


@require_http_methods(["GET", "POST"])
def invoice_create(request):
    state = ActionState()
    values = {}

    if request.method == 'POST':
        values = request.POST.dict()
        result = InvoiceService.create_invoice(state, values)
        if isinstance(result, HttpResponseRedirect):
            return result
        state = result

    return _render_form(request, 'pages/invoices/create.html', state, values, page_title='Create Invoice')


@require_http_methods(["GET", "POST"])
def invoice_edit(request, invoice_id):
    invoice = fetch_invoice_by_id(str(invoice_id))
    if invoice is None:
        raise Http404("Invoice not found")

    state = ActionState()
    values = {
        'customerId': invoice['customer_id'],
        'amount': invoice['amount'],
        'status': invoice['status'],
    }

    if request.method == 'POST':
        values = request.POST.dict()
        result = InvoiceService.update_invoice(str(invoice_id), state, values)
        if isinstance(result, HttpResponseRedirect):
            return result
        state = result

    return _render_form(
        request, 'pages/invoices/edit.html', state, values,
        invoice=invoice, page_title='Edit Invoice',
    )


@require_POST
def invoice_delete(request, invoice_id):
    state = InvoiceService.delete_invoice(str(invoice_id))
    return _render_invoice_list(request, action_message=state.message)
