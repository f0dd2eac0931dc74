from django.shortcuts import render

from ..services.query_service import fetch_card_data, fetch_latest_invoices


def dashboard(request):
    context = {
        'cards': fetch_card_data(),
        'latest_invoices': fetch_latest_invoices(),
        'page_title': 'Dashboard',
    }
    return render(request, 'pages/dashboard/overview.html', context)
