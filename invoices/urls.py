from django.urls import path

from .views import dashboard_views, invoice_views, main_views

app_name = "invoices"

urlpatterns = [
    path('', main_views.landing_view, name='home'),
    path('login', main_views.login_view, name='login'),
    path('dashboard', dashboard_views.dashboard, name='dashboard'),
    path('dashboard/logout', main_views.logout_view, name='logout'),
    path('dashboard/invoices', invoice_views.invoice_list, name='invoice_list'),
    path('dashboard/invoices/create', invoice_views.invoice_create, name='invoice_create'),
    path('dashboard/invoices/<uuid:invoice_id>/edit', invoice_views.invoice_edit, name='invoice_edit'),
    path('dashboard/invoices/<uuid:invoice_id>/delete', invoice_views.invoice_delete, name='invoice_delete'),
]
