from django.contrib import admin
from .models import Customer, Invoice

@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ('name', 'email')
    search_fields = ('name', 'email')

@admin.register(Invoice)
class InvoiceAdmin(admin.ModelAdmin):
    list_display = ('id', 'customer', 'status', 'amount', 'date')
    list_filter = ('status',)
    search_fields = ('customer__name', 'customer__email')
    date_hierarchy = 'date'
