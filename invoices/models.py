from __future__ import annotations

import uuid
from decimal import Decimal

from django.db import models


class Customer(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    email = models.EmailField()
    image_url = models.CharField(max_length=255, blank=True)

    class Meta:
        db_table = "customers"
        ordering = ["name"]

    def __str__(self):
        return self.name


class Invoice(models.Model):
    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        PAID = "paid", "Paid"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    customer = models.ForeignKey(Customer, on_delete=models.CASCADE, related_name="invoices")
    # Minor currency units (cents).
    amount = models.PositiveIntegerField()
    status = models.CharField(max_length=20, choices=Status.choices)
    date = models.DateField()

    class Meta:
        db_table = "invoices"
        ordering = ["-date"]
        indexes = [
            models.Index(fields=["date"], name="invoices_date_8c1a2e_idx"),
            models.Index(fields=["status"], name="invoices_status_4f0d7b_idx"),
        ]

    def __str__(self):
        return f"Invoice {self.id} ({self.customer_id})"

    @property
    def amount_in_units(self):
        return Decimal(self.amount) / 100
