import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Customer",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("email", models.EmailField(max_length=254)),
                ("image_url", models.CharField(blank=True, max_length=255)),
            ],
            options={
                "db_table": "customers",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Invoice",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("amount", models.PositiveIntegerField()),
                ("status", models.CharField(choices=[("pending", "Pending"), ("paid", "Paid")], max_length=20)),
                ("date", models.DateField()),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="invoices",
                        to="invoices.customer",
                    ),
                ),
            ],
            options={
                "db_table": "invoices",
                "ordering": ["-date"],
                "indexes": [
                    models.Index(fields=["date"], name="invoices_date_8c1a2e_idx"),
                    models.Index(fields=["status"], name="invoices_status_4f0d7b_idx"),
                ],
            },
        ),
    ]
