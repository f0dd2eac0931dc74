from unittest.mock import patch

import pytest
from django.db import DatabaseError


def test_liveness(client):
    response = client.get("/health/live")
    assert response.status_code == 200
    assert response.json()["status"] == "alive"
    assert "no-store" in response["Cache-Control"]


@pytest.mark.django_db
def test_readiness(client):
    response = client.get("/health/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ready", "database": "up", "cache": "up"}


@pytest.mark.django_db
def test_readiness_reports_database_outage(client):
    with patch("invoices.health.connections") as connections:
        connections.__getitem__.return_value.cursor.side_effect = DatabaseError("down")
        response = client.get("/health/ready")

    assert response.status_code == 503
    assert response.json()["database"] == "down"


def test_health_rejects_post(client):
    assert client.post("/health/live").status_code == 405
