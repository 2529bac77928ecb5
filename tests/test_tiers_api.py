import os
import sys

import pytest
from fastapi.testclient import TestClient

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from membership_tiers.api.main import app


@pytest.fixture(scope="module")
def client():
    return TestClient(app)


def test_root(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.json()["status"] == "online"


def test_list_tiers(client):
    resp = client.get("/api/tiers")
    assert resp.status_code == 200

    tiers = resp.json()
    assert [t["tier"] for t in tiers] == ['welcome', 'premium', 'elite', 'enterprise']
    assert [t["rank"] for t in tiers] == [1, 2, 3, 4]
    assert tiers[1]["monthly"] == 9.99
    assert tiers[1]["annual"] == 99.99


def test_get_tier_detail(client):
    resp = client.get("/api/tiers/Elite")
    assert resp.status_code == 200

    detail = resp.json()
    assert detail["tier"] == "elite"
    assert detail["display_name"] == "Elite Member"
    assert detail["benefits"][0] == "Everything in Premium Member"
    assert detail["next_tier"] == "enterprise"


def test_get_price_annual(client):
    resp = client.get("/api/tiers/premium/price", params={"cycle": "annual"})
    assert resp.status_code == 200

    body = resp.json()
    assert body["price"] == 99.99
    assert body["months"] == 12
    assert body["effective_monthly"] == pytest.approx(8.3325)
    assert body["currency"] == "USD"


def test_get_price_defaults_to_monthly(client):
    body = client.get("/api/tiers/welcome/price").json()
    assert body["cycle"] == "monthly"
    assert body["price"] == 2.99
    assert body["effective_monthly"] == 2.99


def test_get_savings(client):
    body = client.get("/api/tiers/premium/savings").json()
    assert body["amount"] == pytest.approx(19.89)
    assert body["percentage"] == 17


def test_next_tier_at_top(client):
    body = client.get("/api/tiers/enterprise/next").json()
    assert body == {"tier": "enterprise", "next_tier": None}


@pytest.mark.parametrize("current,target,valid", [
    ("welcome", "enterprise", True),
    ("enterprise", "welcome", False),
    ("elite", "elite", False),
])
def test_upgrade_check(client, current, target, valid):
    resp = client.get(f"/api/tiers/{current}/upgrade/{target}")
    assert resp.status_code == 200
    assert resp.json()["valid"] is valid


@pytest.mark.parametrize("path", [
    "/api/tiers/gold",
    "/api/tiers/gold/savings",
    "/api/tiers/premium/price?cycle=weekly",
    "/api/tiers/welcome/upgrade/platinum",
])
def test_unknown_values_rejected(client, path):
    resp = client.get(path)
    assert resp.status_code == 400
    assert "Unknown" in resp.json()["detail"]


def test_system_status(client):
    body = client.get("/system/status").json()
    assert body["table_valid"] is True
    assert body["errors"] == []
