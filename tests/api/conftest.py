"""API test fixtures: full app over file storage in a temp dir."""

import pytest
from starlette.testclient import TestClient

from api.app import create_app
from core.config import AppConfig


@pytest.fixture
def config(tmp_path):
    return AppConfig(
        storage_url=f"file://{tmp_path / 'data' / 'invoices.json'}",
        outbox_dir=str(tmp_path / "outbox"),
    )


@pytest.fixture
def app(config):
    """App built by the real factory; no gateway configured."""
    return create_app(config)


@pytest.fixture
def services(app):
    return app.state.services


@pytest.fixture
def client(app):
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def act(client):
    """POST an action and return the response."""

    def _act(domain, action, **data):
        return client.post("/api/actions", json={"domain": domain, "action": action, "data": data})

    return _act


@pytest.fixture
def saved_invoice(act, services):
    """One saved invoice: Ravi Sharma, 2 × 100 @ 18%."""
    act("view", "create")
    draft = act("editor", "add_item").json()["data"]
    item_id = draft["items"][0]["id"]
    act("editor", "set_customer", field="name", value="Ravi Sharma")
    act("editor", "set_customer", field="email", value="ravi@example.com")
    act("editor", "set_customer", field="phone", value="+91 98765 43210")
    act("editor", "update_item", id=item_id, field="quantity", value=2)
    act("editor", "update_item", id=item_id, field="rate", value=100)
    act("view", "save")
    return services["store"].list_all()[0]
