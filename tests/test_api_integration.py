"""
Integration tests for the Client Ledger API
Tests end-to-end workflows using FastAPI TestClient
"""

import inspect
import pytest
from decimal import Decimal
from datetime import date
from fastapi.testclient import TestClient

from client_ledger.api import create_app
from client_ledger.config import LedgerConfig
from client_ledger.storage import SnapshotWriter
from client_ledger.system import LedgerSystem


CLIENT_INFO = {
    "name": "Ana Souza",
    "birth_date": "1992-03-14",
    "document_number": "123",
    "country": "BR"
}


@pytest.fixture
def system(tmp_path):
    writer = SnapshotWriter(directory=tmp_path / "db", clock=lambda: date(2024, 12, 25))
    return LedgerSystem(config=LedgerConfig(snapshot_dir=str(tmp_path / "db")), snapshot_writer=writer)


@pytest.fixture
def client(system):
    """Create a test client bound to an isolated ledger"""
    return TestClient(create_app(system))


def new_client(client, **overrides):
    r = client.post("/app/new_client", json={**CLIENT_INFO, **overrides})
    assert r.status_code == 200
    return r.json()["data"]["id"]


class TestHealthEndpoints:
    """Test basic health endpoint"""

    def test_healthchecker(self, client):
        """Test health endpoint"""
        r = client.get("/app/healthchecker")
        assert r.status_code == 200
        assert r.json()["status"] == "success"


class TestClientFlow:
    """Client registration and lookup"""

    def test_create_and_get_client(self, client):
        """Test creating a client and reading its balance"""
        client_id = new_client(client)

        r = client.get(f"/app/client_balance/{client_id}")
        assert r.status_code == 200
        data = r.json()
        assert data["status"] == "success"
        assert data["data"]["id"] == client_id
        assert data["data"]["name"] == "Ana Souza"
        assert data["data"]["document_number"] == "123"
        assert Decimal(data["data"]["balance"]) == Decimal('0')

    def test_duplicate_document_conflict(self, client):
        """Test that the same document number cannot register twice"""
        new_client(client)

        r = client.post("/app/new_client", json={**CLIENT_INFO, "name": "Other"})
        assert r.status_code == 409
        data = r.json()
        assert data["status"] == "fail"
        assert "123" in data["message"]

    def test_unknown_client_balance(self, client):
        """Test lookup of an unknown id"""
        r = client.get("/app/client_balance/does-not-exist")
        assert r.status_code == 404
        assert r.json()["status"] == "fail"
        assert "does-not-exist" in r.json()["message"]

    def test_missing_fields_rejected(self, client):
        """Test request validation"""
        r = client.post("/app/new_client", json={"name": "No Document"})
        assert r.status_code == 422


class TestTransactionFlow:
    """Credit and debit endpoints"""

    def test_credit_and_debit(self, client):
        """Test the happy path and the insufficient funds path"""
        client_id = new_client(client)

        r = client.post("/app/new_credit_transaction", json={"client_id": client_id, "amount": "100.00"})
        assert r.status_code == 200
        assert r.json()["data"] == {"client_id": client_id, "new_balance": "100.00"}

        r = client.post("/app/new_debit_transaction", json={"client_id": client_id, "amount": "30.00"})
        assert r.status_code == 200
        assert r.json()["data"]["new_balance"] == "70.00"

        r = client.post("/app/new_debit_transaction", json={"client_id": client_id, "amount": "1000.00"})
        assert r.status_code == 409
        assert r.json()["status"] == "fail"
        assert "Insufficient balance" in r.json()["message"]

        r = client.get(f"/app/client_balance/{client_id}")
        assert r.json()["data"]["balance"] == "70.00"

    def test_transaction_for_unknown_client(self, client):
        """Test credit and debit against an unknown id"""
        for path in ("/app/new_credit_transaction", "/app/new_debit_transaction"):
            r = client.post(path, json={"client_id": "ghost", "amount": "1"})
            assert r.status_code == 404
            assert "ghost" in r.json()["message"]

    def test_negative_amount_rejected(self, client):
        """Test that negative amounts never reach the ledger"""
        client_id = new_client(client)

        for amount in ("-10", "NaN", "Infinity"):
            r = client.post("/app/new_credit_transaction", json={"client_id": client_id, "amount": amount})
            assert r.status_code == 422

        r = client.get(f"/app/client_balance/{client_id}")
        assert Decimal(r.json()["data"]["balance"]) == Decimal('0')


class TestHandlerExecution:
    """Ledger endpoints run in the threadpool, off the event loop"""

    def test_ledger_handlers_are_sync(self, client):
        """Test that blocking ledger and file calls are not made from coroutines"""
        blocking_paths = {
            "/app/new_client", "/app/client_balance/{client_id}",
            "/app/new_credit_transaction", "/app/new_debit_transaction",
            "/app/store_balances", "/app/snapshots"
        }
        endpoints = {
            route.path: route.endpoint
            for route in client.app.routes
            if getattr(route, "path", None) in blocking_paths
        }

        assert set(endpoints) == blocking_paths
        assert not any(inspect.iscoroutinefunction(fn) for fn in endpoints.values())


class TestSnapshotFlow:
    """Store balances and list snapshot files"""

    def test_store_balances(self, client, system):
        """Test that storing balances writes a file and zeroes balances"""
        client_id = new_client(client)
        client.post("/app/new_credit_transaction", json={"client_id": client_id, "amount": "70.00"})

        r = client.post("/app/store_balances")
        assert r.status_code == 200
        data = r.json()["data"]
        assert data["file"] == "25122024_1.DAT"
        assert data["records"] == [{"client_id": client_id, "balance": "70.00"}]

        snapshot = system.snapshot_writer.directory / "25122024_1.DAT"
        assert snapshot.read_text(encoding="utf-8") == f"{client_id} 70.00\n"

        r = client.get(f"/app/client_balance/{client_id}")
        assert Decimal(r.json()["data"]["balance"]) == Decimal('0')

        r = client.get("/app/snapshots")
        assert r.json()["data"]["files"] == ["25122024_1.DAT"]

    def test_store_balances_failure(self, client, system):
        """Test that a storage failure is reported and balances survive"""
        client_id = new_client(client)
        client.post("/app/new_credit_transaction", json={"client_id": client_id, "amount": "70.00"})
        system.snapshot_writer.directory.write_text("blocked")

        r = client.post("/app/store_balances")
        assert r.status_code == 500
        assert r.json()["status"] == "fail"

        r = client.get(f"/app/client_balance/{client_id}")
        assert r.json()["data"]["balance"] == "70.00"
