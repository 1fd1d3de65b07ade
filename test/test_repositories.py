"""
Test suite for the MongoDB layer

Exercises query construction and connection setup without a server.
"""
import time
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from types import SimpleNamespace

from app.infra.mongodb import connection
from app.infra.mongodb.repositories import ProposalRepository


def test_status_counts_only_match_resolved_proposals():
    pipelines = []
    repo = ProposalRepository()
    repo.aggregate = lambda pipeline: pipelines.append(pipeline) or [
        {"_id": "won", "count": 2}, {"_id": "lost", "count": 1}
    ]
    since = datetime(2026, 3, 15, tzinfo=timezone.utc)

    counts = repo.count_by_status("cmp_acme", client_name="Client A", updated_since=since)

    assert counts == {"won": 2, "lost": 1}
    assert pipelines[0][0] == {"$match": {
        "company_id": "cmp_acme",
        "status": {"$in": ["lost", "submitted", "won"]},
        "client_name": "Client A",
        "updated_at": {"$gte": since},
    }}
    assert pipelines[0][1] == {"$group": {"_id": "$status", "count": {"$sum": 1}}}


def test_concurrent_first_connect_opens_one_client(monkeypatch):
    created = []

    class FakeMongoClient:
        def __init__(self, uri, **options):
            created.append(uri)
            time.sleep(0.05)
            self.admin = SimpleNamespace(command=lambda name: {"ok": 1})

        def __getitem__(self, name):
            return SimpleNamespace(name=name)

    monkeypatch.setattr(connection, "MongoClient", FakeMongoClient)
    monkeypatch.setattr(connection, "_client", None)
    monkeypatch.setattr(connection, "_database", None)

    with ThreadPoolExecutor(max_workers=8) as executor:
        databases = list(executor.map(
            lambda _: connection.connect("mongodb://fake", "bids_test"), range(8)
        ))

    assert created == ["mongodb://fake"]
    assert all(db is databases[0] for db in databases)
    assert databases[0].name == "bids_test"
