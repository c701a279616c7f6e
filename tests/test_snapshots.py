from decimal import Decimal

import pytest
from sqlmodel import select

from app.core.errors import ValidationError
from app.models.enums import TransactionType
from app.models.transaction import Transaction
from app.schemas.transaction import TransactionCreate
from app.services.aggregates import record_transaction
from app.services.snapshots import Collection, SnapshotHub, snapshot_hub
from tests.conftest import DAY, MONTH, OTHER_USER_ID, USER_ID


def income(amount):
    return TransactionCreate(amount=Decimal(amount), type=TransactionType.income, category="Salary", date=DAY)


class TestSnapshotHub:

    def test_initial_snapshot_is_delivered_with_session(self, session, profile):
        hub = SnapshotHub()
        received = []

        hub.subscribe(USER_ID, Collection.profile, received.append, session=session)

        assert len(received) == 1
        assert received[0].total_net_worth == Decimal("1000")

    def test_notify_only_reaches_matching_user_and_collection(self, session, profile):
        hub = SnapshotHub()
        stats, goals, other = [], [], []
        hub.subscribe(USER_ID, Collection.stats, stats.append, month=MONTH)
        hub.subscribe(USER_ID, Collection.goals, goals.append)
        hub.subscribe(OTHER_USER_ID, Collection.stats, other.append, month=MONTH)

        delivered = hub.notify(session, USER_ID, [Collection.stats])

        assert delivered == 1
        assert len(stats) == 1 and stats[0].month == MONTH
        assert goals == [] and other == []

    def test_unsubscribe_stops_delivery(self, session, profile):
        hub = SnapshotHub()
        received = []
        unsubscribe = hub.subscribe(USER_ID, Collection.transactions, received.append)

        unsubscribe()

        assert hub.notify(session, USER_ID) == 0
        assert received == []

    def test_broken_listener_does_not_block_others(self, session, profile):
        hub = SnapshotHub()
        received = []

        def broken(_):
            raise RuntimeError("boom")

        hub.subscribe(USER_ID, Collection.profile, broken)
        hub.subscribe(USER_ID, Collection.profile, received.append)

        assert hub.notify(session, USER_ID, [Collection.profile]) == 2
        assert len(received) == 1

    def test_recording_pushes_fresh_snapshots(self, session, profile):
        transactions, profiles = [], []
        unsubscribe_tx = snapshot_hub.subscribe(USER_ID, Collection.transactions, transactions.append, limit=50)
        unsubscribe_profile = snapshot_hub.subscribe(USER_ID, Collection.profile, profiles.append)
        try:
            record_transaction(session, USER_ID, income("250"))
        finally:
            unsubscribe_tx()
            unsubscribe_profile()

        assert len(transactions[-1]) == 1
        assert transactions[-1][0].amount == Decimal("250")
        assert profiles[-1].total_net_worth == Decimal("1250")

    @pytest.mark.parametrize("month", ["march", "2024-13", "2024-3", "24-03"])
    def test_subscribe_rejects_malformed_month(self, month):
        hub = SnapshotHub()

        with pytest.raises(ValidationError):
            hub.subscribe(USER_ID, Collection.transactions, lambda _: None, month=month)

        assert hub.notify(None, USER_ID) == 0

    def test_failed_snapshot_after_commit_does_not_fail_the_write(self, session, profile, monkeypatch):
        received = []

        def failing_snapshot(*args, **kwargs):
            raise ValueError("consulta rota")

        monkeypatch.setattr(snapshot_hub, "snapshot", failing_snapshot)
        unsubscribe = snapshot_hub.subscribe(USER_ID, Collection.stats, received.append, month=MONTH)
        try:
            tx = record_transaction(session, USER_ID, income("10"))
        finally:
            unsubscribe()

        assert received == []
        assert [t.id for t in session.exec(select(Transaction)).all()] == [tx.id]

    def test_transactions_without_limit_use_the_window(self, session, profile, monkeypatch):
        monkeypatch.setattr("app.services.snapshots.NET_WORTH_WINDOW", 2)
        for amount in ("1", "2", "3"):
            record_transaction(session, USER_ID, income(amount))
        hub = SnapshotHub()
        received = []

        hub.subscribe(USER_ID, Collection.transactions, received.append, session=session)

        assert len(received[0]) == 2
        assert len(hub.snapshot(session, USER_ID, Collection.transactions)) == 2
