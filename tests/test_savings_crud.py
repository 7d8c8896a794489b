"""
Repository tests for savings distributions that need direct session control.
"""

from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from finsight.database.connection import Base
from finsight.models.model import SavingsBucket, User
from finsight.repositories import savings_crud
from finsight.schemas.savings_schema import DistributionEntry


def add_bucket(db, user_id, name, weight=None):
    bucket = SavingsBucket(
        user_id=user_id,
        name=name,
        type="Custom",
        current_balance=0,
        auto_distribute_percent=weight,
    )
    db.add(bucket)
    db.commit()
    db.refresh(bucket)
    return bucket


@pytest.fixture
def session_factory(tmp_path):
    """Sessions on a file-backed database, so each one holds its own connection."""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'finsight.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


class TestConcurrentDistributions:
    """Deposits from overlapping sessions must all reach the balance."""

    def test_both_deposits_land(self, session_factory):
        with session_factory() as setup:
            owner = User(
                full_name="Saver",
                username="saver",
                email="saver@example.com",
                hashed_password="not-a-real-hash",
            )
            setup.add(owner)
            setup.commit()
            user_id = owner.user_id
            bucket_id = add_bucket(setup, user_id, "Japan").bucket_id

        first = session_factory()
        second = session_factory()
        try:
            # both sessions see the bucket at its starting balance
            assert savings_crud.get_bucket_or_404(first, user_id, bucket_id).current_balance == 0
            assert savings_crud.get_bucket_or_404(second, user_id, bucket_id).current_balance == 0

            savings_crud.record_distributions(
                first, user_id, "2024-01", [DistributionEntry(bucket_id=bucket_id, amount=Decimal("100"))]
            )
            savings_crud.record_distributions(
                second, user_id, "2024-02", [DistributionEntry(bucket_id=bucket_id, amount=Decimal("50"))]
            )
        finally:
            first.close()
            second.close()

        with session_factory() as check:
            bucket = savings_crud.get_bucket_or_404(check, user_id, bucket_id)
            assert bucket.current_balance == Decimal("150")
            assert len(bucket.distributions) == 2


class TestAutoDistribute:
    def test_weights_come_from_the_planned_buckets(self, db_session, user, monkeypatch):
        add_bucket(db_session, user.user_id, "Japan", weight=Decimal("60"))
        add_bucket(db_session, user.user_id, "Rainy Day", weight=Decimal("40"))

        load_buckets = savings_crud.get_buckets
        calls = []

        def buckets_then_cleared(db, user_id):
            # any later read sees the weights removed
            calls.append(user_id)
            return load_buckets(db, user_id) if len(calls) == 1 else []

        monkeypatch.setattr(savings_crud, "get_buckets", buckets_then_cleared)

        created, undistributed = savings_crud.auto_distribute(
            db_session, user.user_id, "2024-06", Decimal("250")
        )

        assert [d.amount for d in created] == [Decimal("150.00"), Decimal("100.00")]
        assert [d.note for d in created] == ["Auto-distributed 60.00%", "Auto-distributed 40.00%"]
        assert undistributed == Decimal("0")
