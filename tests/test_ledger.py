import csv
from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from apartment_manager.core.errors import ValidationError
from apartment_manager.models.models import Payment
from apartment_manager.services.ledger import LedgerService


@pytest.fixture
def ledger(apartments_db, test_settings) -> LedgerService:
    return LedgerService(apartments_db, test_settings)


def test_record_transaction_persists_entry(ledger):
    payment = ledger.record_transaction("April", "Utilities", "1520.75", "Credit")

    assert payment.id is not None
    assert payment.price == Decimal("1520.75")
    assert payment.transaction_type == "Credit"
    assert payment.date is not None


def test_form_labels_map_onto_transaction_types(ledger):
    payment = ledger.record_transaction("April", "Repairs", 300, "Debit (Money Paid)")

    assert payment.transaction_type == "Debit"


def test_amount_has_no_bounds(ledger):
    payment = ledger.record_transaction("May", "Repairs", "-45.10", "Debit")

    assert payment.price == Decimal("-45.10")


@pytest.mark.parametrize(
    "month,expense_type,amount,transaction_type",
    [
        ("April", "Utilities", "abc", "Credit"),
        ("April", "Utilities", "", "Credit"),
        ("April", "Utilities", "10", "Refund"),
        ("April", "Gardening", "10", "Debit"),
        ("Apr", "Utilities", "10", "Debit"),
    ],
)
def test_invalid_transactions_are_rejected(ledger, month, expense_type, amount, transaction_type):
    with pytest.raises(ValidationError):
        ledger.record_transaction(month, expense_type, amount, transaction_type)
    assert ledger.recent_transactions() == []


def test_recent_transactions_newest_first_and_limited(ledger, apartments_db):
    base = datetime(2024, 1, 1, 9, 0, 0)
    with apartments_db.session_scope() as session:
        for offset in [3, 0, 5, 1, 4, 2]:
            session.add(
                Payment(
                    month="January",
                    type="Cleaning Services",
                    price=Decimal(100 + offset),
                    transaction_type="Debit",
                    date=base + timedelta(days=offset),
                )
            )

    recent = ledger.recent_transactions(4)

    assert len(recent) == 4
    dates = [payment.date for payment in recent]
    assert dates == sorted(dates, reverse=True)
    assert dates[0] == base + timedelta(days=5)


def test_recent_transactions_uses_configured_default(ledger):
    for _ in range(12):
        ledger.record_transaction("June", "Security Service", 50, "Debit")

    assert len(ledger.recent_transactions()) == 10
    assert ledger.recent_transactions(0) == []


def test_export_transactions_writes_csv(ledger, tmp_path):
    ledger.record_transaction("July", "Utilities", "99.5", "Credit")
    target = tmp_path / "ledger.csv"

    assert ledger.export_transactions(target) == 1

    with target.open(newline="") as handle:
        rows = list(csv.reader(handle))
    assert rows[0] == ["timestamp", "month", "type", "amount", "transaction_type"]
    assert rows[1][1:] == ["July", "Utilities", "99.50", "Credit"]
