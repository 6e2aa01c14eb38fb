from pathlib import Path

from apartment_manager.core.errors import (
    FormatError,
    NotFoundError,
    ReceiptWriteError,
    UnsupportedFormatError,
    user_message,
)


def test_open_databases_creates_both_files(app, test_settings):
    assert Path(test_settings.users_database_url.replace("sqlite:///", "")).exists()
    assert Path(test_settings.apartments_database_url.replace("sqlite:///", "")).exists()
    assert app.users.count() == 0
    assert app.apartments.count() == 0


def test_end_to_end_collection_flow(app, tmp_path):
    source = tmp_path / "units.csv"
    source.write_text("ID,Owner,Resident,Same\nA1,Smith,,false\nA2,Lee,Lee,true\n", encoding="utf-8")

    assert app.import_apartments(source) == 2
    outcome = app.collections.record_collection("A1", "January", "Maintenance", 4000.0)
    app.ledger.record_transaction("January", "Cleaning Services", "1500", "Debit")

    assert outcome.fully_processed
    assert outcome.receipt_path.name == f"receipt_{outcome.collection.id}_A1.pdf"
    assert [payment.type for payment in app.ledger.recent_transactions()] == ["Cleaning Services"]
    assert app.export_apartments(tmp_path / "out.xlsx") == 2


def test_user_messages():
    assert user_message(UnsupportedFormatError(".txt")) == "unsupported file type: .txt"
    assert user_message(FormatError("expected at least 3 columns", row_number=4)) == "row 4: expected at least 3 columns"
    assert user_message(NotFoundError("apartment", "A9")) == "apartment 'A9' not found"
    assert "failed to save" in user_message(ReceiptWriteError("failed to save PDF file"))
    assert user_message(FileNotFoundError(2, "No such file or directory", "units.csv")) == (
        "No such file or directory: units.csv"
    )
    assert user_message(RuntimeError("boom")).startswith("Unexpected error")
