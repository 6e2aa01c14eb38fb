import csv
from io import StringIO
from pathlib import Path
from typing import Iterable, List, Sequence

from ..constants import LEDGER_EXPORT_COLUMNS


def rows_to_csv(headers: Sequence[str], rows: Iterable[Sequence[str]]) -> str:
    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(headers)
    for row in rows:
        writer.writerow(row)
    return buffer.getvalue()


def read_csv_rows(path: Path) -> List[List[str]]:
    # utf-8-sig drops the BOM spreadsheet programs put on exported files
    with Path(path).open(newline="", encoding="utf-8-sig") as handle:
        return [row for row in csv.reader(handle) if row]


def write_csv(path: Path, headers: Sequence[str], rows: Iterable[Sequence[str]]) -> None:
    Path(path).write_text(rows_to_csv(headers, rows), encoding="utf-8", newline="")


def ledger_to_csv(payments: List) -> str:
    rows = []
    for payment in payments:
        rows.append(
            [
                payment.date.isoformat(),
                payment.month,
                payment.type,
                f"{payment.price:.2f}",
                payment.transaction_type,
            ]
        )
    return rows_to_csv(LEDGER_EXPORT_COLUMNS, rows)
