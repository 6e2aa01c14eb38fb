import re
from datetime import datetime, timezone
from pathlib import Path
from textwrap import wrap
from typing import Iterable

from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from ..core.errors import ReceiptWriteError

MARGIN_X = 72  # 1 inch
MARGIN_Y = 72
MAX_CHARS_PER_LINE = 90
TITLE_FONT = ("Helvetica-Bold", 16)
BODY_FONT = ("Helvetica", 12)
UNSAFE_FILENAME_CHARS = re.compile(r"[\\/\x00-\x1f\x7f]")


def _output_path(output_dir: str | Path, filename: str) -> Path:
    base = Path(output_dir)
    try:
        base.mkdir(parents=True, exist_ok=True)
    except (OSError, ValueError) as exc:
        raise ReceiptWriteError(f"failed to create output directory {base}: {exc}") from exc
    return base / filename


def _write_pdf(output_dir: str | Path, filename: str, title: str, lines: Iterable[str]) -> Path:
    path = _output_path(output_dir, filename)
    try:
        # Uncompressed page streams keep receipt text searchable in the raw file.
        pdf_canvas = canvas.Canvas(str(path), pagesize=A4, pageCompression=0)
        width, height = A4
        text_stream = pdf_canvas.beginText(MARGIN_X, height - MARGIN_Y)
        text_stream.setFont(*TITLE_FONT)
        text_stream.textLine(title)
        text_stream.textLine("")
        text_stream.setFont(*BODY_FONT)

        for line in lines:
            normalized = "" if line is None else str(line)
            for chunk in wrap(normalized, MAX_CHARS_PER_LINE) or [normalized]:
                text_stream.textLine(chunk)

        pdf_canvas.drawText(text_stream)
        pdf_canvas.showPage()
        pdf_canvas.save()
    except (OSError, ValueError) as exc:
        raise ReceiptWriteError(f"failed to save PDF file {path}: {exc}") from exc
    return path


def receipt_filename(collection) -> str:
    apartment_part = UNSAFE_FILENAME_CHARS.sub("-", str(collection.apartment_id))
    return f"receipt_{collection.id}_{apartment_part}.pdf"


def local_date(value: datetime) -> str:
    # Stored timestamps are UTC; SQLite hands them back without tzinfo.
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone().date().isoformat()


def receipt_lines(collection, currency_symbol: str) -> list[str]:
    return [
        f"Receipt #: {collection.id}",
        f"Date: {local_date(collection.date)}",
        f"Apartment: {collection.apartment_id}",
        f"Month: {collection.month}",
        f"Type: {collection.type}",
        f"Amount: {currency_symbol} {collection.price:.2f}",
    ]


def generate_collection_receipt(collection, output_dir: str | Path, title: str, currency_symbol: str) -> Path:
    return _write_pdf(output_dir, receipt_filename(collection), title, receipt_lines(collection, currency_symbol))
