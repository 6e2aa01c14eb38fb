"""Apartment records in tabular files.

Both supported formats share one layout: a header row followed by
``ID, Owner, Resident, Same`` rows. The ``Same`` column is written on export
and ignored on import, where the flag is recomputed from owner and resident.
"""
from __future__ import annotations

import csv
from pathlib import Path
from typing import Any, Callable, Iterable, List, Sequence

from pydantic import ValidationError as PydanticValidationError

from ..constants import APARTMENT_COLUMNS, APARTMENT_SHEET_NAME
from ..core.errors import FormatError, UnsupportedFormatError
from ..schemas.schemas import ApartmentCreate
from ..utils.csv_utils import read_csv_rows, write_csv
from ..utils.xlsx_utils import read_sheet_rows, write_sheet

MIN_IMPORT_COLUMNS = 3
MIN_SHEET_COLUMNS = 2


def decode_rows(rows: Sequence[Sequence[str]]) -> List[ApartmentCreate]:
    """Turn file rows (header included) into validated apartment records.

    Any malformed row fails the whole batch.
    """
    records: List[ApartmentCreate] = []
    for row_number, row in enumerate(rows[1:], start=2):
        if len(row) < MIN_IMPORT_COLUMNS:
            raise FormatError(
                f"expected at least {MIN_IMPORT_COLUMNS} columns (ID, Owner, Resident), found {len(row)}",
                row_number=row_number,
            )
        try:
            records.append(ApartmentCreate(id=row[0], owner=row[1], resident=row[2]))
        except PydanticValidationError as exc:
            raise FormatError("apartment ID is required", row_number=row_number) from exc
    return records


def encode_apartment(apartment, render_same: Callable[[bool], Any]) -> List[Any]:
    return [apartment.id, apartment.owner, apartment.resident, render_same(bool(apartment.same_flag))]


def _pad_sheet_row(row: List[str]) -> List[str]:
    """Restore blank trailing cells dropped from a sheet row.

    A sheet cannot tell a blank Resident cell from a missing one, so a row is
    only short when its ID or Owner position is missing.
    """
    if len(row) < MIN_SHEET_COLUMNS:
        return row
    return row + [""] * (MIN_IMPORT_COLUMNS - len(row))


class CsvApartmentCodec:
    extension = ".csv"

    def read(self, path: Path) -> List[ApartmentCreate]:
        try:
            rows = read_csv_rows(path)
        except UnicodeDecodeError as exc:
            raise FormatError(f"{Path(path).name} is not UTF-8 text") from exc
        except csv.Error as exc:
            raise FormatError(f"could not parse {Path(path).name}: {exc}") from exc
        return decode_rows(rows)

    def write(self, path: Path, apartments: Iterable) -> int:
        rows = [encode_apartment(apartment, lambda same: "true" if same else "false") for apartment in apartments]
        write_csv(path, APARTMENT_COLUMNS, rows)
        return len(rows)


class XlsxApartmentCodec:
    extension = ".xlsx"

    def read(self, path: Path) -> List[ApartmentCreate]:
        rows = read_sheet_rows(path, APARTMENT_SHEET_NAME)
        return decode_rows(rows[:1] + [_pad_sheet_row(row) for row in rows[1:]])

    def write(self, path: Path, apartments: Iterable) -> int:
        rows = [encode_apartment(apartment, bool) for apartment in apartments]
        write_sheet(path, APARTMENT_SHEET_NAME, APARTMENT_COLUMNS, rows)
        return len(rows)


CODECS = {codec.extension: codec for codec in (CsvApartmentCodec(), XlsxApartmentCodec())}


def codec_for_path(path: str | Path) -> CsvApartmentCodec | XlsxApartmentCodec:
    extension = Path(path).suffix.lower()
    codec = CODECS.get(extension)
    if codec is None:
        raise UnsupportedFormatError(extension)
    return codec
