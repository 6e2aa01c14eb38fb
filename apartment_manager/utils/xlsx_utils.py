from pathlib import Path
from zipfile import BadZipFile
from typing import Any, Iterable, List, Sequence

from openpyxl import Workbook, load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from ..core.errors import FormatError


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def read_sheet_rows(path: Path, sheet_name: str) -> List[List[str]]:
    """Return the sheet as rows of text, trailing blank cells dropped.

    Rows with no values at all are skipped, matching how spreadsheet
    programs report the used range.
    """
    try:
        workbook = load_workbook(filename=str(path), read_only=True, data_only=True)
    except FileNotFoundError:
        raise
    except (InvalidFileException, BadZipFile, KeyError, ValueError) as exc:
        raise FormatError(f"could not read workbook {Path(path).name}: {exc}") from exc

    try:
        if sheet_name not in workbook.sheetnames:
            raise FormatError(f"workbook {Path(path).name} has no sheet named {sheet_name!r}")
        rows: List[List[str]] = []
        for values in workbook[sheet_name].iter_rows(values_only=True):
            cells = list(values)
            while cells and cells[-1] in (None, ""):
                cells.pop()
            if not cells:
                continue
            rows.append([_cell_text(value) for value in cells])
        return rows
    finally:
        workbook.close()


def write_sheet(path: Path, sheet_name: str, headers: Sequence[str], rows: Iterable[Sequence[Any]]) -> None:
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = sheet_name
    sheet.append(list(headers))
    for row in rows:
        sheet.append(list(row))
    workbook.save(str(path))
