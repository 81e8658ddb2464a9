from __future__ import annotations

import csv
import io
import logging
import sys

logger = logging.getLogger(__name__)

# exports may carry very long free-text cells
csv.field_size_limit(min(sys.maxsize, 2**31 - 1))

CsvRow = dict[str, str]


def _is_blank(cells: list[str]) -> bool:
    return not any(cell.strip() for cell in cells)


def decode_csv_records(text: str) -> list[list[str]]:
    """
    Split CSV text into records of raw cells.

    Quoted cells may hold commas, line breaks and doubled quotes. Records made
    only of empty cells are skipped. An unterminated quote at the end of the
    input closes implicitly; a decoding error keeps whatever was read before it.
    """
    if not text:
        return []

    records: list[list[str]] = []
    reader = csv.reader(io.StringIO(text, newline=""), strict=False)
    try:
        for cells in reader:
            if _is_blank(cells):
                continue
            records.append(cells)
    except csv.Error as exc:
        logger.warning("CSV decode stopped at line %s: %s", reader.line_num, exc)
    return records


def decode_csv(text: str) -> list[CsvRow]:
    """Decode CSV text into rows keyed by the header record."""
    records = decode_csv_records(text)
    if len(records) <= 1:
        return []

    headers = [header.strip().lstrip("\ufeff") for header in records[0]]
    rows: list[CsvRow] = []
    for cells in records[1:]:
        rows.append({header: (cells[index] if index < len(cells) else "") for index, header in enumerate(headers)})
    return rows
