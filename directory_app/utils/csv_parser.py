"""
Minimal CSV reader for published spreadsheet exports.

Handles what Google Sheets emits for single-line cells: quoted fields with embedded
commas and doubled quotes. Multi-line cells, other delimiters and streaming are not
supported. Parsing never raises; odd input just yields best-effort fields.
"""

import re
from typing import List

from directory_app.utils.records import Dataset, Record

_LINE_BREAK = re.compile(r"\r?\n")


def split_line(line: str) -> List[str]:
    """
    Split one line on commas that are not inside a double-quoted field.

    A comma is inside quotes when an odd number of quote characters precede it
    on the line. Tokens are returned raw (no trimming or unquoting).
    """
    tokens = []
    start = 0
    quotes = 0
    for pos, char in enumerate(line):
        if char == '"':
            quotes += 1
        elif char == "," and quotes % 2 == 0:
            tokens.append(line[start:pos])
            start = pos + 1
    tokens.append(line[start:])
    return tokens


def _unwrap(token: str) -> str:
    # exactly one layer of surrounding quotes
    token = token.strip()
    if token.startswith('"'):
        token = token[1:]
    if token.endswith('"'):
        token = token[:-1]
    return token


def _clean_header(token: str) -> str:
    return _unwrap(token)


def _clean_value(token: str) -> str:
    return _unwrap(token).replace('""', '"')


def parse_csv(csv_text: str) -> Dataset:
    """
    Parse CSV text into a list of records keyed by the header row.

    Blank lines are dropped wherever they appear. Input with no data line after
    the header gives an empty list. Short rows are padded with "" and extra
    values beyond the header are ignored.
    """
    # byte-order mark from some spreadsheet exports
    text = (csv_text or "").lstrip("\ufeff")
    lines = [line for line in _LINE_BREAK.split(text) if line.strip()]
    if len(lines) < 2:
        return []

    headers = [_clean_header(h) for h in split_line(lines[0])]

    records: Dataset = []
    for line in lines[1:]:
        values = [_clean_value(v) for v in split_line(line)]
        record: Record = {}
        for i, header in enumerate(headers):
            record[header] = values[i] if i < len(values) else ""
        records.append(record)
    return records
