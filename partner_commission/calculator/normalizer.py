# ==============================================================================
# partner_commission/calculator/normalizer.py
# ------------------------------------------------------------------------------
# Maps raw upload rows onto CommissionRecord and builds the record set that
# replaces the stored data on every upload.
# ==============================================================================

import logging
from collections.abc import Mapping, Sequence
from datetime import datetime, timezone

from .cells import is_blank, to_amount, to_text
from .dates import DATE_FORMAT, REPORTING_TZ, normalize_date
from .errors import InvalidInputError, MalformedRowError
from .schema import AMOUNT_FIELDS, CAMEL_NAMES, COLUMNS, TEXT_FIELDS, CommissionRecord


def _is_row_sequence(value):
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _cells_from_sequence(row):
    return {name: (row[position] if position < len(row) else None)
            for name, position in COLUMNS.items()}


def _cells_from_mapping(row):
    # JSON uploads use camelCase; the renamed database schema uses snake_case.
    cells = {}
    for name in COLUMNS:
        value = row.get(CAMEL_NAMES[name])
        cells[name] = row.get(name) if value is None else value
    return cells


def normalize_row(raw_row, index, now=None, tz=REPORTING_TZ):
    """
    Normalizes one upload row into a CommissionRecord.

    Args:
        raw_row: A positional list of spreadsheet cells or a dict of named fields.
        index (int): Position of the row among the data rows (header excluded).
        now (datetime): Normalization timestamp; defaults to the current UTC time.
        tz (tzinfo): Reporting timezone for date conversion.

    Returns:
        CommissionRecord, or None when a positional row is empty.

    Raises:
        MalformedRowError: If the row is neither a list of cells nor a mapping.
    """
    if raw_row is None:
        return None

    if isinstance(raw_row, Mapping):
        cells = _cells_from_mapping(raw_row)
    elif _is_row_sequence(raw_row):
        if all(is_blank(cell) for cell in raw_row):
            return None
        cells = _cells_from_sequence(raw_row)
    else:
        raise MalformedRowError(
            f"Row {index + 1} is a {type(raw_row).__name__}, expected a list of cells or an object."
        )

    now = now or datetime.now(timezone.utc)
    values = {name: to_amount(cells[name]) for name in AMOUNT_FIELDS}
    values.update({name: to_text(cells[name]) for name in TEXT_FIELDS})
    order_no = values.pop('order_no') or f"ORDER-{index + 1}"

    return CommissionRecord(
        id=f"record_{int(now.timestamp() * 1000)}_{index}",
        order_date=normalize_date(cells['order_date'], tz=tz,
                                  today=now.astimezone(tz).strftime(DATE_FORMAT)),
        order_no=order_no,
        created_at=now,
        updated_at=now,
        **values,
    )


def _data_rows(payload):
    if payload is None or not _is_row_sequence(payload):
        raise InvalidInputError("Upload data must be a list of spreadsheet rows or records.")

    rows = list(payload)
    if not rows:
        raise InvalidInputError("Upload data contains no rows.")

    first = next((row for row in rows if row is not None), None)
    if isinstance(first, Mapping):
        return rows

    if len(rows) < 2:
        raise InvalidInputError("Spreadsheet must contain a header row and at least one data row.")
    return rows[1:]


def build_record_set(payload, now=None, tz=REPORTING_TZ):
    """
    Normalizes a whole upload payload.

    A raw grid has its first row discarded as the header; a list of objects is
    used as-is. Rows that cannot be mapped are logged and skipped, and records
    without a positive commission tier are dropped.

    Raises:
        InvalidInputError: If the payload is absent, not a list, or has no data rows.
    """
    rows = _data_rows(payload)
    now = now or datetime.now(timezone.utc)

    records = []
    skipped = dropped = 0
    for index, raw_row in enumerate(rows):
        try:
            record = normalize_row(raw_row, index, now=now, tz=tz)
        except (MalformedRowError, TypeError, ValueError) as e:
            logging.warning(f"SKIPPING Row {index + 1}: {e}")
            skipped += 1
            continue

        if record is None:
            continue
        if not record.has_commission:
            dropped += 1
            continue
        records.append(record)

    logging.info(f"Built record set: {len(records)} records kept, "
                 f"{dropped} without commission, {skipped} malformed, from {len(rows)} rows.")
    return records
