# ==============================================================================
# partner_commission/calculator/dates.py
# ------------------------------------------------------------------------------
# Converts raw spreadsheet date cells into canonical 'YYYY-MM-DD' strings in
# the reporting timezone. Malformed dates fall back to today's date so that a
# bad date cell never costs us an otherwise valid commission row.
# ==============================================================================

import logging
import numbers
from datetime import date, datetime, timedelta, timezone

import pandas as pd

from .cells import is_blank

DATE_FORMAT = '%Y-%m-%d'

# Serial day 0 of the 1900 date system. Starting on Dec 30 rather than Jan 1
# absorbs the phantom 1900-02-29 that spreadsheets count.
EXCEL_EPOCH = datetime(1899, 12, 30, tzinfo=timezone.utc)

# Numbers at or below this are not trusted as serial dates (40000 = 2009-07-06).
EXCEL_SERIAL_THRESHOLD = 40000

REPORTING_TZ = timezone(timedelta(hours=7))


def reporting_timezone(offset_hours):
    return timezone(timedelta(hours=offset_hours))


def today_in(tz=REPORTING_TZ):
    """Current processing date in the given timezone."""
    return datetime.now(tz).strftime(DATE_FORMAT)


def _from_serial(serial, tz):
    moment = EXCEL_EPOCH + timedelta(days=float(serial))
    return moment.astimezone(tz).strftime(DATE_FORMAT)


def _from_datetime(value, tz):
    # naive values are taken as already local
    if isinstance(value, datetime) and value.tzinfo is not None:
        value = value.astimezone(tz)
    return value.strftime(DATE_FORMAT)


def _from_slashes(text):
    """
    Reads 'M/D/Y', or 'D/M/Y' when the first part cannot be a month.
    Returns None when the parts do not form a real calendar date.
    """
    parts = [part.strip() for part in text.split('/')]
    if len(parts) != 3 or not all(part.isdigit() for part in parts):
        return None

    first, second, year = (int(part) for part in parts)
    if first > 12:
        day, month = first, second
    else:
        month, day = first, second
    if year < 100:
        year += 2000

    try:
        return date(year, month, day).strftime(DATE_FORMAT)
    except ValueError:
        return None


def _from_text(text, tz):
    try:
        parsed = pd.to_datetime(text, errors='coerce')
    except (ValueError, TypeError, OverflowError):
        return None
    if pd.isna(parsed):
        return None
    return _from_datetime(parsed.to_pydatetime(), tz)


def normalize_date(value, tz=REPORTING_TZ, today=None):
    """
    Normalizes a raw date cell.

    Args:
        value: A spreadsheet serial number, a datetime/date (or pandas
            Timestamp), a slash-delimited string, or any string pandas can parse.
        tz (tzinfo): The reporting timezone.
        today (str): Fallback date; defaults to the current date in `tz`.

    Returns:
        str: The date as 'YYYY-MM-DD'. Never raises.
    """
    fallback = today or today_in(tz)

    if isinstance(value, bool) or is_blank(value):
        return fallback

    try:
        if isinstance(value, (datetime, date)):
            return _from_datetime(value, tz)

        if isinstance(value, numbers.Real):
            if value > EXCEL_SERIAL_THRESHOLD:
                return _from_serial(value, tz)
            logging.debug(f"Number {value!r} is below the serial date threshold; using {fallback}.")
            return fallback

        text = str(value).strip()
        if '/' in text:
            normalized = _from_slashes(text)
            if normalized:
                return normalized

        normalized = _from_text(text, tz)
        if normalized:
            return normalized
    except (ValueError, OverflowError) as e:
        logging.debug(f"Date value {value!r} could not be converted: {e}")

    logging.debug(f"Unparsable date {value!r}; using {fallback}.")
    return fallback
