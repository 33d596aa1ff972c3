# ==============================================================================
# partner_commission/calculator/cells.py
# ------------------------------------------------------------------------------
# Tolerant coercion of single spreadsheet cells. A bad cell never raises; it
# falls back to the field's default value.
# ==============================================================================

import math
import numbers
from decimal import Decimal

import pandas as pd


def is_blank(value):
    """True for None, NaN/NaT and whitespace-only strings."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict, set)):
        return False
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def to_amount(value):
    """
    Parses a commission or payment cell into a non-negative float.
    Thousands separators are ignored. Anything unparsable, non-finite or
    negative becomes 0.0.
    """
    if isinstance(value, bool) or is_blank(value):
        return 0.0
    if isinstance(value, (numbers.Real, Decimal)):
        number = float(value)
    elif isinstance(value, str):
        number = pd.to_numeric(value.strip().replace(',', ''), errors='coerce')
        try:
            number = float(number)
        except (TypeError, ValueError):
            return 0.0
    else:
        return 0.0

    if math.isnan(number) or math.isinf(number) or number < 0:
        return 0.0
    return number


def to_text(value):
    """Renders a cell as stripped text; blanks become ''."""
    if is_blank(value):
        return ''
    if isinstance(value, float) and value.is_integer():
        # pandas hands integer-looking cells back as floats (e.g. order numbers)
        return str(int(value))
    return str(value).strip()
