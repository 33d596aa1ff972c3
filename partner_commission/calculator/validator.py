# ==============================================================================
# partner_commission/calculator/validator.py
# ------------------------------------------------------------------------------
# Handles reading and structural validation of uploaded spreadsheet files.
# ==============================================================================

import os

import pandas as pd

from .cells import is_blank
from .errors import InvalidInputError


def allowed_file(filename, allowed_extensions):
    """Checks if the file extension is in the allowed set (e.g. {'.xlsx'})."""
    return bool(filename) and os.path.splitext(filename)[1].lower() in allowed_extensions


def read_excel_grid(source):
    """
    Reads the first sheet of an Excel workbook as a raw cell grid.

    Args:
        source: A path or a binary file-like object.

    Returns:
        list: Rows of cell values, header row included. Empty cells are None;
        date cells arrive as pandas Timestamps.

    Raises:
        InvalidInputError: If the file cannot be read or has no data rows.
    """
    try:
        df = pd.read_excel(source, sheet_name=0, header=None, dtype=object)
    except Exception as e:
        raise InvalidInputError("Excel file is invalid or unreadable.", details=str(e)) from e

    grid = [[None if is_blank(cell) else cell for cell in row]
            for row in df.itertuples(index=False, name=None)]

    if len(grid) < 2:
        raise InvalidInputError("Spreadsheet must contain a header row and at least one data row.")
    return grid
