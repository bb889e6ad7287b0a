"""
Validation utilities for form and CSV input.
"""
from typing import Optional, List, Any
import re
import pandas as pd
from datetime import datetime


def validate_date_format(date_str: str) -> bool:
    """
    Validate that a date string is in YYYY-MM-DD format.

    Args:
        date_str (str): The date string to validate

    Returns:
        bool: True if the date is valid, False otherwise
    """
    try:
        datetime.strptime(date_str, '%Y-%m-%d')
        return True
    except (ValueError, TypeError):
        return False


def validate_quantity(quantity: Any) -> int:
    """
    Validate and convert an order quantity.

    Args:
        quantity (Any): The quantity value to validate

    Returns:
        int: The validated quantity, never negative
    """
    try:
        return max(0, int(quantity))
    except (ValueError, TypeError):
        return 0


def parse_optional_float(value: Any) -> Optional[float]:
    """
    Convert a form or CSV cell to a float, treating blanks as missing.

    Args:
        value (Any): Raw value

    Returns:
        Optional[float]: Parsed number, or None for blank/invalid input
    """
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        result = float(value)
    except (ValueError, TypeError):
        return None
    if pd.isna(result):
        return None
    return result


def parse_optional_int(value: Any) -> Optional[int]:
    """
    Convert a form or CSV cell to an int, treating blanks as missing.
    """
    result = parse_optional_float(value)
    return int(result) if result is not None else None


def parse_optional_bool(value: Any) -> Optional[bool]:
    """
    Parse TRUE/FALSE cells as exported by the marketplace.

    Args:
        value (Any): Raw value

    Returns:
        Optional[bool]: True/False, or None when the cell is neither
    """
    if isinstance(value, bool):
        return value
    if not isinstance(value, str):
        return None
    normalized = value.strip().upper()
    if normalized == "TRUE":
        return True
    if normalized == "FALSE":
        return False
    return None


def clean_code(value: Optional[str]) -> str:
    """
    Strip all whitespace from a category or print code.

    Args:
        value (Optional[str]): Raw code

    Returns:
        str: Code without whitespace ('' for None)
    """
    if value is None:
        return ""
    return re.sub(r"\s+", "", str(value))


def normalize_name_prefix(prefix: Optional[str]) -> Optional[str]:
    """
    Make sure a product-name prefix ends with " |".

    Args:
        prefix (Optional[str]): Prefix as entered

    Returns:
        Optional[str]: Normalised prefix, or None when blank
    """
    if prefix is None or not prefix.strip():
        return None
    trimmed = prefix.rstrip()
    if trimmed.endswith("|"):
        return trimmed
    return f"{trimmed} |"


def validate_dataframe(df: pd.DataFrame, required_columns: List[str]) -> bool:
    """
    Validate that a DataFrame contains the required columns.

    Args:
        df (pd.DataFrame): The DataFrame to validate
        required_columns (List[str]): List of required column names

    Returns:
        bool: True if all required columns exist, False otherwise
    """
    if df is None or df.empty:
        return False

    missing_columns = [col for col in required_columns if col not in df.columns]
    return len(missing_columns) == 0
