"""
Utility package for the inventory application.
"""
from orange_sugar_inventory.utils.logging_config import setup_logging, get_logger
from orange_sugar_inventory.utils.validation import (
    validate_date_format,
    validate_quantity,
    parse_optional_float,
    parse_optional_int,
    parse_optional_bool,
    clean_code,
    normalize_name_prefix,
    validate_dataframe
)
from orange_sugar_inventory.utils.date_helpers import (
    business_today,
    business_day_bounds,
    days_since
)
