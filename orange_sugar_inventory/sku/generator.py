"""
SKU generation from a category's schema type.

Every category carries a schema type that picks one of seven templates:

    0  {print}{category}_{size}
    1  {print}_{category}_{size}            (also used for unknown schemas)
    2  {category}_{print}_{size}
    3  {print}_{print}..._{category}_{size}
    4  {category}_{print}_{print}..._{size}
    5  {category}_{print}_{print}...        (size never appended)
    6  {category}_{print}                   (size never appended)

The size part is dropped when no size is given or the size is "Standard".
"""
from enum import IntEnum
from typing import Optional, Sequence

from orange_sugar_inventory.config.app_config import STANDARD_SIZE


class SchemaType(IntEnum):
    """
    SKU templates, stored as integers on each category.
    """
    PRINT_CATEGORY = 0
    PRINT_UNDERSCORE_CATEGORY = 1
    CATEGORY_PRINT = 2
    PRINTS_CATEGORY = 3
    CATEGORY_PRINTS = 4
    CATEGORY_PRINTS_NO_SIZE = 5
    CATEGORY_PRINT_NO_SIZE = 6


# Schemas that take more than one print (bundles)
BUNDLE_SCHEMA_TYPES = (
    SchemaType.PRINTS_CATEGORY,
    SchemaType.CATEGORY_PRINTS,
    SchemaType.CATEGORY_PRINTS_NO_SIZE,
)


def is_bundle_schema(schema_type: Optional[int]) -> bool:
    """
    Check whether a schema type joins several prints into one SKU.

    Args:
        schema_type (Optional[int]): Schema type of the category

    Returns:
        bool: True for schemas 3, 4 and 5
    """
    return schema_type in BUNDLE_SCHEMA_TYPES


def is_known_schema(schema_type: Optional[int]) -> bool:
    """
    Check whether a schema type has its own template.
    """
    try:
        SchemaType(schema_type)
    except ValueError:
        return False
    return True


def size_suffix(size: Optional[str]) -> str:
    """
    Build the "_<size>" suffix, empty for a missing or "Standard" size.

    Args:
        size (Optional[str]): Size name

    Returns:
        str: The suffix to append to the SKU
    """
    if not size or size == STANDARD_SIZE:
        return ""
    return f"_{size}"


def generate_sku(
    schema_type: Optional[int],
    category_code: str,
    print_codes: Sequence[str],
    size: Optional[str] = None
) -> str:
    """
    Generate the SKU for a category, its prints and an optional size.

    Unknown schema types use the schema 1 template. An empty print list
    leaves the print segment empty instead of failing.

    Args:
        schema_type (Optional[int]): Schema type of the category (0-6)
        category_code (str): Category code
        print_codes (Sequence[str]): Print codes in the order chosen by the user
        size (Optional[str]): Size name

    Returns:
        str: The SKU
    """
    suffix = size_suffix(size)
    first_print = print_codes[0] if print_codes else ""
    all_prints = "_".join(print_codes)

    if schema_type == SchemaType.PRINT_CATEGORY:
        return f"{first_print}{category_code}{suffix}"
    if schema_type == SchemaType.CATEGORY_PRINT:
        return f"{category_code}_{first_print}{suffix}"
    if schema_type == SchemaType.PRINTS_CATEGORY:
        return f"{all_prints}_{category_code}{suffix}"
    if schema_type == SchemaType.CATEGORY_PRINTS:
        return f"{category_code}_{all_prints}{suffix}"
    if schema_type == SchemaType.CATEGORY_PRINTS_NO_SIZE:
        return f"{category_code}_{all_prints}"
    if schema_type == SchemaType.CATEGORY_PRINT_NO_SIZE:
        return f"{category_code}_{first_print}"

    # Schema 1 and anything unrecognised
    return f"{first_print}_{category_code}{suffix}"
