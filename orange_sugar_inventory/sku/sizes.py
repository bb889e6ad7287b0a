"""
Size helpers: common sizes across bundle products and display ordering.
"""
from typing import Any, Iterable, List, Sequence

from orange_sugar_inventory.config.app_config import SIZE_ORDER


def size_name(entry: Any) -> str:
    """
    Get the size name of a plain string, a record or a dict row.

    Args:
        entry (Any): "M", Size(size_name="M") or {"size_name": "M"}

    Returns:
        str: The size name
    """
    if isinstance(entry, str):
        return entry
    if isinstance(entry, dict):
        return entry["size_name"]
    return entry.size_name


def intersect_sizes(product_size_lists: Iterable[Sequence[Any]]) -> List[Any]:
    """
    Find the sizes every bundle product is available in.

    Products with no sizes put no constraint on the result and are
    skipped. Sizes are matched by name only; the result keeps the entries
    and the order of the first product that has sizes.

    Args:
        product_size_lists (Iterable[Sequence[Any]]): Size entries per product

    Returns:
        List[Any]: Entries of the first qualifying list present in all others
    """
    qualifying = [sizes for sizes in product_size_lists if len(sizes) > 0]

    if not qualifying:
        return []

    intersection = list(qualifying[0])
    for sizes in qualifying[1:]:
        names = {size_name(entry) for entry in sizes}
        intersection = [entry for entry in intersection if size_name(entry) in names]

    return intersection


def _size_sort_key(entry: Any):
    name = size_name(entry)
    try:
        return (0, SIZE_ORDER.index(name), "")
    except ValueError:
        return (1, 0, name)


def sort_sizes(sizes: Iterable[Any]) -> List[Any]:
    """
    Order sizes for display: known sizes by SIZE_ORDER, the rest alphabetically after them.

    Args:
        sizes (Iterable[Any]): Size names or size records

    Returns:
        List[Any]: A new, sorted list
    """
    return sorted(sizes, key=_size_sort_key)
