"""
Input components for the Streamlit pages.
"""
from typing import Dict, List, Optional, Sequence
import datetime
import pandas as pd
import streamlit as st
from orange_sugar_inventory.data.models.catalog import Category, Print, Size
from orange_sugar_inventory.data.models.orders import SizeQuantity
from orange_sugar_inventory.utils.date_helpers import business_today
from orange_sugar_inventory.utils.validation import parse_optional_float, validate_quantity


def create_date_input(label: str = "PO Date", key: Optional[str] = None) -> datetime.date:
    """
    Create a date widget defaulting to today in the business timezone.

    Args:
        label (str): Widget label
        key (Optional[str]): Streamlit widget key

    Returns:
        datetime.date: Selected date
    """
    return st.date_input(label, value=business_today(), key=key)


def create_category_select(
    categories: Sequence[Category],
    label: str = "Category",
    key: Optional[str] = None
) -> Optional[Category]:
    """
    Create a category selectbox.

    Args:
        categories (Sequence[Category]): Categories to offer
        label (str): Widget label
        key (Optional[str]): Streamlit widget key

    Returns:
        Optional[Category]: Selected category, or None when there are none
    """
    if not categories:
        st.info("No categories found. Add one under Master Data.")
        return None

    by_name = {c.category_name: c for c in categories}
    selected = st.selectbox(label, options=sorted(by_name), key=key)
    return by_name.get(selected)


def create_print_select(
    prints: Sequence[Print],
    multiple: bool = True,
    label: str = "Prints",
    key: Optional[str] = None
) -> List[Print]:
    """
    Create a print picker; with multiple=True the selection order is kept.

    Returns:
        List[Print]: Selected prints in the order they were picked
    """
    by_name = {p.official_print_name: p for p in prints}
    if multiple:
        selected = st.multiselect(label, options=sorted(by_name), key=key)
        return [by_name[name] for name in selected]

    selected = st.selectbox(label, options=[""] + sorted(by_name), key=key)
    return [by_name[selected]] if selected else []


def create_size_select(sizes: Sequence[Size], label: str = "Sizes", key: Optional[str] = None) -> List[Size]:
    by_name = {s.size_name: s for s in sizes}
    names = list(by_name)
    selected = st.multiselect(label, options=names, default=names, key=key)
    return [by_name[name] for name in selected]


def create_size_quantity_editor(
    sizes: Sequence[Size],
    skus: Dict[str, str],
    cost_prices: Dict[str, Optional[float]],
    key: Optional[str] = None
) -> List[SizeQuantity]:
    """
    Create an editable table with one row per size for quantities and cost prices.

    Args:
        sizes (Sequence[Size]): Sizes available for the selection
        skus (Dict[str, str]): Size ID -> SKU
        cost_prices (Dict[str, Optional[float]]): Size ID -> stored cost price
        key (Optional[str]): Streamlit widget key

    Returns:
        List[SizeQuantity]: Edited rows
    """
    df = pd.DataFrame([
        {
            "size_id": s.id,
            "Size": s.size_name,
            "SKU": skus.get(s.id, ""),
            "Quantity": 0,
            "Cost Price": cost_prices.get(s.id) or 0.0,
        }
        for s in sizes
    ])

    if df.empty:
        st.info("No sizes available for this selection.")
        return []

    edited = st.data_editor(
        df,
        column_config={"size_id": None},
        disabled=["Size", "SKU"],
        hide_index=True,
        use_container_width=True,
        key=key
    )

    return [
        SizeQuantity(
            size=row["Size"],
            quantity=validate_quantity(row["Quantity"]),
            cost_price=parse_optional_float(row["Cost Price"]) or 0.0,
            size_id=row["size_id"],
            sku=row["SKU"] or None
        )
        for row in edited.to_dict("records")
    ]


def create_submit_button(label: str, key: Optional[str] = None, disabled: bool = False) -> bool:
    return st.button(label, type="primary", key=key, disabled=disabled)
