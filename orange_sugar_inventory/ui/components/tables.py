"""
Display components: metrics, tables, charts and downloads.
"""
from typing import Any, Dict, Sequence
import pandas as pd
import plotly.express as px
import streamlit as st
from orange_sugar_inventory.data.models.item_master import GenerationResult
from orange_sugar_inventory.data.models.orders import PurchaseOrder
from orange_sugar_inventory.exporters.base_exporter import EXPORTS, FRAME_BUILDERS
from orange_sugar_inventory.exporters.csv_exporter import CSVExporter
from orange_sugar_inventory.exporters.xlsx_exporter import XLSXExporter
from orange_sugar_inventory.services.purchase_order_service import PurchaseOrderService


def create_order_metrics(orders: Sequence[PurchaseOrder]) -> None:
    """
    Display order, unit and value totals as Streamlit metrics.

    Args:
        orders (Sequence[PurchaseOrder]): Orders of the selected day
    """
    totals = PurchaseOrderService.order_totals(orders)

    # KPI row
    col1, col2, col3 = st.container().columns(3)
    col1.metric("Orders", f"{totals['orders']:,}")
    col2.metric("Units", f"{totals['units']:,}")
    col3.metric("Value", f"₹{totals['value']:,.2f}")


def create_category_chart(orders: Sequence[PurchaseOrder]) -> None:
    """
    Display ordered value per category as a bar chart.

    Args:
        orders (Sequence[PurchaseOrder]): Orders of the selected day
    """
    summary = PurchaseOrderService.summarize(orders)
    if summary.empty:
        return

    fig = px.bar(
        summary,
        x="category",
        y="value",
        hover_data=["orders", "units"],
        labels={"category": "Category", "value": "Value", "orders": "Orders", "units": "Units"},
        title="Purchase Order Value by Category"
    )
    fig.update_layout(xaxis_tickangle=-45, showlegend=False)

    st.plotly_chart(fig, use_container_width=True)


def create_export_table(export_name: str, data: Sequence[Any]) -> pd.DataFrame:
    """
    Display rows in their export layout and return the frame.
    """
    df = FRAME_BUILDERS[export_name](data)
    st.dataframe(df, use_container_width=True, hide_index=True)
    return df


def create_download_buttons(export_name: str, df: pd.DataFrame, label: str) -> None:
    """
    Offer the export frame as CSV and XLSX downloads.

    Args:
        export_name (str): Key into EXPORTS
        df (pd.DataFrame): Frame in export layout
        label (str): File name suffix, usually the day
    """
    prefix, sheet_name = EXPORTS[export_name]
    col1, col2 = st.columns(2)

    col1.download_button(
        "Download CSV",
        data=CSVExporter.to_bytes(df),
        file_name=f"{prefix}_{label}.csv",
        mime="text/csv",
        key=f"{export_name}_csv",
        disabled=df.empty
    )
    col2.download_button(
        "Download Excel",
        data=XLSXExporter().to_bytes(df, sheet_name),
        file_name=f"{prefix}_{label}.xlsx",
        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        key=f"{export_name}_xlsx",
        disabled=df.empty
    )


def create_generation_summary(result: GenerationResult) -> None:
    """
    Show the counts of a generation run and list the failed rows.

    Args:
        result (GenerationResult): Outcome of an item master or bundle run
    """
    if result.error_count == 0:
        st.success(f"Processed {result.success_count} rows.")
    else:
        st.warning(f"Processed {result.success_count} rows, {result.error_count} failed.")

    counts: Dict[str, int] = {
        "Created": result.created_count,
        "Already existed": result.existed_count,
        "Added to item master": result.added_to_master_count,
    }
    if any(counts.values()):
        st.write(", ".join(f"{name}: {count}" for name, count in counts.items()))

    errors = [r for r in result.results if not r.ok]
    if errors:
        st.dataframe(
            pd.DataFrame([{"Product Code": r.product_code, "Error": r.error} for r in errors]),
            use_container_width=True,
            hide_index=True
        )
