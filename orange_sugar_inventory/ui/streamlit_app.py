"""
Streamlit web interface for Orange Sugar Inventory.
"""
import streamlit as st
import pandas as pd
import traceback
import sys
import os
from typing import List, Optional

# Add the parent directory to the path so we can import the package
# This is only needed when running the script directly
parent_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if parent_dir not in sys.path:
    sys.path.insert(0, parent_dir)

from orange_sugar_inventory.main import InventoryApp
from orange_sugar_inventory.data.models.catalog import Category, Print, Product
from orange_sugar_inventory.data.models.item_master import IndividualProduct
from orange_sugar_inventory.exceptions import InventoryError
from orange_sugar_inventory.ui.components.forms import (
    create_category_select,
    create_date_input,
    create_print_select,
    create_size_quantity_editor,
    create_size_select,
    create_submit_button
)
from orange_sugar_inventory.ui.components.tables import (
    create_category_chart,
    create_download_buttons,
    create_export_table,
    create_generation_summary,
    create_order_metrics
)
from orange_sugar_inventory.utils.validation import normalize_name_prefix, parse_optional_float

PAGES = ["Purchase Orders", "Item Master", "Bundle Item Master", "Master Data"]
SKU_SCHEMAS = list(range(7))
CATEGORY_TYPES = ["single", "bundle"]


# Set page configuration
st.set_page_config(
    page_title="Orange Sugar Inventory",
    page_icon="📦",
    layout="wide"
)

# Page title and description
st.title("Orange Sugar Inventory")
st.markdown("Purchase orders, item master and bundle exports for the marketplace.")


# Initialize the application
@st.cache_resource
def initialize_app():
    """Initialize database connection, repositories and services."""
    return InventoryApp()


def show_error(e: Exception) -> None:
    """Show an error; unexpected ones also get a traceback."""
    if isinstance(e, InventoryError):
        st.error(str(e))
    else:
        st.error(f"Unexpected error: {str(e)}")
        st.error(f"Detailed error: {traceback.format_exc()}")


def purchase_orders_page(app: InventoryApp) -> None:
    st.header("Purchase Orders")
    po_date = create_date_input("PO Date", key="po_date")

    categories = [c for c in app.master_data.list_categories() if not c.is_bundle]
    category = create_category_select(categories, key="po_category")
    if category is not None:
        prints = create_print_select(
            app.master_data.list_prints(category.id),
            multiple=category.multi_print,
            label="Prints" if category.multi_print else "Print",
            key="po_prints"
        )
        if prints:
            sizes = app.size_repository.get_all(category.id, [p.id for p in prints])
            if not sizes:
                sizes = app.master_data.list_sizes()

            skus, cost_prices = {}, {}
            for size in sizes:
                sku, cost_price = app.purchase_orders.resolve_sku(category, prints, size.id, size.size_name)
                skus[size.id] = sku
                cost_prices[size.id] = cost_price

            rows = create_size_quantity_editor(sizes, skus, cost_prices, key="po_rows")
            if create_submit_button("Add Orders", key="po_submit"):
                try:
                    created = app.purchase_orders.create_orders(category, prints, rows, po_date)
                    st.success(f"Added {len(created)} orders.")
                except Exception as e:
                    show_error(e)

    st.subheader(f"Orders for {po_date.isoformat()}")
    orders = app.purchase_orders.list_orders(po_date)
    create_order_metrics(orders)
    create_category_chart(orders)
    df = create_export_table("purchase_orders", orders)
    create_download_buttons("purchase_orders", df, po_date.isoformat())

    if not orders:
        return

    by_label = {f"{o.sku} ({o.size}, qty {o.quantity})": o for o in orders}
    order = by_label[st.selectbox("Order", options=list(by_label), key="po_select")]

    with st.form("po_edit_form"):
        col1, col2 = st.columns(2)
        quantity = col1.number_input("Quantity", min_value=1, value=max(int(order.quantity), 1), step=1)
        cost_price = col2.number_input("Cost Price", min_value=0.0, value=float(order.cost_price or 0.0))
        if st.form_submit_button("Update Order"):
            try:
                app.purchase_orders.update_order(order.id, quantity=quantity, cost_price=cost_price)
            except Exception as e:
                show_error(e)
            else:
                st.rerun()

    col1, col2 = st.columns(2)
    if col1.button("Delete Order", key="po_delete"):
        try:
            app.purchase_orders.delete_order(order.id)
        except Exception as e:
            show_error(e)
        else:
            st.rerun()
    if col2.button("Delete All Orders for This Date", key="po_delete_all"):
        try:
            count = app.purchase_orders.delete_orders_for_date(po_date)
        except Exception as e:
            show_error(e)
        else:
            st.success(f"Deleted {count} orders.")
            st.rerun()


def item_master_page(app: InventoryApp) -> None:
    st.header("Item Master")

    categories = [c for c in app.master_data.list_categories() if not c.is_bundle]
    category = create_category_select(categories, key="im_category")
    if category is not None:
        prints = create_print_select(app.master_data.list_prints(category.id), multiple=False, label="Print", key="im_print")
        if prints:
            sizes = create_size_select(app.size_repository.get_all(category.id, [prints[0].id]), key="im_sizes")
            if create_submit_button("Generate Item Master", key="im_generate", disabled=not sizes):
                try:
                    result = app.item_master.generate(category, prints[0], [s.id for s in sizes])
                    create_generation_summary(result)
                except Exception as e:
                    show_error(e)

    st.subheader("Visible Items")
    rows = app.item_master.list_visible()
    df = create_export_table("item_master", rows)
    create_download_buttons("item_master", df, pd.Timestamp.now().strftime("%Y-%m-%d"))

    if rows and st.button("Clear Item Master", key="im_hide_all"):
        count = app.item_master.hide_all()
        st.success(f"Hid {count} items.")
        st.rerun()


def _bundle_products(app: InventoryApp, categories: List[Category], key: str) -> List[IndividualProduct]:
    """Collect one category + print pick per bundle component."""
    count = st.number_input("Products in bundle", min_value=2, max_value=6, value=2, step=1, key=f"{key}_count")
    products = []
    for index in range(int(count)):
        col1, col2, col3 = st.columns([2, 2, 1])
        with col1:
            category = create_category_select(categories, label=f"Category {index + 1}", key=f"{key}_category_{index}")
        if category is None:
            continue
        with col2:
            picked = create_print_select(
                app.master_data.list_prints(category.id),
                multiple=False,
                label=f"Print {index + 1}",
                key=f"{key}_print_{index}"
            )
        with col3:
            quantity = st.number_input("Qty", min_value=1, value=1, step=1, key=f"{key}_qty_{index}")
        if picked:
            products.append(IndividualProduct(
                category_id=category.id,
                category_code=category.category_code or "",
                print_id=picked[0].id,
                print_code=picked[0].print_code or "",
                print_name=picked[0].official_print_name,
                quantity=int(quantity),
                category_name=category.category_name
            ))
    return products


def _bundle_selection(app: InventoryApp, key: str):
    """Bundle category, components and sizes shared by both bundle forms."""
    categories = app.master_data.list_categories()
    bundle_category = create_category_select(
        [c for c in categories if c.is_bundle], label="Bundle Category", key=f"{key}_bundle_category"
    )
    products = _bundle_products(app, [c for c in categories if not c.is_bundle], key)

    if bundle_category is None or len(products) < 2:
        return bundle_category, products, []

    common = app.bundles.common_sizes(products)
    if not common:
        st.warning("The selected products have no size in common.")
        return bundle_category, products, []

    sizes = create_size_select(common, label="Bundle Sizes", key=f"{key}_sizes")
    return bundle_category, products, [s.size_name for s in sizes]


def bundle_item_master_page(app: InventoryApp) -> None:
    st.header("Bundle Item Master")

    bundle_category, products, size_names = _bundle_selection(app, "bim")
    if size_names:
        try:
            check = app.bundles.check_reference(bundle_category.category_name, products, size_names)
        except Exception as e:
            show_error(e)
            check = None

        if check is not None:
            if check.existing_bundles:
                st.info(f"Found in reference: {', '.join(b.product_code for b in check.existing_bundles)}")
            if check.missing_bundles:
                st.warning(f"Not in reference, will be created: {', '.join(check.missing_bundles)}")

            if create_submit_button("Add to Bundle Item Master", key="bim_submit"):
                try:
                    create_generation_summary(app.bundles.add_bundles(bundle_category, products, size_names))
                except Exception as e:
                    show_error(e)

    st.subheader("Bundles Added")
    day = create_date_input("Added on", key="bundle_day")
    rows = app.bundles.list_item_master(day)
    df = create_export_table("bundle_item_master", rows)
    create_download_buttons("bundle_item_master", df, day.isoformat())

    if rows and st.button("Delete Bundles Added on This Day", key="bundle_delete"):
        count = app.bundles.delete_item_master(day)
        st.success(f"Deleted {count} rows.")
        st.rerun()


def _category_form(form_key: str, category: Optional[Category] = None) -> Optional[Category]:
    """Category fields; returns the entered category when the form is submitted."""
    current = category or Category(id="", category_name="")
    with st.form(form_key, clear_on_submit=category is None):
        name = st.text_input("Category Name", value=current.category_name)
        code = st.text_input("Category Code", value=current.category_code or "")
        schema = st.selectbox(
            "SKU Schema",
            options=SKU_SCHEMAS,
            index=SKU_SCHEMAS.index(current.sku_schema) if current.sku_schema in SKU_SCHEMAS else 1
        )
        hsn = st.text_input("HSN Code", value=current.hsn_code or "")
        prefix = st.text_input("Product Name Prefix", value=current.product_name_prefix or "")
        category_type = st.selectbox(
            "Type", options=CATEGORY_TYPES, index=1 if current.is_bundle else 0
        )
        size_in_name = st.checkbox("Size in product name", value=bool(current.size_in_product_name))
        if not st.form_submit_button("Save Category" if category else "Add Category"):
            return None

    return Category(
        id=current.id,
        category_name=name.strip(),
        category_code=code.strip() or None,
        sku_schema=schema,
        hsn_code=hsn.strip() or None,
        size_in_product_name=size_in_name,
        product_name_prefix=normalize_name_prefix(prefix),
        category_type=category_type
    )


def _print_form(form_key: str, print_: Optional[Print] = None) -> Optional[Print]:
    current = print_ or Print(id="", official_print_name="")
    with st.form(form_key, clear_on_submit=print_ is None):
        name = st.text_input("Print Name", value=current.official_print_name)
        code = st.text_input("Print Code", value=current.print_code or "")
        color = st.text_input("Color", value=current.color or "")
        if not st.form_submit_button("Save Print" if print_ else "Add Print"):
            return None

    return Print(
        id=current.id,
        official_print_name=name.strip(),
        print_code=code.strip() or None,
        color=color.strip() or None
    )


def _categories_tab(app: InventoryApp) -> None:
    categories = app.master_data.list_categories()
    st.dataframe(pd.DataFrame([vars(c) for c in categories]), use_container_width=True, hide_index=True)

    st.subheader("Add Category")
    new_category = _category_form("category_add_form")
    if new_category is not None:
        try:
            app.master_data.create_category(new_category)
            st.success(f"Added category {new_category.category_name}.")
        except Exception as e:
            show_error(e)

    if not categories:
        return

    st.subheader("Edit Category")
    category = create_category_select(categories, label="Category to edit", key="category_edit_select")
    if category is None:
        return
    edited = _category_form(f"category_edit_form_{category.id}", category)
    if edited is not None:
        try:
            app.master_data.update_category(edited)
        except Exception as e:
            show_error(e)
        else:
            st.rerun()
    if st.button("Delete Category", key="category_delete"):
        try:
            app.master_data.delete_category(category.id)
        except Exception as e:
            show_error(e)
        else:
            st.rerun()


def _prints_tab(app: InventoryApp) -> None:
    prints = app.master_data.list_prints()
    st.dataframe(pd.DataFrame([vars(p) for p in prints]), use_container_width=True, hide_index=True)

    st.subheader("Add Print")
    new_print = _print_form("print_add_form")
    if new_print is not None:
        try:
            app.master_data.create_print(new_print)
            st.success(f"Added print {new_print.official_print_name}.")
        except Exception as e:
            show_error(e)

    if not prints:
        return

    st.subheader("Edit Print")
    picked = create_print_select(prints, multiple=False, label="Print to edit", key="print_edit_select")
    if not picked:
        return
    edited = _print_form(f"print_edit_form_{picked[0].id}", picked[0])
    if edited is not None:
        try:
            app.master_data.update_print(edited)
        except Exception as e:
            show_error(e)
        else:
            st.rerun()
    if st.button("Delete Print", key="print_delete"):
        try:
            app.master_data.delete_print(picked[0].id)
        except Exception as e:
            show_error(e)
        else:
            st.rerun()


def _sizes_tab(app: InventoryApp) -> None:
    sizes = app.master_data.list_sizes()
    st.write(", ".join(s.size_name for s in sizes))
    with st.form("size_form", clear_on_submit=True):
        name = st.text_input("Size Name")
        if st.form_submit_button("Add Size"):
            try:
                app.master_data.create_size(name)
                st.success(f"Added size {name}.")
            except Exception as e:
                show_error(e)


def _products_tab(app: InventoryApp) -> None:
    st.dataframe(app.master_data.list_products(), use_container_width=True, hide_index=True)
    categories = [c for c in app.master_data.list_categories() if not c.is_bundle]
    category = create_category_select(categories, key="product_category")
    if category is None:
        return

    prints = create_print_select(
        app.master_data.list_prints(category.id),
        multiple=category.multi_print,
        label="Prints" if category.multi_print else "Print",
        key="product_prints"
    )
    sizes = app.master_data.list_sizes()
    size_by_name = {s.size_name: s for s in sizes}
    size_name = st.selectbox("Size", options=["(none)"] + list(size_by_name), key="product_size")
    size = size_by_name.get(size_name)
    suggested = app.purchase_orders.build_sku(category, prints, size_name if size else None) if prints else ""
    sku = st.text_input("SKU", value=suggested, key="product_sku")
    product_name = st.text_input("Name", key="product_name")
    col1, col2, col3 = st.columns(3)
    cost_price = col1.text_input("Cost Price", key="product_cost")
    mrp = col2.text_input("MRP", key="product_mrp")
    base_price = col3.text_input("Base Price", key="product_base")
    if create_submit_button("Add Product", key="product_submit", disabled=not prints):
        try:
            app.master_data.create_product(
                Product(
                    id="",
                    category_id=category.id,
                    product_code=sku.strip(),
                    name=product_name.strip() or None,
                    size_id=size.id if size else None,
                    cost_price=parse_optional_float(cost_price),
                    base_price=parse_optional_float(base_price),
                    mrp=parse_optional_float(mrp),
                    hsn_code=category.hsn_code
                ),
                [p.id for p in prints]
            )
            st.success(f"Added product {sku}.")
        except Exception as e:
            show_error(e)


def _weights_tab(app: InventoryApp) -> None:
    weights = app.master_data.list_weights()
    st.dataframe(
        pd.DataFrame([
            {"Category": w.category_name, "Size": w.size_name, "Weight (gms)": w.weight} for w in weights
        ]),
        use_container_width=True,
        hide_index=True
    )
    with st.form("weight_form"):
        categories = app.master_data.list_categories()
        category = create_category_select(categories, key="weight_category")
        sizes = app.master_data.list_sizes()
        size_by_name = {s.size_name: s for s in sizes}
        size_name = st.selectbox("Size", options=list(size_by_name), key="weight_size")
        grams = st.number_input("Weight (gms)", min_value=0.0, step=10.0, key="weight_grams")
        if st.form_submit_button("Save Weight") and category is not None and size_name:
            try:
                updated = app.master_data.upsert_weight(category.id, size_by_name[size_name].id, grams)
                st.success("Weight updated." if updated else "Weight added.")
            except Exception as e:
                show_error(e)

    if weights:
        by_label = {f"{w.category_name} / {w.size_name} ({w.weight} gms)": w for w in weights}
        selected = st.selectbox("Weight to delete", options=list(by_label), key="weight_delete_select")
        if st.button("Delete Weight", key="weight_delete"):
            try:
                app.master_data.delete_weight(by_label[selected].id)
            except Exception as e:
                show_error(e)
            else:
                st.rerun()


def _bundles_tab(app: InventoryApp) -> None:
    st.subheader("Add Bundle")
    bundle_category, products, size_names = _bundle_selection(app, "setup")
    if size_names:
        add_to_master = st.checkbox("Also add to bundle item master", value=False, key="setup_to_master")
        if create_submit_button("Create Bundles", key="setup_submit"):
            try:
                result = app.bundles.generate(
                    bundle_category.id,
                    bundle_category.category_name,
                    products,
                    size_names,
                    add_to_item_master=add_to_master,
                    create_reference_if_missing=True
                )
                create_generation_summary(result)
            except Exception as e:
                show_error(e)

    st.subheader("Existing Bundles")
    search = st.text_input("Search by code, name, size, style...", key="reference_search")
    rows = app.bundles.list_reference(search)
    st.caption(f"{len(rows)} rows")
    st.dataframe(
        pd.DataFrame([
            {
                "Cat. Code": r.category_code,
                "Product Code": r.product_code,
                "Name": r.name,
                "Size": r.size,
                "Base": r.base_price,
                "Cost": r.cost_price,
                "MRP": r.mrp,
                "Component Code": r.component_product_code,
                "Style": r.internal_style_name,
                "Qty": r.component_quantity,
                "Comp. Price": r.component_price,
            }
            for r in rows
        ]),
        use_container_width=True,
        hide_index=True
    )


def master_data_page(app: InventoryApp) -> None:
    st.header("Master Data")
    tabs = st.tabs(["Categories", "Prints", "Sizes", "Products", "Weights", "Bundles"])
    renderers = [_categories_tab, _prints_tab, _sizes_tab, _products_tab, _weights_tab, _bundles_tab]
    for tab, render in zip(tabs, renderers):
        with tab:
            render(app)


# Load the application
try:
    app = initialize_app()
except Exception as e:
    st.error(f"Error connecting to the database: {str(e)}")
    st.error(f"Detailed error: {traceback.format_exc()}")
    st.stop()

page = st.sidebar.radio("Page", PAGES)

try:
    if page == "Purchase Orders":
        purchase_orders_page(app)
    elif page == "Item Master":
        item_master_page(app)
    elif page == "Bundle Item Master":
        bundle_item_master_page(app)
    else:
        master_data_page(app)
except InventoryError as e:
    show_error(e)
