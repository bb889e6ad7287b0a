"""
Application-wide configuration settings for the inventory application.
"""
import os
from typing import Dict, Any, List

# Branding and fixed export values
DEFAULT_BRAND = os.environ.get("INVENTORY_BRAND", "Orange Sugar")

# Size name that means "no size suffix" in SKUs and product names
STANDARD_SIZE = "Standard"

# Display order for sizes; unknown sizes sort after these, alphabetically
SIZE_ORDER: List[str] = [
    "0-6M",
    "Standard",
    "0-3M",
    "3-6M",
    "6-9M",
    "9-12M",
    "12-18M",
    "18-24M",
    "2-3Y",
    "3-4Y",
    "4-5Y",
    "5-6Y",
    "6-7Y",
    "7-8Y",
    "8-9Y",
    "9-10Y",
    "Small"
]

# Category type that marks bundle categories (compared case-insensitively)
BUNDLE_CATEGORY_TYPE = "bundle"

# Purchase orders older than this many days can no longer be deleted
PURCHASE_ORDER_DELETE_WINDOW_DAYS = int(os.environ.get("INVENTORY_PO_DELETE_WINDOW_DAYS", "5"))
DEFAULT_TAX_CLASS = 5

# Business timezone (IST) used for "items added on <day>" filters
BUSINESS_UTC_OFFSET_MINUTES = int(os.environ.get("INVENTORY_UTC_OFFSET_MINUTES", "330"))

# Fixed values written to every single-product item master row
ITEM_MASTER_DEFAULTS: Dict[str, Any] = {
    "length_mm": 210,
    "width_mm": 180,
    "height_mm": 20,
    "isbn": "1",
    "brand": DEFAULT_BRAND,
}

# Fallback values for bundle item master rows
BUNDLE_ITEM_MASTER_DEFAULTS: Dict[str, Any] = {
    "length_mm": 210,
    "width_mm": 180,
    "height_mm": 50,
    "brand": DEFAULT_BRAND,
    "type": "BUNDLE",
    "component_quantity": 1,
    "tax_calculation_type": "PRICE_OF_BUNDLE_SKU",
}
BUNDLE_SCAN_TYPE = "SIMPLE"

# Rows per INSERT when seeding large CSV files
SEED_BATCH_SIZE = int(os.environ.get("INVENTORY_SEED_BATCH_SIZE", "100"))

# Column order matching the Unicommerce export format
ITEM_MASTER_COLUMNS: List[str] = [
    "category_code", "product_code", "name", "description", "scan_identifier",
    "length_mm", "width_mm", "height_mm", "weight_gms", "ean", "upc", "isbn",
    "color", "brand", "size", "requires_customization", "min_order_size",
    "tax_type_code", "gst_tax_type_code", "hsn_code", "tags", "tat",
    "image_url", "product_page_url", "item_detail_fields", "cost_price", "mrp",
    "base_price", "enabled", "resync_inventory", "type", "scan_type",
    "component_product_code", "component_quantity", "component_price",
    "batch_group_code", "dispatch_expiry_tolerance", "shelf_life",
    "tax_calculation_type", "expirable", "determine_expiry_from",
    "grn_expiry_tolerance", "return_expiry_tolerance", "expiry_date",
    "sku_type", "material", "style"
]

# CSV-friendly header names, same order as ITEM_MASTER_COLUMNS
ITEM_MASTER_HEADERS: List[str] = [
    "Category Code*", "Product Code*", "Name*", "Description", "Scan Identifier",
    "Length (mm)", "Width (mm)", "height (mm)", "Weight (gms)", "ean", "upc", "isbn",
    "color", "brand", "size", "Requires Customization", "Min Order Size",
    "Tax Type Code", "GST Tax Type Code", "HSN Code", "Tags", "TAT",
    "Image Url", "Product Page URL", "Item Detail Fields", "Cost Price", "MRP",
    "Base Price", "Enabled", "Resync Inventory", "Type", "Scan Type",
    "Component Product Code", "Component Quantity", "Component Price",
    "Batch Group Code", "Dispatch Expiry Tolerance", "Shelf Life",
    "Tax Calculation Type", "Expirable", "Determine Expiry From",
    "grn Expiry Tolerance", "Return Expiry Tolerance", "Expiry Date as dd/MM/yyyy",
    "Sku Type", "Material", "Style"
]

# Bundle item master export: column -> header
BUNDLE_ITEM_MASTER_HEADERS: Dict[str, str] = {
    "category_code": "Category Code",
    "product_code": "Product Code",
    "name": "Name",
    "description": "Description",
    "scan_identifier": "Scan Identifier",
    "length_mm": "Length (mm)",
    "width_mm": "Width (mm)",
    "height_mm": "Height (mm)",
    "weight_gms": "Weight (gms)",
    "ean": "EAN",
    "upc": "UPC",
    "isbn": "ISBN",
    "color": "Color",
    "brand": "Brand",
    "size": "Size",
    "requires_customization": "Requires Customization",
    "min_order_size": "Min Order Size",
    "tax_type_code": "Tax Type Code",
    "gst_tax_type_code": "GST Tax Type Code",
    "hsn_code": "HSN Code",
    "tags": "Tags",
    "tat": "TAT",
    "image_url": "Image Url",
    "product_page_url": "Product Page URL",
    "item_detail_fields": "Item Detail Fields",
    "cost_price": "Cost Price",
    "mrp": "MRP",
    "base_price": "Base Price",
    "enabled": "Enabled",
    "resync_inventory": "Resync Inventory",
    "type": "Type",
    "scan_type": "Scan Type",
    "component_product_code": "Component Product Code",
    "component_quantity": "Component Quantity",
    "component_price": "Component Price",
    "batch_group_code": "Batch Group Code",
    "dispatch_expiry_tolerance": "Dispatch Expiry Tolerance",
    "shelf_life": "Shelf Life",
    "tax_calculation_type": "Tax Calculation Type",
    "expirable": "Expirable",
    "determine_expiry_from": "Determine Expiry From",
    "grn_expiry_tolerance": "GRN Expiry Tolerance",
    "return_expiry_tolerance": "Return Expiry Tolerance",
    "expiry_date": "Expiry Date",
    "sku_type": "SKU Type",
}

# Purchase order export
PURCHASE_ORDER_HEADERS: List[str] = ["Item SKU code", "Quantity", "Cost Price", "Discount", "Tax Class"]
