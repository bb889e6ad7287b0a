"""
SKU generation and size resolution.
"""
from orange_sugar_inventory.sku.generator import (
    SchemaType,
    BUNDLE_SCHEMA_TYPES,
    generate_sku,
    is_bundle_schema,
    is_known_schema
)
from orange_sugar_inventory.sku.sizes import intersect_sizes, sort_sizes
