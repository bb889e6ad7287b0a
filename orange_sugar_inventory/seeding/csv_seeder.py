"""
Load master data and the bundle reference from CSV exports.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
import os
import re
import pandas as pd

from orange_sugar_inventory.config.app_config import SEED_BATCH_SIZE
from orange_sugar_inventory.data.models.catalog import Category, Print, Product
from orange_sugar_inventory.data.repositories.category_repository import CategoryRepository
from orange_sugar_inventory.data.repositories.print_repository import PrintRepository
from orange_sugar_inventory.data.repositories.size_repository import SizeRepository
from orange_sugar_inventory.data.repositories.product_repository import ProductRepository
from orange_sugar_inventory.data.repositories.weight_repository import WeightRepository
from orange_sugar_inventory.data.repositories.bundle_repository import BundleReferenceRepository
from orange_sugar_inventory.exceptions import DatabaseError, ValidationError
from orange_sugar_inventory.utils.validation import (
    parse_optional_bool,
    parse_optional_float,
    parse_optional_int,
    validate_dataframe
)
from orange_sugar_inventory.utils.logging_config import get_logger

# Set up logging
logger = get_logger(__name__)

# File names inside a seed data directory, in load order
SEED_FILES = {
    "categories": "categories.csv",
    "prints": "print_master.csv",
    "sizes": "sizes.csv",
    "weights": "product_weights.csv",
    "products": "products.csv",
}
BUNDLE_REFERENCE_FILE = "Bundle Item Master.csv"

# Zero-width spaces and word joiners pasted in from spreadsheets
INVISIBLE_CHARACTERS = re.compile("[\u200b-\u200d\u2060\ufeff]")


@dataclass
class SeedResult:
    """
    Counts for one seeded file.
    """
    name: str
    success_count: int = 0
    error_count: int = 0
    skipped_count: int = 0

    def __str__(self) -> str:
        return (
            f"{self.name}: {self.success_count} inserted, {self.error_count} errors, "
            f"{self.skipped_count} skipped"
        )


def clean_string(value: Any) -> str:
    """
    Strip invisible characters and surrounding whitespace.
    """
    if value is None:
        return ""
    return INVISIBLE_CHARACTERS.sub("", str(value)).strip()


def read_csv(path: str, required_columns: Optional[List[str]] = None) -> List[Dict[str, str]]:
    """
    Read a CSV file as a list of string dicts (blank cells are "").

    Args:
        path (str): CSV file
        required_columns (Optional[List[str]]): Columns that must be present

    Returns:
        List[Dict[str, str]]: One dict per row

    Raises:
        ValidationError: If a required column is missing
    """
    df = pd.read_csv(path, dtype=str, keep_default_na=False, skip_blank_lines=True)
    df.columns = [clean_string(column) for column in df.columns]
    if required_columns and not df.empty and not validate_dataframe(df, required_columns):
        missing = [column for column in required_columns if column not in df.columns]
        raise ValidationError(f"{os.path.basename(path)} is missing columns: {', '.join(missing)}")
    logger.info(f"Found {len(df)} rows in {path}")
    return df.to_dict(orient="records")


def parse_schema_type(value: Any) -> int:
    """
    Parse "Type 3" (or "3") into a schema number; unreadable values give 0.
    """
    match = re.search(r"\d+", str(value or ""))
    return int(match.group()) if match else 0


def parse_category_row(row: Dict[str, str]) -> Category:
    """
    Build a category from a categories.csv row.

    A third name condition mentioning "size" puts the size in product names.
    """
    return Category(
        id="",
        category_name=clean_string(row.get("Category Name")),
        category_code=clean_string(row.get("Category Code")) or None,
        sku_schema=parse_schema_type(row.get("Schema Type")),
        hsn_code=clean_string(row.get("HSN")) or None,
        category_type=clean_string(row.get("Category Type")) or None,
        product_name_prefix=clean_string(row.get("Product Name - Conditions 1")) or None,
        size_in_product_name="size" in (row.get("Product Name Condition 3") or "").lower()
    )


def parse_print_row(row: Dict[str, str]) -> Optional[Print]:
    name = clean_string(row.get("Official Print's Name"))
    if not name:
        return None
    return Print(
        id="",
        official_print_name=name,
        print_code=clean_string(row.get("Code")) or None,
        color=clean_string(row.get("Color")) or None
    )


def parse_bundle_reference_row(row: Dict[str, str]) -> Dict[str, Any]:
    """
    Map a "Bundle Item Master.csv" row to bundle reference columns.
    """
    def text(header: str) -> Optional[str]:
        return clean_string(row.get(header)) or None

    return {
        "id": None,
        "category_code": text("Category Code"),
        "product_code": text("Product Code"),
        "name": text("Name"),
        "length_mm": parse_optional_float(row.get("Length (mm)")),
        "width_mm": parse_optional_float(row.get("Width (mm)")),
        "height_mm": parse_optional_float(row.get("Height (mm)")),
        "weight_gms": parse_optional_float(row.get("Weight (gms)")),
        "isbn": text("ISBN"),
        "color": text("Color"),
        "size": text("Size"),
        "brand": text("Brand"),
        "base_price": parse_optional_float(row.get("Base Price")),
        "cost_price": parse_optional_float(row.get("Cost Price")),
        "mrp": parse_optional_float(row.get("MRP")),
        "enabled": parse_optional_bool(row.get("Enabled")),
        "type": text("Type"),
        "component_product_code": text("Component Product Code"),
        "internal_style_name": text("Internal Style Name"),
        "component_quantity": parse_optional_int(row.get("Component Quantity")),
        "component_price": parse_optional_float(row.get("Component Price")),
        "hsn_code": text("HSN CODE"),
        "tax_calculation_type": text("Tax Calculation Type"),
        "material": text("Material"),
    }


class CsvSeeder:
    """
    Seeds master data tables from CSV files.

    Rows that fail are counted and logged; the run continues.
    """

    def __init__(
        self,
        category_repository: CategoryRepository,
        print_repository: PrintRepository,
        size_repository: SizeRepository,
        weight_repository: WeightRepository,
        product_repository: ProductRepository,
        reference_repository: BundleReferenceRepository
    ):
        self.category_repository = category_repository
        self.print_repository = print_repository
        self.size_repository = size_repository
        self.weight_repository = weight_repository
        self.product_repository = product_repository
        self.reference_repository = reference_repository

    def seed_all(self, data_dir: str) -> List[SeedResult]:
        """
        Seed every master data file found in a directory, in dependency order.

        Args:
            data_dir (str): Directory holding the seed CSV files

        Returns:
            List[SeedResult]: One result per seeded file
        """
        loaders = {
            "categories": self.seed_categories,
            "prints": self.seed_prints,
            "sizes": self.seed_sizes,
            "weights": self.seed_weights,
            "products": self.seed_products,
        }
        results = []
        for name, filename in SEED_FILES.items():
            path = os.path.join(data_dir, filename)
            if not os.path.exists(path):
                logger.warning(f"Skipping {name}: {path} not found")
                continue
            results.append(loaders[name](path))

        reference_path = os.path.join(data_dir, BUNDLE_REFERENCE_FILE)
        if os.path.exists(reference_path):
            results.append(self.seed_bundle_reference(reference_path))
        return results

    def seed_categories(self, path: str) -> SeedResult:
        result = SeedResult("categories")
        existing = {c.category_name: c for c in self.category_repository.get_all()}

        for row in read_csv(path, ["Category Name"]):
            category = parse_category_row(row)
            if not category.category_name:
                result.skipped_count += 1
                continue
            try:
                current = existing.get(category.category_name)
                if current:
                    category.id = current.id
                    self.category_repository.update(category)
                else:
                    existing[category.category_name] = self.category_repository.create(category)
                result.success_count += 1
            except DatabaseError as e:
                logger.error(f"Error inserting category {category.category_name}: {e.message}")
                result.error_count += 1

        logger.info(str(result))
        return result

    def seed_prints(self, path: str) -> SeedResult:
        result = SeedResult("prints")
        existing = {p.official_print_name: p for p in self.print_repository.get_all()}

        for row in read_csv(path, ["Official Print's Name"]):
            print_ = parse_print_row(row)
            if print_ is None:
                result.skipped_count += 1
                continue
            try:
                current = existing.get(print_.official_print_name)
                if current:
                    print_.id = current.id
                    self.print_repository.update(print_)
                else:
                    existing[print_.official_print_name] = self.print_repository.create(print_)
                result.success_count += 1
            except DatabaseError as e:
                logger.error(f"Error inserting print {print_.official_print_name}: {e.message}")
                result.error_count += 1

        logger.info(str(result))
        return result

    def seed_sizes(self, path: str) -> SeedResult:
        result = SeedResult("sizes")
        for row in read_csv(path, ["size_name"]):
            size_name = clean_string(row.get("size_name"))
            if not size_name:
                result.skipped_count += 1
                continue
            try:
                self.size_repository.upsert(size_name)
                result.success_count += 1
            except DatabaseError as e:
                logger.error(f"Error inserting size {size_name}: {e.message}")
                result.error_count += 1

        logger.info(str(result))
        return result

    def seed_weights(self, path: str) -> SeedResult:
        result = SeedResult("weights")
        categories = {c.category_name: c for c in self.category_repository.get_all()}
        sizes = {s.size_name: s for s in self.size_repository.get_all()}

        for row in read_csv(path, ["category", "size", "weight"]):
            category = categories.get(clean_string(row.get("category")))
            size = sizes.get(clean_string(row.get("size")))
            weight = parse_optional_int(row.get("weight"))
            if category is None or size is None or weight is None:
                logger.warning(f"Category, size or weight not found: {row}")
                result.skipped_count += 1
                continue
            try:
                current = self.weight_repository.find(category.id, size.id)
                if current:
                    self.weight_repository.update(current.id, weight)
                else:
                    self.weight_repository.create(category.id, size.id, weight)
                result.success_count += 1
            except DatabaseError as e:
                logger.error(f"Error inserting weight for {category.category_name} - {size.size_name}: {e.message}")
                result.error_count += 1

        logger.info(str(result))
        return result

    def seed_products(self, path: str) -> SeedResult:
        """
        Seed single-print products. The "Category Code" column holds the
        category name and "Style" the print name; existing SKUs are skipped.
        """
        result = SeedResult("products")
        categories = {c.category_name: c for c in self.category_repository.get_all()}
        sizes = {s.size_name: s for s in self.size_repository.get_all()}
        prints = {p.official_print_name.lower(): p for p in self.print_repository.get_all()}

        for row in read_csv(path, ["Category Code", "Product Code", "Size", "Style"]):
            category = categories.get(clean_string(row.get("Category Code")))
            size = sizes.get(re.sub(r"\s", "", row.get("Size") or ""))
            print_ = prints.get(clean_string(row.get("Style")).lower())
            product_code = clean_string(row.get("Product Code"))

            if category is None or size is None or print_ is None:
                logger.warning(
                    f"Lookup failed for {product_code}: category={row.get('Category Code')!r}, "
                    f"size={row.get('Size')!r}, print={row.get('Style')!r}"
                )
                result.error_count += 1
                continue

            try:
                if self.product_repository.code_exists(product_code):
                    result.skipped_count += 1
                    continue
                weight = self.weight_repository.find(category.id, size.id)
                product = Product(
                    id="",
                    category_id=category.id,
                    size_id=size.id,
                    weight_id=weight.id if weight else None,
                    product_code=product_code,
                    name=clean_string(row.get("Name")) or None,
                    length_mm=parse_optional_int(row.get("Length (mm)")),
                    width_mm=parse_optional_int(row.get("Width (mm)")),
                    height_mm=parse_optional_int(row.get("Height (mm)")),
                    color=clean_string(row.get("Color")) or None,
                    brand=clean_string(row.get("Brand")) or None,
                    base_price=parse_optional_float(row.get("Base Price")) or None,
                    cost_price=parse_optional_float(row.get("Cost Price")) or None,
                    mrp=parse_optional_float(row.get("MRP")) or None,
                    hsn_code=clean_string(row.get("HSN CODE")) or None,
                    material=clean_string(row.get("Material")) or None
                )
                self.product_repository.create(product, [print_.id])
                result.success_count += 1
            except DatabaseError as e:
                logger.error(f"Error inserting product {product_code}: {e.message}")
                result.error_count += 1

        logger.info(str(result))
        return result

    def seed_bundle_reference(self, path: str, batch_size: int = SEED_BATCH_SIZE) -> SeedResult:
        """
        Replace the bundle reference table with the rows of a CSV file.

        Args:
            path (str): "Bundle Item Master.csv" export
            batch_size (int): Rows per INSERT

        Returns:
            SeedResult: Inserted and failed row counts
        """
        result = SeedResult("bundle_reference")
        rows = [parse_bundle_reference_row(row) for row in read_csv(path, ["Product Code"])]

        self.reference_repository.clear()

        for start in range(0, len(rows), batch_size):
            batch = rows[start:start + batch_size]
            try:
                self.reference_repository.insert_many(batch, batch_size)
                result.success_count += len(batch)
            except DatabaseError as e:
                logger.error(f"Error inserting batch {start // batch_size + 1}: {e.message}")
                result.error_count += len(batch)

        logger.info(str(result))
        return result
