"""
Bundle SKUs: reference lookup, bundle item master generation and common sizes.

A bundle is made of several individual products (category + print) sold
together in one size. Bundle SKUs and their components are kept in a
reference table; the bundle item master export is built from it with the
latest product prices.
"""
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from orange_sugar_inventory.config.app_config import (
    BUNDLE_ITEM_MASTER_DEFAULTS,
    BUNDLE_SCAN_TYPE,
    STANDARD_SIZE
)
from orange_sugar_inventory.data.models.catalog import Category, Product, Size
from orange_sugar_inventory.data.models.item_master import (
    ACTION_ADDED_TO_MASTER,
    ACTION_CREATED,
    ACTION_EXISTED,
    BundleReferenceRow,
    ExistingBundle,
    GenerationResult,
    IndividualProduct,
    ReferenceCheck
)
from orange_sugar_inventory.data.repositories.category_repository import CategoryRepository
from orange_sugar_inventory.data.repositories.size_repository import SizeRepository
from orange_sugar_inventory.data.repositories.product_repository import ProductRepository
from orange_sugar_inventory.data.repositories.weight_repository import WeightRepository
from orange_sugar_inventory.data.repositories.bundle_repository import (
    BundleReferenceRepository,
    BundleItemMasterRepository
)
from orange_sugar_inventory.exceptions import DatabaseError, NotFoundError, ValidationError
from orange_sugar_inventory.services.purchase_order_service import category_sku
from orange_sugar_inventory.sku.generator import generate_sku
from orange_sugar_inventory.sku.sizes import intersect_sizes
from orange_sugar_inventory.utils.logging_config import get_logger

# Set up logging
logger = get_logger(__name__)

MISSING_REFERENCE_ERROR = "Bundle not found in reference. Create it first in Product Setup."
EXISTING_REFERENCE_ERROR = "Already exists in reference"


@dataclass
class BundleComponent:
    """
    One individual product of a bundle, resolved for a size.
    """
    source: IndividualProduct
    sku: str = ""
    product: Optional[Product] = None
    weight_gms: Optional[float] = None
    hsn_code: Optional[str] = None

    @property
    def mrp(self) -> float:
        return (self.product.mrp if self.product else None) or 0


@dataclass
class BundleTotals:
    """
    Prices and weight summed over the components, times quantity.
    """
    cost_price: float = 0
    mrp: float = 0
    base_price: float = 0
    weight_gms: float = 0
    components: List[BundleComponent] = field(default_factory=list)


def bundle_print_codes(products: Sequence[IndividualProduct]) -> List[Tuple[str, str]]:
    """
    Get the unique print codes of a selection, sorted by code.

    Sorting ignores case and keeps bundle SKUs stable whatever order the
    products were picked in.

    Args:
        products (Sequence[IndividualProduct]): Selected products

    Returns:
        List[Tuple[str, str]]: (print code, print name) pairs
    """
    pairs: Dict[str, str] = {}
    for product in products:
        if product.print_code and product.print_code not in pairs:
            pairs[product.print_code] = product.print_name
    return sorted(pairs.items(), key=lambda pair: (pair[0].casefold(), pair[0]))


def bundle_product_name(category: Category, category_code: str, print_names: Sequence[str], size: Optional[str]) -> str:
    """
    Build the display name of a bundle.

    Args:
        category (Category): Bundle category
        category_code (str): Code used when the category has no name prefix
        print_names (Sequence[str]): Print names in SKU order
        size (Optional[str]): Size name

    Returns:
        str: e.g. "Gift Set | Bunny, Rocket 2-3Y"
    """
    name = category.product_name_prefix or f"{category_code} | "
    name += ", ".join(print_names)
    if category.size_in_product_name and size and size != STANDARD_SIZE:
        name += f" {size}"
    return name


class BundleService:
    """
    Service behind the bundle item master page and the bundle setup tab.
    """

    def __init__(
        self,
        category_repository: CategoryRepository,
        size_repository: SizeRepository,
        product_repository: ProductRepository,
        weight_repository: WeightRepository,
        reference_repository: BundleReferenceRepository,
        item_master_repository: BundleItemMasterRepository
    ):
        self.category_repository = category_repository
        self.size_repository = size_repository
        self.product_repository = product_repository
        self.weight_repository = weight_repository
        self.reference_repository = reference_repository
        self.item_master_repository = item_master_repository

    def common_sizes(self, products: Sequence[IndividualProduct]) -> List[Size]:
        """
        Get the sizes every selected product is available in.

        Args:
            products (Sequence[IndividualProduct]): Selected products

        Returns:
            List[Size]: Sizes in the first product's display order
        """
        size_lists = [
            self.size_repository.get_all(product.category_id, [product.print_id])
            for product in products
        ]
        return intersect_sizes(size_lists)

    def check_reference(
        self,
        bundle_category: str,
        products: Sequence[IndividualProduct],
        size_names: Sequence[str]
    ) -> ReferenceCheck:
        """
        Look up a bundle selection in the reference table, size by size.

        A size matches when some reference product code contains every
        selected print code and has exactly one component row per selected
        product.

        Args:
            bundle_category (str): Bundle category as stored in the reference
            products (Sequence[IndividualProduct]): Selected products
            size_names (Sequence[str]): Sizes to check

        Returns:
            ReferenceCheck: Found bundles and display labels of missing ones
        """
        unique_prints: Dict[str, str] = {}
        for product in products:
            unique_prints.setdefault(product.print_code, product.print_name)
        print_codes = list(unique_prints)
        print_names = list(unique_prints.values())
        selected_count = len(products)

        logger.info(
            f"Checking bundle reference for {bundle_category}: prints={print_codes}, "
            f"products={selected_count}, sizes={list(size_names)}"
        )

        check = ReferenceCheck()
        for size_name in size_names:
            display = f"{bundle_category} | {', '.join(print_names)} | {size_name}"
            rows = self.reference_repository.find_by_prints(bundle_category, size_name, print_codes)

            groups: Dict[str, List[BundleReferenceRow]] = {}
            for row in rows:
                groups.setdefault(row.product_code, []).append(row)

            match = next(
                (
                    ExistingBundle(product_code=code, size_name=size_name, components=components)
                    for code, components in groups.items()
                    if len(components) == selected_count
                ),
                None
            )
            if match:
                logger.info(f"Found matching bundle {match.product_code} for size {size_name}")
                check.existing_bundles.append(match)
            else:
                logger.info(f"No bundle with prints {print_codes} for size {size_name}")
                check.missing_bundles.append(display)

        return check

    def generate(
        self,
        bundle_category_id: str,
        bundle_category_code: str,
        products: Sequence[IndividualProduct],
        size_names: Sequence[str],
        add_to_item_master: bool = True,
        create_reference_if_missing: bool = True
    ) -> GenerationResult:
        """
        Generate bundle SKUs per size and write reference and item master rows.

        Args:
            bundle_category_id (str): Bundle category ID
            bundle_category_code (str): Code used in names and new reference rows
            products (Sequence[IndividualProduct]): Selected products
            size_names (Sequence[str]): Sizes to generate
            add_to_item_master (bool): Write bundle item master rows
            create_reference_if_missing (bool): Insert reference rows that do not exist

        Returns:
            GenerationResult: One result per size and component

        Raises:
            NotFoundError: If the bundle category does not exist
            ValidationError: If the bundle category has no code
        """
        bundle_category = self.category_repository.get_by_id(bundle_category_id)
        if bundle_category is None:
            raise NotFoundError("Bundle category not found", details={"id": bundle_category_id})
        if not bundle_category.category_code:
            raise ValidationError("Bundle category has no category code")

        pairs = bundle_print_codes(products)
        print_codes = [code for code, _ in pairs]
        print_names = [name for _, name in pairs]
        result = GenerationResult()

        for size_name in size_names:
            bundle_sku = category_sku(bundle_category, print_codes, size_name)
            bundle_size = self.size_repository.get_by_name(size_name)
            bundle_weight = self.weight_repository.grams_for(bundle_category_id, bundle_size.id if bundle_size else None)

            totals = self._totals(products, size_name, with_components=True)
            product_name = bundle_product_name(bundle_category, bundle_category_code, print_names, size_name)

            for component in totals.components:
                reference = self.reference_repository.find_component(bundle_sku, component.sku)
                row = self._bundle_row(
                    reference, component, totals,
                    bundle_category=bundle_category,
                    bundle_category_code=bundle_category_code,
                    bundle_sku=bundle_sku,
                    product_name=product_name,
                    size_name=size_name,
                    bundle_weight=bundle_weight
                )

                if reference is None and create_reference_if_missing:
                    self.reference_repository.create(BundleReferenceRow.from_record({**row, "enabled": True}))

                if add_to_item_master:
                    if reference is None and not create_reference_if_missing:
                        result.add(bundle_sku, error=MISSING_REFERENCE_ERROR, action=ACTION_ADDED_TO_MASTER)
                        continue
                    self._insert_item_master(result, bundle_sku, row)
                elif reference is not None:
                    result.add(bundle_sku, error=EXISTING_REFERENCE_ERROR, action=ACTION_EXISTED)
                else:
                    result.add(bundle_sku, action=ACTION_CREATED)

        logger.info(
            f"Bundle run for {bundle_category.category_name}: created={result.created_count}, "
            f"existed={result.existed_count}, added_to_master={result.added_to_master_count}, "
            f"errors={result.error_count}"
        )
        return result

    def add_from_reference(
        self,
        existing_bundles: Sequence[ExistingBundle],
        products: Sequence[IndividualProduct]
    ) -> GenerationResult:
        """
        Copy found reference bundles into the bundle item master.

        Prices and weight are refreshed from the products table. A component's
        price is the MRP of the selected product whose print code and category
        code both appear in the component SKU.

        Args:
            existing_bundles (Sequence[ExistingBundle]): Output of check_reference
            products (Sequence[IndividualProduct]): Selected products

        Returns:
            GenerationResult: One result per component row
        """
        result = GenerationResult()

        for bundle in existing_bundles:
            totals = self._totals(products, bundle.size_name)

            for component in bundle.components:
                component_code = component.component_product_code or ""
                matching = next(
                    (
                        p for p in products
                        if p.print_code in component_code and p.category_code in component_code
                    ),
                    None
                )
                component_price = component.component_price or 0
                if matching:
                    found = self.product_repository.find_by_size_name(
                        matching.category_id, bundle.size_name, matching.print_id
                    )
                    if found and found.mrp:
                        component_price = found.mrp

                row = {
                    "category_code": component.category_code,
                    "product_code": component.product_code,
                    "name": component.name,
                    "length_mm": component.length_mm,
                    "width_mm": component.width_mm,
                    "height_mm": component.height_mm,
                    "weight_gms": totals.weight_gms or component.weight_gms,
                    "brand": component.brand,
                    "size": component.size,
                    "hsn_code": component.hsn_code,
                    "cost_price": totals.cost_price,
                    "mrp": totals.mrp,
                    "base_price": totals.base_price,
                    "type": component.type,
                    "component_product_code": component.component_product_code,
                    "style": component.internal_style_name,
                    "component_quantity": component.component_quantity,
                    "component_price": component_price,
                    "tax_calculation_type": component.tax_calculation_type,
                    "scan_type": BUNDLE_SCAN_TYPE,
                }
                self._insert_item_master(result, bundle.product_code, row)

        logger.info(f"Added {result.success_count} reference rows to the bundle item master.")
        return result

    def add_bundles(
        self,
        bundle_category: Category,
        products: Sequence[IndividualProduct],
        size_names: Sequence[str]
    ) -> GenerationResult:
        """
        Add a bundle selection to the bundle item master.

        Sizes found in the reference are copied from it; the rest are
        generated, written to the reference and added to the item master.
        The reference stores bundles under the category name.

        Args:
            bundle_category (Category): Bundle category
            products (Sequence[IndividualProduct]): Selected products
            size_names (Sequence[str]): Sizes to add

        Returns:
            GenerationResult: Outcomes of both steps
        """
        check = self.check_reference(bundle_category.category_name, products, size_names)
        result = GenerationResult()

        if check.existing_bundles:
            result.merge(self.add_from_reference(check.existing_bundles, products))

        if check.missing_bundles:
            result.merge(self.generate(
                bundle_category.id,
                bundle_category.category_name,
                products,
                check.unavailable_sizes,
                add_to_item_master=True,
                create_reference_if_missing=True
            ))

        return result

    def list_reference(self, search: Optional[str] = None) -> List[BundleReferenceRow]:
        """
        List reference rows, optionally filtered by a case-insensitive search.

        The search matches the product code, name, category, size, component
        code or style.
        """
        rows = self.reference_repository.get_all()
        if not search:
            return rows

        needle = search.strip().lower()
        return [
            row for row in rows
            if any(
                needle in str(value or "").lower()
                for value in (
                    row.product_code, row.name, row.category_code, row.size,
                    row.component_product_code, row.internal_style_name
                )
            )
        ]

    def list_item_master(self, day: Optional[Union[str, date]] = None) -> List[Dict[str, Any]]:
        return self.item_master_repository.get_all(day)

    def delete_item_master(self, day: Optional[Union[str, date]] = None) -> int:
        """
        Delete bundle item master rows of one business day, or all rows.
        """
        return self.item_master_repository.delete(day)

    def _totals(self, products: Sequence[IndividualProduct], size_name: str, with_components: bool = False) -> BundleTotals:
        """
        Sum the latest prices and weights of the products in one size.
        """
        totals = BundleTotals()

        for source in products:
            component = BundleComponent(source=source)
            if with_components:
                individual = self.category_repository.get_by_id(source.category_id)
                schema = (individual.sku_schema if individual else None) or 0
                component.sku = generate_sku(schema, source.category_code, [source.print_code], size_name)
                component.hsn_code = individual.hsn_code if individual else None

            product = self.product_repository.find_by_size_name(source.category_id, size_name, source.print_id)
            quantity = source.quantity or 1
            if product is not None:
                component.product = product
                component.weight_gms = self.weight_repository.grams_for(source.category_id, product.size_id)
                totals.cost_price += (product.cost_price or 0) * quantity
                totals.mrp += (product.mrp or 0) * quantity
                totals.base_price += (product.base_price or product.mrp or 0) * quantity
                totals.weight_gms += (component.weight_gms or 0) * quantity

            totals.components.append(component)

        return totals

    @staticmethod
    def _bundle_row(
        reference: Optional[BundleReferenceRow],
        component: BundleComponent,
        totals: BundleTotals,
        bundle_category: Category,
        bundle_category_code: str,
        bundle_sku: str,
        product_name: str,
        size_name: str,
        bundle_weight: Optional[float]
    ) -> Dict[str, Any]:
        """
        Merge a reference row (if any) with freshly computed bundle values.

        Prices always come from the products table.
        """
        ref = reference or BundleReferenceRow(product_code="")
        product = component.product
        defaults = BUNDLE_ITEM_MASTER_DEFAULTS
        return {
            "category_code": ref.category_code or bundle_category_code,
            "product_code": ref.product_code or bundle_sku,
            "name": ref.name or product_name,
            "length_mm": ref.length_mm or (product.length_mm if product else None) or defaults["length_mm"],
            "width_mm": ref.width_mm or (product.width_mm if product else None) or defaults["width_mm"],
            "height_mm": ref.height_mm or (product.height_mm if product else None) or defaults["height_mm"],
            "weight_gms": ref.weight_gms or totals.weight_gms or bundle_weight or None,
            "brand": ref.brand or (product.brand if product else None) or defaults["brand"],
            "size": ref.size or size_name,
            "hsn_code": ref.hsn_code or (component.hsn_code if product else None) or bundle_category.hsn_code or None,
            "cost_price": totals.cost_price,
            "mrp": totals.mrp,
            "base_price": totals.base_price,
            "type": ref.type or defaults["type"],
            "component_product_code": ref.component_product_code or component.sku,
            "internal_style_name": ref.internal_style_name or component.source.print_name,
            "component_quantity": ref.component_quantity or defaults["component_quantity"],
            "component_price": component.mrp,
            "tax_calculation_type": ref.tax_calculation_type or defaults["tax_calculation_type"],
        }

    def _insert_item_master(self, result: GenerationResult, product_code: str, row: Dict[str, Any]) -> None:
        """
        Insert one bundle item master row and record the outcome.
        """
        record = dict(row)
        if "internal_style_name" in record:
            record["style"] = record.pop("internal_style_name")
        record["scan_type"] = BUNDLE_SCAN_TYPE
        try:
            self.item_master_repository.insert(record)
        except DatabaseError as e:
            result.add(product_code, error=e.message, action=ACTION_ADDED_TO_MASTER)
        else:
            result.add(product_code, action=ACTION_ADDED_TO_MASTER)
