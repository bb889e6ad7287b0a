"""
Purchase order entry: SKU lookup, daily order list and the delete window.
"""
from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union
import pandas as pd

from orange_sugar_inventory.config.app_config import PURCHASE_ORDER_DELETE_WINDOW_DAYS
from orange_sugar_inventory.data.models.catalog import Category, Print
from orange_sugar_inventory.data.models.orders import PurchaseOrder, SizeQuantity
from orange_sugar_inventory.data.repositories.category_repository import CategoryRepository
from orange_sugar_inventory.data.repositories.print_repository import PrintRepository
from orange_sugar_inventory.data.repositories.size_repository import SizeRepository
from orange_sugar_inventory.data.repositories.product_repository import ProductRepository
from orange_sugar_inventory.data.repositories.purchase_order_repository import PurchaseOrderRepository
from orange_sugar_inventory.exceptions import DeleteWindowError, NotFoundError, ValidationError
from orange_sugar_inventory.sku.generator import generate_sku, is_known_schema
from orange_sugar_inventory.utils.date_helpers import days_since, to_date
from orange_sugar_inventory.utils.validation import clean_code, validate_quantity
from orange_sugar_inventory.utils.logging_config import get_logger

# Set up logging
logger = get_logger(__name__)


def check_delete_window(po_date: Union[str, date], today: Optional[date] = None) -> None:
    """
    Refuse deletes for purchase orders older than the delete window.

    Args:
        po_date (Union[str, date]): The PO date
        today (Optional[date]): Reference date (default: business today)

    Raises:
        DeleteWindowError: If the PO date is too old
    """
    age = days_since(po_date, today)
    if age > PURCHASE_ORDER_DELETE_WINDOW_DAYS:
        raise DeleteWindowError(
            f"Cannot delete orders older than {PURCHASE_ORDER_DELETE_WINDOW_DAYS} days",
            details={"po_date": str(to_date(po_date)), "age_days": age}
        )


def category_sku(category: Category, print_codes: Sequence[str], size: Optional[str]) -> str:
    """
    Generate a SKU from a category's schema, logging unknown schemas.

    Args:
        category (Category): The category
        print_codes (Sequence[str]): Print codes in order
        size (Optional[str]): Size name

    Returns:
        str: The SKU
    """
    if not is_known_schema(category.sku_schema):
        logger.warning(
            f"Category {category.category_name} has unknown SKU schema {category.sku_schema!r}; "
            f"using the default template"
        )
    return generate_sku(
        category.sku_schema,
        clean_code(category.category_code),
        [clean_code(code) for code in print_codes],
        size
    )


class PurchaseOrderService:
    """
    Service behind the purchase order page.
    """

    def __init__(
        self,
        category_repository: CategoryRepository,
        print_repository: PrintRepository,
        size_repository: SizeRepository,
        product_repository: ProductRepository,
        purchase_order_repository: PurchaseOrderRepository
    ):
        self.category_repository = category_repository
        self.print_repository = print_repository
        self.size_repository = size_repository
        self.product_repository = product_repository
        self.purchase_order_repository = purchase_order_repository

    def lookup_product_sku(
        self,
        category_id: str,
        print_ids: Sequence[str],
        size_id: Optional[str]
    ) -> Optional[Tuple[str, Optional[float]]]:
        """
        Find the product whose prints match exactly, in position order.

        Args:
            category_id (str): Category ID
            print_ids (Sequence[str]): Print IDs in order
            size_id (Optional[str]): Size ID, None for size-less products

        Returns:
            Optional[Tuple[str, Optional[float]]]: (SKU, cost price), or None
        """
        wanted = list(print_ids)
        for product in self.product_repository.find_with_prints(category_id, size_id):
            if product.print_ids == wanted:
                return product.product_code, product.cost_price
        return None

    def build_sku(self, category: Category, prints: Sequence[Print], size: Optional[str] = None) -> str:
        """
        Generate the SKU from master data when no product exists yet.
        """
        return category_sku(category, [p.print_code or "" for p in prints], size)

    def resolve_sku(
        self,
        category: Category,
        prints: Sequence[Print],
        size_id: Optional[str],
        size: Optional[str]
    ) -> Tuple[str, Optional[float]]:
        """
        Get the stored SKU and cost price, falling back to a generated SKU.

        Returns:
            Tuple[str, Optional[float]]: (SKU, cost price or None)
        """
        found = self.lookup_product_sku(category.id, [p.id for p in prints], size_id)
        if found:
            return found
        return self.build_sku(category, prints, size), None

    def create_order(
        self,
        sku: str,
        category: str,
        print_name: str,
        size: str,
        cost_price: float,
        quantity: Any,
        po_date: Union[str, date]
    ) -> PurchaseOrder:
        """
        Record one purchase order line.

        Raises:
            ValidationError: If the SKU is blank or the quantity is not positive
        """
        quantity = validate_quantity(quantity)
        if not sku:
            raise ValidationError("SKU is required")
        if quantity <= 0:
            raise ValidationError(f"Quantity for {sku} must be greater than zero")

        order = PurchaseOrder(
            id="",
            sku=sku,
            category=category,
            print_name=print_name,
            size=size,
            cost_price=float(cost_price or 0),
            quantity=quantity,
            po_date=to_date(po_date)
        )
        return self.purchase_order_repository.create(order)

    def create_orders(
        self,
        category: Category,
        prints: Sequence[Print],
        rows: Sequence[SizeQuantity],
        po_date: Union[str, date]
    ) -> List[PurchaseOrder]:
        """
        Record one order line per size row with a positive quantity.

        Args:
            category (Category): Selected category
            prints (Sequence[Print]): Selected prints in order
            rows (Sequence[SizeQuantity]): Size rows from the form
            po_date (Union[str, date]): PO date

        Returns:
            List[PurchaseOrder]: The created orders
        """
        print_name = ", ".join(p.official_print_name for p in prints)
        orders = []
        for row in rows:
            if validate_quantity(row.quantity) <= 0:
                continue
            sku = row.sku
            if not sku:
                sku, _ = self.resolve_sku(category, prints, row.size_id, row.size)
            orders.append(self.create_order(
                sku, category.category_name, print_name, row.size, row.cost_price, row.quantity, po_date
            ))
        logger.info(f"Created {len(orders)} purchase orders for {category.category_name}.")
        return orders

    def update_order(self, order_id: str, **changes) -> int:
        if "quantity" in changes:
            changes["quantity"] = validate_quantity(changes["quantity"])
        return self.purchase_order_repository.update(order_id, changes)

    def list_orders(self, po_date: Union[str, date]) -> List[PurchaseOrder]:
        return self.purchase_order_repository.get_all(po_date)

    def delete_order(self, order_id: str, today: Optional[date] = None) -> int:
        """
        Delete one order if it is inside the delete window.

        Raises:
            NotFoundError: If the order does not exist
            DeleteWindowError: If the order is too old
        """
        order = self.purchase_order_repository.get_by_id(order_id)
        if order is None:
            raise NotFoundError("Purchase order not found", details={"id": order_id})
        check_delete_window(order.po_date, today)
        return self.purchase_order_repository.delete(order_id)

    def delete_orders_for_date(self, po_date: Union[str, date], today: Optional[date] = None) -> int:
        """
        Delete every order of a PO date if it is inside the delete window.

        Returns:
            int: Number of deleted orders
        """
        check_delete_window(po_date, today)
        count = self.purchase_order_repository.delete_for_date(po_date)
        logger.info(f"Deleted {count} purchase orders for {po_date}.")
        return count

    @staticmethod
    def summarize(orders: Sequence[PurchaseOrder]) -> pd.DataFrame:
        """
        Total orders, units and value per category.

        Args:
            orders (Sequence[PurchaseOrder]): Orders to summarise

        Returns:
            pd.DataFrame: Columns category, orders, units, value; sorted by value
        """
        columns = ["category", "orders", "units", "value"]
        if not orders:
            return pd.DataFrame(columns=columns)

        df = pd.DataFrame([
            {"category": o.category, "quantity": o.quantity, "value": o.line_value}
            for o in orders
        ])
        summary = df.groupby("category").agg(
            orders=("quantity", "size"),
            units=("quantity", "sum"),
            value=("value", "sum")
        ).reset_index()
        return summary[columns].sort_values("value", ascending=False).reset_index(drop=True)

    @staticmethod
    def order_totals(orders: Sequence[PurchaseOrder]) -> Dict[str, float]:
        return {
            "orders": len(orders),
            "units": sum(o.quantity for o in orders),
            "value": sum(o.line_value for o in orders),
        }
