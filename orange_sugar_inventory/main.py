"""
Application wiring for the inventory tools.
"""
import logging
from typing import List, Optional

from orange_sugar_inventory.data.connectors.base_connector import BaseConnector
from orange_sugar_inventory.data.connectors.snowflake_connector import SnowflakeConnector
from orange_sugar_inventory.data.repositories.category_repository import CategoryRepository
from orange_sugar_inventory.data.repositories.print_repository import PrintRepository
from orange_sugar_inventory.data.repositories.size_repository import SizeRepository
from orange_sugar_inventory.data.repositories.product_repository import ProductRepository
from orange_sugar_inventory.data.repositories.weight_repository import WeightRepository
from orange_sugar_inventory.data.repositories.purchase_order_repository import PurchaseOrderRepository
from orange_sugar_inventory.data.repositories.item_master_repository import ItemMasterRepository
from orange_sugar_inventory.data.repositories.bundle_repository import (
    BundleReferenceRepository,
    BundleItemMasterRepository
)
from orange_sugar_inventory.exporters.base_exporter import BaseExporter
from orange_sugar_inventory.exporters.csv_exporter import CSVExporter
from orange_sugar_inventory.exporters.xlsx_exporter import XLSXExporter
from orange_sugar_inventory.seeding.csv_seeder import CsvSeeder, SeedResult
from orange_sugar_inventory.services.purchase_order_service import PurchaseOrderService
from orange_sugar_inventory.services.item_master_service import ItemMasterService
from orange_sugar_inventory.services.bundle_service import BundleService
from orange_sugar_inventory.services.master_data_service import MasterDataService
from orange_sugar_inventory.utils.date_helpers import business_today
from orange_sugar_inventory.utils.logging_config import setup_logging

EXPORTERS = {
    "csv": CSVExporter,
    "xlsx": XLSXExporter,
}


class InventoryApp:
    """
    Main application class: one connector, its repositories and the services.
    """

    def __init__(self, log_level=logging.INFO, connector: Optional[BaseConnector] = None):
        """
        Initialize the application.

        Args:
            log_level: Logging level
            connector (Optional[BaseConnector]): Database connector (default: Snowflake)
        """
        # Set up logging
        self.logger = setup_logging(log_level=log_level)

        # Initialize database connector
        self.connector = connector or SnowflakeConnector()

        # Initialize repositories
        self.category_repository = CategoryRepository(self.connector)
        self.print_repository = PrintRepository(self.connector)
        self.size_repository = SizeRepository(self.connector)
        self.product_repository = ProductRepository(self.connector)
        self.weight_repository = WeightRepository(self.connector)
        self.purchase_order_repository = PurchaseOrderRepository(self.connector)
        self.item_master_repository = ItemMasterRepository(self.connector)
        self.bundle_reference_repository = BundleReferenceRepository(self.connector)
        self.bundle_item_master_repository = BundleItemMasterRepository(self.connector)

        # Initialize services
        self.purchase_orders = PurchaseOrderService(
            self.category_repository,
            self.print_repository,
            self.size_repository,
            self.product_repository,
            self.purchase_order_repository
        )
        self.item_master = ItemMasterService(
            self.product_repository,
            self.size_repository,
            self.weight_repository,
            self.item_master_repository
        )
        self.bundles = BundleService(
            self.category_repository,
            self.size_repository,
            self.product_repository,
            self.weight_repository,
            self.bundle_reference_repository,
            self.bundle_item_master_repository
        )
        self.master_data = MasterDataService(
            self.category_repository,
            self.print_repository,
            self.size_repository,
            self.product_repository,
            self.weight_repository
        )

    def seeder(self) -> CsvSeeder:
        return CsvSeeder(
            self.category_repository,
            self.print_repository,
            self.size_repository,
            self.weight_repository,
            self.product_repository,
            self.bundle_reference_repository
        )

    def export(self, export_name: str, output_dir: str, day: Optional[str] = None, file_format: str = "xlsx") -> str:
        """
        Export one of the item master, bundle item master or purchase order files.

        Args:
            export_name (str): item_master, bundle_item_master or purchase_orders
            output_dir (str): Directory for the file
            day (Optional[str]): PO date or bundle creation day (YYYY-MM-DD)
            file_format (str): csv or xlsx

        Returns:
            str: Path to the written file
        """
        exporter: BaseExporter = EXPORTERS[file_format]()
        label = day or business_today().isoformat()

        if export_name == "item_master":
            data = self.item_master.list_visible()
        elif export_name == "bundle_item_master":
            data = self.bundles.list_item_master(day)
        elif export_name == "purchase_orders":
            data = self.purchase_orders.list_orders(label)
        else:
            raise ValueError(f"Unknown export: {export_name}")

        self.logger.info(f"Exporting {len(data)} {export_name} rows as {file_format}")
        return exporter.export(export_name, data, output_dir, label)

    def close(self) -> None:
        """
        Close the database connection.
        """
        try:
            self.connector.disconnect()
            self.logger.info("Database connection closed.")
        except Exception as e:
            self.logger.error(f"Error closing database connection: {str(e)}")


def run_export(
    export_name: str,
    output_dir: str,
    day: Optional[str] = None,
    file_format: str = "xlsx",
    log_level: int = logging.INFO
) -> str:
    """
    Run one export with a fresh application.

    Returns:
        str: Path to the written file
    """
    app = InventoryApp(log_level=log_level)
    try:
        return app.export(export_name, output_dir, day, file_format)
    finally:
        app.close()


def run_seed(
    data_dir: Optional[str] = None,
    bundle_reference: Optional[str] = None,
    log_level: int = logging.INFO
) -> List[SeedResult]:
    """
    Seed master data from a directory and/or the bundle reference from a file.

    Returns:
        List[SeedResult]: One result per seeded file
    """
    app = InventoryApp(log_level=log_level)
    try:
        seeder = app.seeder()
        results = seeder.seed_all(data_dir) if data_dir else []
        if bundle_reference:
            results.append(seeder.seed_bundle_reference(bundle_reference))
        return results
    finally:
        app.close()
