"""
Orange Sugar Inventory Package.

This package provides SKU generation, purchase orders, item master and
bundle exports for a children's clothing brand selling through Unicommerce.
"""
from orange_sugar_inventory.main import run_export, run_seed

__version__ = "1.0.0"
