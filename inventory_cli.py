#!/usr/bin/env python3
"""
CLI entry point for Orange Sugar Inventory.
"""
import sys
from orange_sugar_inventory.cli.inventory_cli import main

if __name__ == "__main__":
    sys.exit(main())
