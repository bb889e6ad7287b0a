"""
Command-line interface for the inventory tools.
"""
import argparse
import logging
import sys
from typing import List, Optional
from orange_sugar_inventory.main import run_export, run_seed
from orange_sugar_inventory.sku.generator import generate_sku
from orange_sugar_inventory.sku.sizes import intersect_sizes, sort_sizes
from orange_sugar_inventory.utils.validation import validate_date_format

EXPORT_COMMANDS = {
    "export-item-master": "item_master",
    "export-bundle-item-master": "bundle_item_master",
    "export-purchase-orders": "purchase_orders",
}


def _split(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        args (Optional[List[str]]): Command-line arguments (uses sys.argv if None)

    Returns:
        argparse.Namespace: Parsed arguments
    """
    parser = argparse.ArgumentParser(
        description="Orange Sugar Inventory - SKU tools, exports and seeding"
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    sku_parser = subparsers.add_parser("sku", help="Generate a SKU")
    sku_parser.add_argument("--schema", type=int, default=1, help="SKU schema type 0-6 (default: 1)")
    sku_parser.add_argument("--category", required=True, help="Category code")
    sku_parser.add_argument("--prints", required=True, type=_split, help="Comma-separated print codes, in order")
    sku_parser.add_argument("--size", help="Size name (omit or 'Standard' for no suffix)")

    sizes_parser = subparsers.add_parser("common-sizes", help="Sizes shared by several products")
    sizes_parser.add_argument(
        "--sizes",
        action="append",
        type=_split,
        required=True,
        help="Comma-separated sizes of one product; repeat once per product"
    )
    sizes_parser.add_argument("--sort", action="store_true", help="Sort the result by the size display order")

    for command in EXPORT_COMMANDS:
        export_parser = subparsers.add_parser(command, help=f"Write the {command[7:].replace('-', ' ')} file")
        export_parser.add_argument("--output-dir", default=".", help="Output directory (default: current directory)")
        export_parser.add_argument("--format", choices=["csv", "xlsx"], default="xlsx", help="File format (default: xlsx)")
        export_parser.add_argument("--date", help="PO date or creation day (YYYY-MM-DD, default: today)")

    seed_parser = subparsers.add_parser("seed", help="Load master data from CSV files")
    seed_parser.add_argument("--data-dir", help="Directory with categories.csv, print_master.csv, ...")
    seed_parser.add_argument("--bundle-reference", help="Bundle reference CSV; replaces the table")

    # Parse arguments
    return parser.parse_args(args)


def main(args: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        args (Optional[List[str]]): Command-line arguments (uses sys.argv if None)

    Returns:
        int: Exit code (0 for success, non-zero for errors)
    """
    parsed_args = parse_args(args)

    # Set log level based on verbosity
    log_level = logging.DEBUG if parsed_args.verbose else logging.INFO

    if parsed_args.command == "sku":
        print(generate_sku(parsed_args.schema, parsed_args.category, parsed_args.prints, parsed_args.size))
        return 0

    if parsed_args.command == "common-sizes":
        common = intersect_sizes(parsed_args.sizes)
        if parsed_args.sort:
            common = sort_sizes(common)
        print(", ".join(common))
        return 0

    try:
        if parsed_args.command in EXPORT_COMMANDS:
            if parsed_args.date and not validate_date_format(parsed_args.date):
                print(f"Error: Invalid date format: {parsed_args.date}. Use YYYY-MM-DD format.")
                return 1
            path = run_export(
                EXPORT_COMMANDS[parsed_args.command],
                parsed_args.output_dir,
                day=parsed_args.date,
                file_format=parsed_args.format,
                log_level=log_level
            )
            print(f"Export written to {path}")
            return 0

        if parsed_args.command == "seed":
            if not parsed_args.data_dir and not parsed_args.bundle_reference:
                print("Error: Give --data-dir and/or --bundle-reference.")
                return 1
            results = run_seed(parsed_args.data_dir, parsed_args.bundle_reference, log_level=log_level)
            for result in results:
                print(result)
            return 1 if any(result.error_count for result in results) else 0

    except Exception as e:
        print(f"\nError: {str(e)}")
        if parsed_args.verbose:
            import traceback
            traceback.print_exc()
        return 1

    return 1


if __name__ == "__main__":
    sys.exit(main())
