"""
Database configuration settings for the inventory application.
"""
import os
from typing import Dict, Any
from orange_sugar_inventory.utils.logging_config import get_logger

# Set up logging
logger = get_logger(__name__)


def get_snowflake_config() -> Dict[str, Any]:
    """
    Get Snowflake configuration from environment variables or defaults.

    Returns:
        Dict[str, Any]: Snowflake configuration dictionary
    """
    default_config = {
        "account": "",
        "user": "",
        "password": "",
        "authenticator": "snowflake",
        "role": "INVENTORY_APP",
        "warehouse": "INVENTORY_XS",
        "database": "INVENTORY",
        "schema": "PUBLIC"
    }

    # Override with environment variables if available
    config = {}
    for key in default_config:
        env_key = f"SNOWFLAKE_{key.upper()}"
        config[key] = os.environ.get(env_key, default_config[key])

    # Key-pair and SSO setups run without a password
    if not config["password"]:
        config.pop("password")

    logger.debug(f"Using Snowflake config with account: {config['account']}, user: {config['user']}")

    return config


# Snowflake connection parameters
SNOWFLAKE_CONFIG: Dict[str, Any] = get_snowflake_config()

# --- Table names ---
_PREFIX = f"{SNOWFLAKE_CONFIG['database']}.{SNOWFLAKE_CONFIG['schema']}"

CATEGORIES_TABLE = f"{_PREFIX}.PRODUCT_CATEGORIES"
PRINTS_TABLE = f"{_PREFIX}.PRINTS_NAME"
SIZES_TABLE = f"{_PREFIX}.SIZES"
PRODUCTS_TABLE = f"{_PREFIX}.PRODUCTS"
PRODUCT_PRINTS_TABLE = f"{_PREFIX}.PRODUCT_PRINTS"
PRODUCT_WEIGHTS_TABLE = f"{_PREFIX}.PRODUCT_WEIGHTS"
PURCHASE_ORDERS_TABLE = f"{_PREFIX}.PURCHASE_ORDERS"
ITEM_MASTER_TABLE = f"{_PREFIX}.ITEM_MASTER"
BUNDLE_REFERENCE_TABLE = f"{_PREFIX}.BUNDLE_REFERENCE"
BUNDLE_ITEM_MASTER_TABLE = f"{_PREFIX}.BUNDLE_ITEM_MASTER"
