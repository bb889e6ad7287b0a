#!/usr/bin/env python3
"""
Setup script for Orange Sugar Inventory.
"""
from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="orange-sugar-inventory",
    version="1.0.0",
    author="Orange Sugar Operations Team",
    description="SKU generation, purchase orders and item master exports for Orange Sugar",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.8",
    install_requires=[
        "pandas",
        "numpy",
        "snowflake-snowpark-python",
        "streamlit",
        "plotly",
        "openpyxl",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "inventory-cli=orange_sugar_inventory.cli.inventory_cli:main",
        ],
    },
)
