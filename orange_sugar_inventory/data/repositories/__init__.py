"""
Repositories for inventory tables.
"""
