"""
Exporters for item master, bundle item master and purchase order files.
"""
