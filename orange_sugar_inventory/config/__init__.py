"""
Configuration package for the inventory application.
"""
