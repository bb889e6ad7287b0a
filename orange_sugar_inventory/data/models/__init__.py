"""
Data models for the inventory application.
"""
