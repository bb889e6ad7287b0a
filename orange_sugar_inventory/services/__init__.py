"""
Services that combine repositories into the application's operations.
"""
