"""
Data access package.
"""
