"""
Streamlit user interface.
"""
