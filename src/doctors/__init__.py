"""
Doctor dashboard and doctor directory.
"""
