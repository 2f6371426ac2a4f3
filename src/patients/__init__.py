"""
Patient records: create, read, replace and delete.
"""
