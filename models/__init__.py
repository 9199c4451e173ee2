"""
models/ - Record Types
======================
Plain dataclasses for every row shape the persistence layer reads or writes,
plus the optional-field search filters.
"""
