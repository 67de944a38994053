# carerecords/__init__.py
"""CSV-backed record management core for clinic data."""

__version__ = "1.0.0"
