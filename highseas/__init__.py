"""
highseas - cached data access for High Seas ships, people and shop orders
backed by Airtable.
"""

__version__ = "1.0.0"
