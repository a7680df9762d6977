"""
ListLicensesQuery.

Query to list every license record for the admin panel.
"""
from dataclasses import dataclass


@dataclass
class ListLicensesQuery:
    """Query to list all licenses; filtering happens client side."""
