"""
LicenseStatsQuery.

Query for the counters shown above the admin table.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class LicenseStatsQuery:
    """Query to count total, active and expired licenses."""

    as_of: Optional[datetime] = None
