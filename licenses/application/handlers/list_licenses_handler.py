"""
Read-side handlers for the admin panel.
"""

from typing import List

from licenses.application.dto.license_dto import LicenseDTO, LicenseStatsDTO
from licenses.application.queries.license_stats import LicenseStatsQuery
from licenses.application.queries.list_licenses import ListLicensesQuery
from licenses.domain.license import utc_now
from licenses.ports.license_repository import LicenseRepository


class ListLicensesHandler:
    """Handler for ListLicensesQuery."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    async def handle(self, query: ListLicensesQuery) -> List[LicenseDTO]:
        """
        Handle list licenses query.

        Args:
            query: ListLicensesQuery

        Returns:
            Every license, oldest first
        """
        licenses = await self.license_repository.list_all()
        return [LicenseDTO.from_entity(license) for license in licenses]


class LicenseStatsHandler:
    """Handler for LicenseStatsQuery."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    async def handle(self, query: LicenseStatsQuery) -> LicenseStatsDTO:
        """
        Handle license stats query.

        Anything not active-and-unexpired counts as expired, matching
        the admin panel's counters.
        """
        as_of = query.as_of or utc_now()
        licenses = await self.license_repository.list_all()
        active = sum(1 for license in licenses if license.is_in_good_standing(as_of))
        return LicenseStatsDTO(
            total=len(licenses),
            active=active,
            expired=len(licenses) - active,
        )
