"""Mileage log domain service."""

from datetime import date
from decimal import Decimal
from typing import Optional

import structlog

from ledgerbook.database.base import Database
from ledgerbook.domain.entities import MileageLog
from ledgerbook.domain.errors import InvalidNumericInputError
from ledgerbook.domain.tax import estimate_mileage_deduction
from ledgerbook.utils.amount_parser import to_decimal

logger = structlog.get_logger(__name__)


class MileageService:
    """Service for logging business trips and estimating the vehicle deduction."""

    def __init__(self, db: Database):
        self.db = db

    def log_trip(
        self,
        date: date,
        distance_km,
        purpose: str = "",
        start_location: str = "",
        end_location: str = "",
    ) -> int:
        """Record one business trip.

        Args:
            date: Trip date
            distance_km: Distance driven; must be positive
            purpose: Business purpose, as a CRA logbook requires
            start_location: Where the trip started
            end_location: Where the trip ended

        Returns:
            Mileage log ID

        Raises:
            InvalidNumericInputError: If the distance is not a positive number
        """
        distance = to_decimal(distance_km, "distance_km", non_negative=True)
        if distance == 0:
            raise InvalidNumericInputError("distance_km must be greater than zero")

        log_id = self.db.create_mileage_log(
            date=date,
            distance_km=distance,
            purpose=purpose.strip(),
            start_location=start_location.strip(),
            end_location=end_location.strip(),
        )
        logger.info("mileage_logged", log_id=log_id, distance_km=str(distance))
        return log_id

    def list_logs(self, year: Optional[int] = None) -> list[MileageLog]:
        """List trips, optionally for one calendar year."""
        if year is None:
            return self.db.list_mileage_logs()
        return self.db.list_mileage_logs(start_date=date(year, 1, 1), end_date=date(year, 12, 31))

    def total_distance(self, year: Optional[int] = None) -> Decimal:
        return sum((log.distance_km for log in self.list_logs(year)), Decimal("0"))

    def estimate_deduction(self, year: Optional[int] = None, rate_per_km=None) -> Decimal:
        """Estimated vehicle deduction for the logged trips of a year."""
        return estimate_mileage_deduction(self.list_logs(year), rate_per_km)
