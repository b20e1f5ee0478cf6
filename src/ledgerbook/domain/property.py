"""Property domain service."""

from datetime import date
from decimal import Decimal
from typing import Optional

from ledgerbook.database.base import Database
from ledgerbook.domain.entities import CCASchedule, Property as PropertyEntity
from ledgerbook.domain.errors import NotFoundError, ValidationError, property_not_found
from ledgerbook.domain.tax import cca_schedule, class_rate
from ledgerbook.utils.amount_parser import to_decimal


class PropertyService:
    """Service for managing rental properties."""

    def __init__(self, db: Database):
        """Initialize property service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_property(
        self,
        address: str,
        purchase_price,
        current_value=None,
        cca_class: str = "1",
        opening_ucc=None,
        additions=0,
        tenant_name: str = "Vacant",
        lease_end: Optional[date] = None,
        mortgage_balance=None,
    ) -> int:
        """Create a property.

        Args:
            address: Street address
            purchase_price: Purchase price
            current_value: Market value; defaults to the purchase price
            cca_class: CCA class; must be a known class
            opening_ucc: UCC at the start of the year; defaults to the purchase price
            additions: Capital additions this year
            tenant_name: Tenant, or "Vacant"
            lease_end: Lease end date
            mortgage_balance: Outstanding mortgage

        Returns:
            Property ID

        Raises:
            ValidationError: If address is empty or the CCA class is unknown
            InvalidNumericInputError: If any amount is negative or non-finite
        """
        if not address or not address.strip():
            raise ValidationError("Address is required")
        class_rate(cca_class)

        purchase_price = to_decimal(purchase_price, "purchase_price", non_negative=True)
        return self.db.create_property(
            address=address.strip(),
            purchase_price=purchase_price,
            current_value=(
                purchase_price
                if current_value is None
                else to_decimal(current_value, "current_value", non_negative=True)
            ),
            cca_class=str(cca_class),
            opening_ucc=(
                purchase_price
                if opening_ucc is None
                else to_decimal(opening_ucc, "opening_ucc", non_negative=True)
            ),
            additions=to_decimal(additions, "additions", non_negative=True),
            tenant_name=tenant_name.strip() or "Vacant",
            lease_end=lease_end,
            mortgage_balance=(
                None
                if mortgage_balance is None
                else to_decimal(mortgage_balance, "mortgage_balance", non_negative=True)
            ),
        )

    def get_property(self, property_id: int) -> Optional[PropertyEntity]:
        """Get property by ID.

        Args:
            property_id: Property ID

        Returns:
            Property entity or None if not found
        """
        return self.db.get_property(property_id)

    def list_properties(self) -> list[PropertyEntity]:
        return self.db.list_properties()

    def get_cca_schedule(self, property_id: int, claim: Optional[Decimal] = None) -> CCASchedule:
        """Compute this year's CCA schedule for a property.

        Raises:
            NotFoundError: If the property doesn't exist
        """
        prop = self.db.get_property(property_id)
        if prop is None:
            raise NotFoundError(property_not_found(property_id))
        return cca_schedule(prop, claim)
