"""Sales tax decomposition and capital cost allowance calculations."""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from ledgerbook.domain.entities import (
    CENT,
    ZERO,
    CCASchedule,
    InvoiceItem,
    InvoiceTotals,
    LedgerType,
    MileageLog,
    Property,
    SplitAllocation,
)
from ledgerbook.domain.errors import InvalidNumericInputError, ValidationError
from ledgerbook.utils.amount_parser import to_decimal

# Ontario HST. Callers pass their own rate for other jurisdictions.
HST_RATE = Decimal("0.13")

HALF_YEAR_FACTOR = Decimal("0.5")

CCA_CLASS_RATES: dict[str, Decimal] = {
    "1": Decimal("0.04"),
    "8": Decimal("0.20"),
    "10": Decimal("0.30"),
    "10.1": Decimal("0.30"),
}

# CRA automobile allowance rate for the first 5,000 km.
MILEAGE_RATE_PER_KM = Decimal("0.68")


def round_cents(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def decompose_tax(gross_amount, is_tax_included: bool, rate=HST_RATE) -> Decimal:
    """Return the sales tax embedded in a tax-inclusive total.

    ``tax = gross - gross / (1 + rate)``, rounded to cents. The sign of
    ``gross_amount`` is ignored.

    Args:
        gross_amount: Tax-inclusive total
        is_tax_included: If False, no tax is embedded and 0 is returned
        rate: Tax rate as a fraction (0.13 for 13%)

    Raises:
        InvalidNumericInputError: If the amount is not finite or the rate is negative
    """
    gross = abs(to_decimal(gross_amount, "gross_amount"))
    rate = to_decimal(rate, "rate", non_negative=True)
    if not is_tax_included:
        return ZERO
    return round_cents(gross - gross / (1 + rate))


def add_tax(net_amount, rate=HST_RATE) -> Decimal:
    """Return the tax charged on top of a tax-exclusive amount."""
    net = to_decimal(net_amount, "net_amount")
    rate = to_decimal(rate, "rate", non_negative=True)
    return round_cents(net * rate)


def max_capital_cost_allowance(opening_ucc, additions, class_rate) -> Decimal:
    """Return the CCA ceiling for one year under the half-year rule.

    Only half of the current-year additions attract the full class rate:
    ``(opening_ucc + additions * 0.5) * class_rate``. This is a maximum claim;
    the caller decides how much to claim.

    Raises:
        InvalidNumericInputError: If any input is non-finite or negative
    """
    opening_ucc = to_decimal(opening_ucc, "opening_ucc", non_negative=True)
    additions = to_decimal(additions, "additions", non_negative=True)
    class_rate = to_decimal(class_rate, "class_rate", non_negative=True)
    return (opening_ucc + additions * HALF_YEAR_FACTOR) * class_rate


def class_rate(cca_class) -> Decimal:
    """Look up the declining-balance rate for a CCA class.

    Raises:
        ValidationError: If the class is unknown
    """
    key = str(cca_class).strip()
    if key not in CCA_CLASS_RATES:
        raise ValidationError(
            f"Unknown CCA class '{cca_class}'. Known classes: {', '.join(CCA_CLASS_RATES)}"
        )
    return CCA_CLASS_RATES[key]


def cca_schedule(prop: Property, claim=None) -> CCASchedule:
    """Build one year's CCA schedule for a property.

    Args:
        prop: The rental property
        claim: Amount to claim; defaults to the maximum. Must not exceed it.

    Raises:
        InvalidNumericInputError: If the claim is negative or above the ceiling
    """
    rate = class_rate(prop.cca_class)
    max_claim = round_cents(
        max_capital_cost_allowance(prop.opening_ucc, prop.additions, rate)
    )
    claimed = max_claim if claim is None else to_decimal(claim, "claim", non_negative=True)
    if claimed > max_claim:
        raise InvalidNumericInputError(
            f"Claim {claimed} exceeds maximum CCA {max_claim} for property {prop.id}"
        )
    return CCASchedule(
        property_id=prop.id,
        cca_class=str(prop.cca_class),
        class_rate=rate,
        opening_ucc=prop.opening_ucc,
        additions=prop.additions,
        max_claim=max_claim,
        claimed=claimed,
        closing_ucc=prop.opening_ucc + prop.additions - claimed,
    )


def compute_invoice_totals(items: Iterable[InvoiceItem], rate=HST_RATE) -> InvoiceTotals:
    """Compute totals for a tax-exclusive invoice."""
    subtotal = ZERO
    for item in items:
        quantity = to_decimal(item.quantity, "quantity", non_negative=True)
        price = to_decimal(item.price, "price", non_negative=True)
        subtotal += quantity * price
    subtotal = round_cents(subtotal)
    hst_amount = add_tax(subtotal, rate)
    return InvoiceTotals(subtotal=subtotal, hst_amount=hst_amount, total=subtotal + hst_amount)


def allocate_split(
    gross_amount, hst_included: bool, active_percent, rate=HST_RATE
) -> SplitAllocation:
    """Apportion a captured amount between the active and passive ledgers.

    Tax is removed first; the pre-tax subtotal is split by ``active_percent``.
    The passive share absorbs the rounding remainder so the shares always sum
    to the subtotal.

    Raises:
        InvalidNumericInputError: If ``active_percent`` is outside 0..100
    """
    gross = abs(to_decimal(gross_amount, "gross_amount"))
    percent = to_decimal(active_percent, "active_percent", non_negative=True)
    if percent > 100:
        raise InvalidNumericInputError(f"active_percent must be at most 100, got {percent}")

    hst_amount = decompose_tax(gross, hst_included, rate)
    subtotal = gross - hst_amount
    active_amount = round_cents(subtotal * percent / 100)
    return SplitAllocation(
        gross=gross,
        hst_amount=hst_amount,
        subtotal=subtotal,
        active_amount=active_amount,
        passive_amount=subtotal - active_amount,
        primary_ledger=LedgerType.ACTIVE if percent >= 50 else LedgerType.PASSIVE,
        is_split=0 < percent < 100,
    )


def estimate_mileage_deduction(
    logs: Iterable[MileageLog], rate_per_km: Optional[Decimal] = None
) -> Decimal:
    """Estimate the vehicle deduction for logged business trips."""
    rate = MILEAGE_RATE_PER_KM if rate_per_km is None else to_decimal(
        rate_per_km, "rate_per_km", non_negative=True
    )
    total_km = sum(
        (to_decimal(log.distance_km, "distance_km", non_negative=True) for log in logs),
        ZERO,
    )
    return round_cents(total_km * rate)
