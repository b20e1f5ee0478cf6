"""Tests for PropertyService."""

import pytest
from datetime import date
from decimal import Decimal

from ledgerbook.domain.errors import (
    InvalidNumericInputError,
    NotFoundError,
    ValidationError,
)


def test_create_property_defaults(property_service):
    property_id = property_service.create_property(
        address=" 4 Oak Ave ", purchase_price=Decimal("500000")
    )

    prop = property_service.get_property(property_id)
    assert prop.address == "4 Oak Ave"
    assert prop.current_value == Decimal("500000")
    assert prop.opening_ucc == Decimal("500000")
    assert prop.additions == Decimal("0")
    assert prop.tenant_name == "Vacant"
    assert prop.mortgage_balance is None
    assert prop.cca_class == "1"


def test_sample_property_round_trip(sample_property):
    assert sample_property.lease_end == date(2024, 4, 30)
    assert sample_property.mortgage_balance == Decimal("450000")
    assert sample_property.equity == Decimal("400000")


def test_list_properties_sorted_by_address(property_service):
    property_service.create_property(address="B Street", purchase_price=Decimal("1"))
    property_service.create_property(address="A Street", purchase_price=Decimal("1"))
    assert [p.address for p in property_service.list_properties()] == ["A Street", "B Street"]


def test_unknown_cca_class(property_service):
    with pytest.raises(ValidationError):
        property_service.create_property(
            address="4 Oak Ave", purchase_price=Decimal("1"), cca_class="42"
        )


def test_negative_price(property_service):
    with pytest.raises(InvalidNumericInputError):
        property_service.create_property(address="4 Oak Ave", purchase_price=Decimal("-1"))


def test_empty_address(property_service):
    with pytest.raises(ValidationError):
        property_service.create_property(address="", purchase_price=Decimal("1"))


def test_cca_schedule(property_service, sample_property):
    schedule = property_service.get_cca_schedule(sample_property.id)
    assert schedule.max_claim == Decimal("31600.00")
    assert schedule.class_rate == Decimal("0.04")

    partial = property_service.get_cca_schedule(sample_property.id, claim=Decimal("1000"))
    assert partial.closing_ucc == Decimal("799000")


def test_cca_schedule_missing_property(property_service):
    with pytest.raises(NotFoundError):
        property_service.get_cca_schedule(999)
