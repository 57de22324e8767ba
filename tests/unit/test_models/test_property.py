"""Tests for Property and Enquiry models."""

import pytest
from agent_analytics.models.enquiry import Enquiry
from agent_analytics.models.property import ListingType, Property


@pytest.mark.unit
def test_property_resale_fields():
    """Test resale pricing blocks are parsed."""
    record = Property.model_validate({
        "listingType": "resale",
        "pricing": {"totalAskPrice": 5000000},
        "totalAskPrice": 4500000,
        "zone": "North",
        "qcId": "QC1",
    })

    assert record.listing == ListingType.RESALE
    assert record.pricing.total_ask_price == 5000000
    assert record.total_ask_price == 4500000
    assert record.zone == "North"
    assert record.qc_id == "QC1"


@pytest.mark.unit
def test_property_rental_fields():
    """Test rental info is parsed."""
    record = Property.model_validate({
        "listingType": "rental",
        "rentalInfo": {"rent": 20000, "rentalIncome": 18000},
    })

    assert record.listing == ListingType.RENTAL
    assert record.rental_info.rent == 20000
    assert record.rental_info.rental_income == 18000


@pytest.mark.unit
@pytest.mark.parametrize("listing_type", ["commercial", "", None, "RESALE"])
def test_property_other_listing_types(listing_type):
    """Test unknown listing types have no listing enum."""
    record = Property.model_validate({"listingType": listing_type})

    assert record.listing is None


@pytest.mark.unit
def test_property_non_object_blocks_are_dropped():
    """Test a pricing block that is not an object reads as null."""
    record = Property.model_validate({"listingType": "resale", "pricing": "5000000", "rentalInfo": [1]})

    assert record.pricing is None
    assert record.rental_info is None


@pytest.mark.unit
def test_property_numeric_zone_is_text():
    """Test non-text zones are kept as text."""
    assert Property.model_validate({"zone": 7}).zone == "7"


@pytest.mark.unit
def test_enquiry_property_reference():
    """Test enquiries keep their property reference."""
    assert Enquiry.model_validate({"propertyId": "P1"}).property_id == "P1"
    assert Enquiry.model_validate({}).property_id is None
    assert Enquiry.model_validate({"propertyId": ""}).property_id is None
    assert Enquiry.model_validate({"propertyId": ["P1"]}).property_id is None
