from decimal import Decimal

import pytest

from utils.exceptions import ValidationException
from utils.formatters import format_fee, status_badge
from utils.helpers import StringUtils
from utils.validators import PortalValidator


def test_customer_id_example():
    assert StringUtils.generate_customer_id("9876543210", "anita") == "ESEP9876543210A"


@pytest.mark.parametrize("mobile, name", [
    ("9876543210", "Anita"),
    ("9000000001", "rahul K"),
    ("8123456789", "émile"),
])
def test_customer_id_is_deterministic(mobile, name):
    first = StringUtils.generate_customer_id(mobile, name)
    assert first == StringUtils.generate_customer_id(mobile, name)
    assert first == "ESEP" + mobile + name[0].upper()


def test_customer_id_keeps_mobile_verbatim():
    assert StringUtils.generate_customer_id("0012345678", "z") == "ESEP0012345678Z"


def test_slugify_category():
    assert StringUtils.slugify_category("Pennyekart  Free Registration") == "pennyekart-free-registration"
    assert StringUtils.slugify_category(" Job Card ") == "job-card"


def test_mask_phone_number():
    assert StringUtils.mask_phone_number("9876543210") == "98******10"


def test_validate_required_trims():
    assert PortalValidator.validate_required("  Kottakkal ", "Name") == "Kottakkal"
    with pytest.raises(ValidationException, match="Name is required"):
        PortalValidator.validate_required("   ", "Name")


def test_validate_required_fields_lists_all_missing():
    with pytest.raises(ValidationException) as exc:
        PortalValidator.validate_required_fields({'name': ' ', 'ward': None}, {'name': 'Name', 'ward': 'Ward'})
    assert "Name" in exc.value.message and "Ward" in exc.value.message


@pytest.mark.parametrize("mobile", ["98765", "98765432101", "98765abcde", ""])
def test_validate_mobile_rejects(mobile):
    with pytest.raises(ValidationException):
        PortalValidator.validate_mobile(mobile)


def test_validate_fee():
    assert PortalValidator.validate_fee("299") == Decimal("299")
    with pytest.raises(ValidationException):
        PortalValidator.validate_fee(-1)
    with pytest.raises(ValidationException):
        PortalValidator.validate_fee("abc")


@pytest.mark.parametrize("amount", ["NaN", "Infinity", "-Infinity", "sNaN", None, "12.345"])
def test_validate_fee_rejects_non_numbers(amount):
    with pytest.raises(ValidationException):
        PortalValidator.validate_fee(amount)


def test_format_fee_free():
    assert format_fee(Decimal("0")) == "FREE"
    assert format_fee(Decimal("299")) == "₹299.00"


def test_status_badge():
    assert status_badge("approved") == "Approved"
    assert status_badge("on_hold") == "On Hold"


def test_business_event_carries_fields(caplog):
    from utils.helpers import LoggingUtils

    with caplog.at_level("INFO", logger="utils.helpers"):
        LoggingUtils.log_business_event("registration_submitted", "registration", 4,
                                        details={'category': 'Farmelife'})
    record = caplog.records[-1]
    assert record.event_type == "registration_submitted"
    assert record.entity_id == 4
    assert record.username == "public"
    assert record.details == {'category': 'Farmelife'}


def test_mask_phone_number_short_values_unchanged():
    assert StringUtils.mask_phone_number("1234") == "1234"
