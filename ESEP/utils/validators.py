"""
Input Validation Utilities
Provides validation functions for portal form inputs
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Dict, Any
from utils.exceptions import ValidationException

class PortalValidator:
    """Validation utilities for registration and admin forms"""

    @staticmethod
    def validate_required(value: Any, field_name: str) -> str:
        """Return the trimmed value; blank or missing values are rejected"""
        if value is None or not isinstance(value, str) or not value.strip():
            raise ValidationException(f"{field_name} is required")
        return value.strip()

    @staticmethod
    def validate_required_fields(data: Dict[str, Any], labels: Dict[str, str]) -> Dict[str, str]:
        """Trim every labelled field, reporting all blank ones together"""
        missing = [label for key, label in labels.items()
                   if not isinstance(data.get(key), str) or not data.get(key).strip()]
        if missing:
            raise ValidationException(f"Please fill all required fields: {', '.join(missing)}")
        return {key: data[key].strip() for key in labels}

    @staticmethod
    def validate_mobile(mobile: str) -> bool:
        """Validate mobile number"""
        if not mobile:
            raise ValidationException("Mobile number is required")

        if not re.match(r'^\d{10}$', mobile):
            raise ValidationException("Mobile number must be exactly 10 digits")

        return True

    @staticmethod
    def validate_fee(amount: Any, field_name: str = "Fee") -> Decimal:
        """Validate a fee value and return it as Decimal"""
        try:
            fee = Decimal(str(amount))
        except (InvalidOperation, ValueError):
            raise ValidationException(f"{field_name} must be a number")

        if not fee.is_finite():
            raise ValidationException(f"{field_name} must be a number")

        if fee < 0:
            raise ValidationException(f"{field_name} cannot be negative")

        if fee.as_tuple().exponent < -2:
            raise ValidationException(f"{field_name} cannot have more than 2 decimal places")

        return fee

    @staticmethod
    def validate_image_url(url: str) -> bool:
        """Image is optional; when given it must be an http(s) URL"""
        if not url:
            return True

        if not re.match(r'^https?://\S+$', url.strip()):
            raise ValidationException("Image must be an http(s) URL")

        return True
