"""
Helper Utilities
Common utility functions for registration and admin operations
"""

import re
from datetime import datetime
from typing import Dict, Any
import logging

logger = logging.getLogger(__name__)

CUSTOMER_ID_PREFIX = "ESEP"

class StringUtils:
    """Utility functions for string operations"""

    @staticmethod
    def generate_customer_id(mobile: str, name: str) -> str:
        """Public registrant ID: prefix, mobile verbatim, first letter of name upper-cased"""
        return f"{CUSTOMER_ID_PREFIX}{mobile}{name[:1].upper()}"

    @staticmethod
    def slugify_category(name: str) -> str:
        """Category id from its name: lower case, whitespace runs become hyphens"""
        return re.sub(r'\s+', '-', name.strip().lower())

    @staticmethod
    def mask_phone_number(phone: str) -> str:
        """Mask phone number for display"""
        if len(phone) <= 4:
            return phone

        return phone[:2] + "*" * (len(phone) - 4) + phone[-2:]

    @staticmethod
    def clean_string(text: str) -> str:
        """Clean and normalize string input"""
        if not text:
            return ""

        return " ".join(text.strip().split())

class LoggingUtils:
    """Structured audit lines; the event fields travel in the record's extra"""

    @staticmethod
    def _event(event_type: str, username: str = None, details: Dict[str, Any] = None, **fields) -> Dict[str, Any]:
        return {
            'event_type': event_type,
            'username': username or 'public',
            'timestamp': datetime.now().isoformat(),
            'details': details or {},
            **fields,
        }

    @staticmethod
    def log_security_event(event_type: str, username: str = None, details: Dict[str, Any] = None):
        """Login, logout and denied actions"""
        logger.warning(f"Security Event: {event_type} ({username or 'public'})",
                       extra=LoggingUtils._event(event_type, username, details))

    @staticmethod
    def log_business_event(event_type: str, entity_type: str, entity_id: Any,
                           username: str = None, details: Dict[str, Any] = None):
        """Successful writes to registrations, panchayaths, categories and admins"""
        logger.info(f"Business Event: {event_type} on {entity_type} {entity_id}",
                    extra=LoggingUtils._event(event_type, username, details,
                                              entity_type=entity_type, entity_id=entity_id))
