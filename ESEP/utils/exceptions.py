"""
Custom Exceptions for the ESEP Registration Portal
"""

class PortalException(Exception):
    """Base exception for all portal errors"""
    def __init__(self, message: str, error_code: str = None):
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)

class ValidationException(PortalException):
    """Raised when input validation fails"""
    pass

class DuplicateRegistrationException(ValidationException):
    """Raised when a registration already exists for a mobile number"""
    pass

class DuplicateRecordException(ValidationException):
    """Raised when a unique value (username, category id) is already taken"""
    pass

class NotFoundException(PortalException):
    """Raised when referenced record does not exist"""
    pass

class InvalidStatusTransitionException(PortalException):
    """Raised when a registration status change is not allowed"""
    pass

class DatabaseException(PortalException):
    """Raised when database operations fail"""
    pass

class AuthenticationException(PortalException):
    """Raised when authentication fails"""
    pass

class AuthorizationException(PortalException):
    """Raised when admin role lacks permission for operation"""
    pass
