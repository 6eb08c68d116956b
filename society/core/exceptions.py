class SocietyException(Exception):
    """Base exception for the society management API"""

    pass


class UnauthorizedException(SocietyException):
    """Raised when no valid session accompanies the request"""

    pass


class NotFoundException(SocietyException):
    """Raised when resource not found"""

    pass


class ForbiddenException(SocietyException):
    """Raised when a principal tries to act outside its role or site"""

    pass


class ValidationException(SocietyException):
    """Raised for business logic validation errors"""

    pass


class ConflictException(SocietyException):
    """Raised when a write would collide with an existing record"""

    pass
