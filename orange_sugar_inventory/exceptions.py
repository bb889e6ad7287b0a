"""
Exceptions raised by the inventory services.
"""


class InventoryError(Exception):
    """Base exception for inventory application errors."""

    def __init__(self, message=None, code=None, details=None):
        """Initialize the exception.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
        """
        self.message = message or "An error occurred in the inventory application"
        self.code = code
        self.details = details
        super().__init__(self.message)

    def __str__(self):
        """String representation of the error."""
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message

    def to_dict(self):
        """Convert the exception to a dictionary."""
        error_dict = {
            'error': self.__class__.__name__,
            'message': self.message,
        }

        if self.code:
            error_dict['code'] = self.code

        if self.details:
            error_dict['details'] = self.details

        return error_dict


class ConfigError(InventoryError):
    """Exception raised for configuration errors."""

    def __init__(self, message=None, code=None, details=None):
        message = message or "Configuration error"
        super().__init__(message, code, details)


class DatabaseError(InventoryError):
    """Exception raised for database-related errors."""

    def __init__(self, message=None, code=None, details=None):
        message = message or "Database error"
        super().__init__(message, code, details)


class ValidationError(InventoryError):
    """Exception raised for invalid form or CSV input."""

    def __init__(self, message=None, code=None, details=None):
        message = message or "Validation error"
        super().__init__(message, code, details)


class DuplicateRecordError(ValidationError):
    """Exception raised when a name, code or SKU is already taken."""

    def __init__(self, message=None, code=None, details=None):
        message = message or "Record already exists"
        super().__init__(message, code or "DUPLICATE", details)


class NotFoundError(InventoryError):
    """Exception raised when a record does not exist."""

    def __init__(self, message=None, code=None, details=None):
        message = message or "Record not found"
        super().__init__(message, code, details)


class DeleteWindowError(ValidationError):
    """Exception raised when a purchase order is too old to delete."""

    def __init__(self, message=None, code=None, details=None):
        message = message or "Purchase order is outside the delete window"
        super().__init__(message, code or "DELETE_WINDOW", details)
