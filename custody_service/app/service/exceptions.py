"""
Custom exceptions for the Custody service.
"""

class BaseCustodyError(Exception):
    """Base class for exceptions in this module."""
    pass

class AuthenticationError(BaseCustodyError):
    """Raised when a bearer credential is missing or cannot be verified."""
    def __init__(self, message: str = "Invalid token", missing: bool = False):
        self.missing = missing
        super().__init__(message)

class AuthorizationError(BaseCustodyError):
    """Raised when the caller's role does not match the role a route requires."""
    def __init__(self, required_role: str, actual_role: str):
        self.required_role = required_role
        self.actual_role = actual_role
        super().__init__("Insufficient permissions")

class ValidationError(BaseCustodyError):
    """Raised on bad caller input, e.g. a duplicate email or an unknown role."""
    pass

class ReleaseRequestNotFoundError(BaseCustodyError):
    """Raised when a release request is not found."""
    def __init__(self, request_id: str):
        self.request_id = request_id
        super().__init__(f"Release request with ID '{request_id}' not found.")

class InvalidRequestStateError(BaseCustodyError):
    """Raised when a transition is attempted on a request that is no longer pending."""
    def __init__(self, request_id: str, current_status: str, attempted_status: str):
        self.request_id = request_id
        self.current_status = current_status
        self.attempted_status = attempted_status
        super().__init__(
            f"Cannot move release request '{request_id}' to '{attempted_status}' "
            f"from state '{current_status}'."
        )

class StorageError(BaseCustodyError):
    """Raised when a persistence operation fails."""
    pass

class ConfigurationError(BaseCustodyError):
    """Raised when a configuration issue is detected."""
    pass
