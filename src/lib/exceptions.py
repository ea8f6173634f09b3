"""
Exception Hierarchy

Custom exceptions for the Chrono feedback service.
"""


class ChronoException(Exception):
    """Base exception for the Chrono feedback service"""

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# Callable-function errors (surfaced to the direct caller)
class CallableError(ChronoException):
    """Error returned to a callable-function client in the structured error shape"""

    code = "internal"
    status = "INTERNAL"
    http_status = 500

    def to_dict(self) -> dict:
        """Render the error body: {"error": {"status": ..., "message": ...}}"""
        return {"error": {"status": self.status, "message": self.message}}


class Unauthenticated(CallableError):
    """Exception when no verified caller identity is attached to the request"""
    code = "unauthenticated"
    status = "UNAUTHENTICATED"
    http_status = 401


class InvalidArgument(CallableError):
    """Exception when a required request field is missing or empty"""
    code = "invalid-argument"
    status = "INVALID_ARGUMENT"
    http_status = 400


class Internal(CallableError):
    """Exception when sending fails or something unexpected happens"""
    pass


# Mail Exceptions
class MailDeliveryError(ChronoException):
    """Exception when the mail relay rejects or fails to deliver a message"""
    pass


# Event Exceptions
class MalformedRecordError(ChronoException):
    """Exception when a created feedback record cannot be turned into notifications"""
    pass


# Configuration Exceptions
class ConfigurationException(ChronoException):
    """Exception related to configuration"""
    pass


# Utility functions
def format_exception_details(exception: ChronoException) -> str:
    """
    Format exception details for logging

    Args:
        exception: Chrono exception instance

    Returns:
        Formatted string with exception details
    """
    details_str = f"{exception.__class__.__name__}: {exception.message}"

    if exception.details:
        details_list = [f"  {k}: {v}" for k, v in exception.details.items()]
        details_str += "\nDetails:\n" + "\n".join(details_list)

    return details_str
