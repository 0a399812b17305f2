from typing import Dict, Optional


class MultiStorageException(Exception):
    """Base exception for the multi-storage Azure Blob adapter."""

    default_error_code: Optional[str] = None

    def __init__(self, message: str, error_code: str = None, details: Dict = None):
        super().__init__(message)
        self.error_code = error_code or self.default_error_code
        self.details = details or {}


class ConfigurationException(MultiStorageException):
    """Raised when configuration is invalid."""
    default_error_code = "CONFIGURATION_ERROR"


class ValidationException(MultiStorageException):
    """Raised when input validation fails."""
    default_error_code = "VALIDATION_ERROR"


class AddressingException(ValidationException):
    """Raised when no container can be resolved for a write."""
    default_error_code = "ADDRESSING_ERROR"


class InvalidLocatorException(ValidationException):
    """Raised when a locator is malformed or uses a foreign scheme."""
    default_error_code = "INVALID_LOCATOR"


class ResourceNotFoundException(MultiStorageException):
    """Raised when requested resource is not found."""
    default_error_code = "NOT_FOUND"


class ProviderException(MultiStorageException):
    """Raised when external provider fails."""
    default_error_code = "PROVIDER_ERROR"


class TransportException(ProviderException):
    """Raised when a request to the blob service fails."""
    default_error_code = "TRANSPORT_ERROR"
