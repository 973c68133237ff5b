from .base_exceptions import (
    InfobuhDocsError,
    BusinessLogicError,
    ValidationError,
    TechnicalError,
    ExternalServiceError,
    ConfigurationError,
)

__all__ = [
    "InfobuhDocsError",
    "BusinessLogicError",
    "ValidationError",
    "TechnicalError",
    "ExternalServiceError",
    "ConfigurationError",
]
