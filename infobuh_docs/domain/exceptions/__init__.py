from .document_exceptions import (
    DocumentError,
    ResolutionError,
    AmountTooLargeError,
    RenderError,
    UnknownTemplateError,
    StorageError,
    GenerationTimeoutError,
)

__all__ = [
    "DocumentError",
    "ResolutionError",
    "AmountTooLargeError",
    "RenderError",
    "UnknownTemplateError",
    "StorageError",
    "GenerationTimeoutError",
]
