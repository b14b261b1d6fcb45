from .operations import (
    LocationInput,
    OperationRequest,
    ProductImportSummary,
    ShelfImportSummary,
)

__all__ = [
    "LocationInput",
    "OperationRequest",
    "ProductImportSummary",
    "ShelfImportSummary",
]
