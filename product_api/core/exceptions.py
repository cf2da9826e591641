# product_api/core/exceptions.py
from __future__ import annotations

from typing import Dict


GENERIC_ERROR_MESSAGE = (
    "An error occurred while processing the request. Please try again later."
)


class ProductValidationError(Exception):
    """One or more field rules were violated by a write payload."""
    def __init__(self, errors: Dict[str, str]):
        super().__init__(f"Invalid product payload: {', '.join(errors)}")
        self.errors = errors


class ProductNotFoundError(Exception):
    def __init__(self, product_id: int):
        super().__init__(f"Product {product_id} not found")
        self.product_id = product_id


class StoreFailure(Exception):
    """Any persistence fault: connectivity, constraint, concurrent delete."""


class UnexpectedFailure(Exception):
    """
    What crosses the handler boundary instead of the real error.
    Carries only the generic message; the cause is logged, not exposed.
    """
    def __init__(self, message: str = GENERIC_ERROR_MESSAGE):
        super().__init__(message)
        self.message = message
