from __future__ import annotations

import structlog

from product_api.core.exceptions import GENERIC_ERROR_MESSAGE, UnexpectedFailure

logger = structlog.get_logger(__name__)


class ErrorTranslator:
    """
    Граница обработчика: любая неожиданная ошибка превращается в
    UnexpectedFailure с фиксированным текстом. Детали идут только в лог.
    """

    def __init__(self, message: str = GENERIC_ERROR_MESSAGE):
        self.message = message

    def translate(self, exc: BaseException, *, operation: str, **context) -> UnexpectedFailure:
        logger.exception(
            "product.operation_failed",
            operation=operation,
            error_type=type(exc).__name__,
            exc_info=exc,
            **context,
        )
        return UnexpectedFailure(self.message)
