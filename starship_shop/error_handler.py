"""Error taxonomy and capture helpers for the shop stores."""
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)


class ShopError(Exception):
    """Base class for errors that are captured into store state."""

    kind = "error"

    def __init__(self, message: str, *, payload: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.payload = payload or {}


class NetworkError(ShopError):
    """Catalog fetch or search failed (transport error or non-2xx)."""

    kind = "network"


class StorageError(ShopError):
    """Persisted key-value read or write failed."""

    kind = "storage"


class ValidationError(ShopError):
    """An intent was rejected before any state was mutated."""

    kind = "validation"


class ErrorHandler:
    def handle_exception(self, exc: Exception, context: Dict[str, Any] = None) -> Dict[str, Any]:
        if isinstance(exc, ValidationError):
            # User-facing rejection, not a fault
            logger.info("Rejected intent: %s", exc)
            return {
                "message": exc.message,
                "kind": exc.kind,
                "metadata": {"context": context or {}},
            }
        if isinstance(exc, ShopError):
            logger.warning("%s error captured: %s", exc.kind, exc)
            return {
                "message": exc.message,
                "kind": exc.kind,
                "metadata": {"error": str(exc), "payload": exc.payload, "context": context or {}},
            }
        logger.error("Unhandled exception in shop: %s", exc, exc_info=True)
        return {
            "message": "Something went wrong. Please try again.",
            "kind": "internal",
            "metadata": {"error": str(exc), "context": context or {}},
        }
