"""Errors surfaced by the C2B relay and the fallback handler for everything else."""
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)


class C2BRelayError(Exception):
    """An error that is returned to the caller as-is.

    ``body`` is rendered verbatim as the JSON response content.
    """

    status_code = 500

    def __init__(self, body: Any, *, status_code: Optional[int] = None) -> None:
        super().__init__(body if isinstance(body, str) else body.get("message", str(body)))
        self.body = body
        if status_code is not None:
            self.status_code = status_code


class BindError(C2BRelayError):
    status_code = 500

    def __init__(self) -> None:
        super().__init__({"message": "A binding error occurred, required field: phone"})


class PhoneValidationError(C2BRelayError):
    status_code = 400

    def __init__(self, phone: str, detail: str) -> None:
        super().__init__({"message": f"The phonenumber {phone} provided is not valid. {detail}"})
        self.phone = phone
        self.detail = detail


class UpstreamTransportError(C2BRelayError):
    status_code = 500

    def __init__(self) -> None:
        super().__init__("Something went wrong while trying to create new c2b request")


class UpstreamReadError(C2BRelayError):
    status_code = 500

    def __init__(self) -> None:
        super().__init__("Something went wrong while reading Mpesa C2B response")


class MalformedRequestError(RuntimeError):
    """An outbound request could not be built. Never recovered from."""


class ErrorHandler:
    def handle_exception(self, exc: Exception, context: Dict[str, Any] = None) -> Dict[str, Any]:
        logger.error("Unhandled exception in C2B relay: %s", exc, exc_info=True)
        return {
            "message": "An internal error occurred while processing your request. Please try again later.",
            "metadata": {"error": str(exc), "context": context or {}},
        }
