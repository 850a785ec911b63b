from typing import Optional

import httpx


class CatalogError(Exception):
    """A failed catalog operation, carrying the message shown to the user."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status = status


class StoreBusyError(CatalogError):
    """Raised when a state-changing operation starts while another is pending."""
    pass


def describe_error(exc: BaseException) -> CatalogError:
    """
    Turn a failed request into a CatalogError.

    Server answers (non-2xx) keep their status code; anything where no
    response came back is reported as a plain client-side error.
    """
    if isinstance(exc, CatalogError):
        return exc
    if isinstance(exc, httpx.HTTPStatusError):
        response = exc.response
        status = response.status_code
        detail = f"Http failure response for {exc.request.url}: {status} {response.reason_phrase}"
        return CatalogError(f"Error Code: {status}\nMessage: {detail}", status=status)
    # transport failures often stringify to nothing
    detail = str(exc) or exc.__class__.__name__
    return CatalogError(f"Error: {detail}")
