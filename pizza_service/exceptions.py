"""
Error taxonomy for the pizza service.

Routes and services raise these instead of HTTPException. The handlers
registered in main.py turn each one into a ``{"message": ...}`` body with the
class's status code, so clients never see internal detail.

    ValidationError      400  missing or malformed input
    AuthError            401  missing/invalid/revoked token, bad credentials
    AuthorizationError   403  valid identity lacking role or ownership
    NotFoundError        404  referenced entity absent
    FulfillmentError     500  factory rejected or could not be reached
"""

from typing import Any, Dict, Optional


class PizzaServiceError(Exception):
    """Base class for errors surfaced to the client as ``{message}``."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_body(self) -> Dict[str, Any]:
        return {"message": self.message}


class ValidationError(PizzaServiceError):
    status_code = 400


class AuthError(PizzaServiceError):
    status_code = 401

    def __init__(self, message: str = "unauthorized"):
        super().__init__(message)


class AuthorizationError(PizzaServiceError):
    status_code = 403


class NotFoundError(PizzaServiceError):
    status_code = 404


class FulfillmentError(PizzaServiceError):
    """The factory did not accept the order.

    ``report_url`` is passed through when the factory supplied one, so the
    client can still follow the failure report.
    """

    status_code = 500

    def __init__(self, message: str = "Failed to fulfill order at factory", report_url: Optional[str] = None):
        super().__init__(message)
        self.report_url = report_url

    def to_body(self) -> Dict[str, Any]:
        body = super().to_body()
        if self.report_url:
            body["reportUrl"] = self.report_url
        return body
