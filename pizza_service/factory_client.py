"""
Pizza factory client.

The factory is the external service that actually makes the pizzas. Each new
order is posted to it exactly once; the factory answers with a signed
confirmation token (``jwt``) and a ``reportUrl`` the diner can follow.

Routes never construct a client themselves. They declare
``factory: FactoryClient = Depends(get_factory_client)``, so tests (or an
alternative deployment) swap the implementation through
``app.dependency_overrides[get_factory_client]``.

Request:
    POST {FACTORY_URL}/api/order
    Authorization: Bearer {FACTORY_API_KEY}
    {"diner": {"id", "name", "email"}, "order": {...}}

Response (2xx):
    {"jwt": "...", "reportUrl": "..."}

Anything else, including a timeout or connection error, raises
``FulfillmentError``. The call is never retried.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Generator, Optional

import requests

from . import config
from .exceptions import FulfillmentError

logger = logging.getLogger(__name__)


@dataclass
class FactoryReceipt:
    """The factory's confirmation for an accepted order."""
    jwt: str
    report_url: Optional[str] = None


class FactoryClient(ABC):
    @abstractmethod
    def submit_order(self, diner: Dict[str, Any], order: Dict[str, Any]) -> FactoryReceipt:
        """Send one order to the factory. Raises FulfillmentError on rejection."""


class HttpFactoryClient(FactoryClient):
    """Talks to the factory over HTTP with a single bounded request."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 10,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or requests.Session()

    def submit_order(self, diner: Dict[str, Any], order: Dict[str, Any]) -> FactoryReceipt:
        url = f"{self.base_url}/api/order"
        try:
            response = self.session.post(
                url,
                json={"diner": diner, "order": order},
                headers={"Authorization": f"Bearer {self.api_key}"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("Factory request for order %s failed: %s", order.get("id"), exc)
            raise FulfillmentError() from exc

        body = _json_or_empty(response)
        report_url = body.get("reportUrl")

        if not response.ok:
            logger.warning(
                "Factory rejected order %s with status %d",
                order.get("id"),
                response.status_code,
            )
            raise FulfillmentError(report_url=report_url)

        token = body.get("jwt")
        if not token:
            logger.warning("Factory accepted order %s but returned no jwt", order.get("id"))
            raise FulfillmentError(report_url=report_url)

        logger.info("Factory accepted order %s", order.get("id"))
        return FactoryReceipt(jwt=token, report_url=report_url)

    def close(self) -> None:
        self.session.close()


def _json_or_empty(response: requests.Response) -> Dict[str, Any]:
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


def get_factory_client() -> Generator[FactoryClient, None, None]:
    """FastAPI dependency yielding the configured factory client for one request."""
    client = HttpFactoryClient(
        base_url=config.FACTORY_URL,
        api_key=config.FACTORY_API_KEY,
        timeout=config.FACTORY_TIMEOUT_SECONDS,
    )
    try:
        yield client
    finally:
        client.close()
