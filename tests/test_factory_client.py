"""
Tests for the HTTP pizza factory client.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from pizza_service.exceptions import FulfillmentError
from pizza_service.factory_client import FactoryReceipt, HttpFactoryClient, get_factory_client

DINER = {"id": 2, "name": "pizza diner", "email": "d@jwt.com"}
ORDER = {"id": 5, "franchiseId": 1, "storeId": 1, "items": []}


def _response(status_code=200, json_body=None):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    if json_body is None:
        response.json.side_effect = ValueError("no json")
    else:
        response.json.return_value = json_body
    return response


def _client(response=None, error=None):
    session = MagicMock()
    if error is not None:
        session.post.side_effect = error
    else:
        session.post.return_value = response
    return HttpFactoryClient("https://factory.test/", "secret-key", timeout=3, session=session), session


class TestSubmitOrder:
    def test_success(self):
        client, session = _client(_response(200, {"jwt": "abc.def.ghi", "reportUrl": "https://r/1"}))

        receipt = client.submit_order(DINER, ORDER)

        assert receipt == FactoryReceipt(jwt="abc.def.ghi", report_url="https://r/1")

    def test_request_shape(self):
        client, session = _client(_response(200, {"jwt": "abc.def.ghi"}))

        client.submit_order(DINER, ORDER)

        session.post.assert_called_once_with(
            "https://factory.test/api/order",
            json={"diner": DINER, "order": ORDER},
            headers={"Authorization": "Bearer secret-key"},
            timeout=3,
        )

    def test_rejection_carries_report_url(self):
        client, _ = _client(_response(500, {"message": "oven on fire", "reportUrl": "https://r/2"}))

        with pytest.raises(FulfillmentError) as exc_info:
            client.submit_order(DINER, ORDER)

        assert exc_info.value.report_url == "https://r/2"
        assert exc_info.value.to_body() == {
            "message": "Failed to fulfill order at factory",
            "reportUrl": "https://r/2",
        }

    def test_rejection_without_json_body(self):
        client, _ = _client(_response(502))

        with pytest.raises(FulfillmentError) as exc_info:
            client.submit_order(DINER, ORDER)

        assert exc_info.value.report_url is None
        assert exc_info.value.to_body() == {"message": "Failed to fulfill order at factory"}

    def test_missing_jwt_is_a_failure(self):
        client, _ = _client(_response(200, {"reportUrl": "https://r/3"}))

        with pytest.raises(FulfillmentError):
            client.submit_order(DINER, ORDER)

    def test_timeout(self):
        client, session = _client(error=requests.Timeout("too slow"))

        with pytest.raises(FulfillmentError):
            client.submit_order(DINER, ORDER)

        # Never retried
        assert session.post.call_count == 1

    def test_connection_error(self):
        client, _ = _client(error=requests.ConnectionError("refused"))

        with pytest.raises(FulfillmentError):
            client.submit_order(DINER, ORDER)


class TestClientLifecycle:
    def test_close_closes_session(self):
        client, session = _client(_response(200, {"jwt": "abc.def.ghi"}))

        client.close()

        session.close.assert_called_once_with()

    def test_dependency_closes_session_after_request(self):
        dependency = get_factory_client()
        client = next(dependency)
        assert isinstance(client, HttpFactoryClient)

        with patch.object(client.session, "close") as close:
            with pytest.raises(StopIteration):
                next(dependency)

        close.assert_called_once_with()

    def test_dependency_closes_session_when_order_fails(self):
        dependency = get_factory_client()
        client = next(dependency)

        with patch.object(client.session, "close") as close:
            with pytest.raises(FulfillmentError):
                dependency.throw(FulfillmentError())

        close.assert_called_once_with()
