# Copyright (c) HotelLux contributors.
# Licensed under the MIT license.

import json
from unittest.mock import MagicMock

import pytest
import requests

from HotelLux.Admin.core._error_codes import HTTP_404, HTTP_429, HTTP_500, VALIDATION_UNEXPECTED_PAYLOAD
from HotelLux.Admin.core.config import AdminConfig
from HotelLux.Admin.core.errors import HttpError, ValidationError
from HotelLux.Admin.core.telemetry import TelemetryConfig
from HotelLux.Admin.data._entities import _EntityServiceClient


class DummyAuth:
    def __init__(self):
        self.scopes = []

    def acquire_token(self, scope):
        self.scopes.append(scope)

        class T:
            access_token = "x"

        return T()


class DummyHTTP:
    def __init__(self, responses):
        self._responses = responses
        self.calls = []

    def _request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if not self._responses:
            raise AssertionError("No more responses")
        status, headers, body = self._responses.pop(0)

        class R:
            pass

        r = R()
        r.status_code = status
        r.headers = headers
        if isinstance(body, (dict, list)):
            r.text = json.dumps(body)

            def json_func():
                return body

            r.json = json_func
        else:
            r.text = body or ""

            def json_fail():
                raise ValueError("non-json")

            r.json = json_fail
        return r

    def close(self):
        pass


class MockClient(_EntityServiceClient):
    def __init__(self, responses, config=None):
        super().__init__(DummyAuth(), "https://admin.hotellux.example/", config)
        self._http = DummyHTTP(responses)


# --- URLs and headers ---


def test_api_root_is_normalised():
    c = MockClient([], AdminConfig(api_root="v2/"))
    assert c.api == "https://admin.hotellux.example/v2"


def test_empty_base_url_rejected():
    with pytest.raises(ValidationError):
        _EntityServiceClient(DummyAuth(), "")


def test_fetch_all_preserves_server_order():
    body = [{"id": 3, "username": "c"}, {"id": 1, "username": "a"}, {"id": 2, "username": "b"}]
    c = MockClient([(200, {}, body)])

    users = c._fetch_all("users")

    assert [u.id for u in users] == [3, 1, 2]
    method, url, kwargs = c._http.calls[0]
    assert method == "get"
    assert url == "https://admin.hotellux.example/api/users"
    assert kwargs["headers"]["Authorization"] == "Bearer x"
    assert kwargs["headers"]["Accept"] == "application/json"


def test_fetch_all_accepts_wrapped_value_array():
    c = MockClient([(200, {}, {"value": [{"id": "u-1", "name": "Ada"}]})])
    users = c._fetch_all("users")
    assert users[0].id == "u-1"
    assert users[0]["name"] == "Ada"


def test_fetch_all_accepts_paged_content_array():
    c = MockClient([(200, {}, {"content": [{"id": 9}], "totalElements": 1})])
    assert [u.id for u in c._fetch_all("users")] == [9]


def test_fetch_all_rejects_unexpected_payload():
    c = MockClient([(200, {}, {"unexpected": True})])
    with pytest.raises(ValidationError) as ei:
        c._fetch_all("users")
    assert ei.value.subcode == VALIDATION_UNEXPECTED_PAYLOAD


def test_fetch_all_rejects_non_object_rows():
    c = MockClient([(200, {}, [{"id": 1}, "junk", {"id": 2}])])
    with pytest.raises(ValidationError) as ei:
        c._fetch_all("users")
    assert ei.value.subcode == VALIDATION_UNEXPECTED_PAYLOAD
    assert ei.value.details["index"] == 1
    assert ei.value.details["item_type"] == "str"


def test_fetch_all_rejects_rows_without_id():
    c = MockClient([(200, {}, [{"name": "nobody"}])])
    with pytest.raises(ValidationError):
        c._fetch_all("users")


def test_search_sends_keyword_param():
    c = MockClient([(200, {}, [{"id": 1, "username": "ada"}])])

    users = c._search("users", "ad a")

    method, url, kwargs = c._http.calls[0]
    assert url == "https://admin.hotellux.example/api/users/search"
    assert kwargs["params"] == {"keyword": "ad a"}
    assert [u.id for u in users] == [1]


def test_search_param_is_configurable():
    c = MockClient([(200, {}, [])], AdminConfig(search_param="q"))
    c._search("users", "ada")
    assert c._http.calls[0][2]["params"] == {"q": "ada"}


def test_delete_targets_item_url():
    c = MockClient([(204, {}, "")])

    c._delete("users", "a/b")

    method, url, _ = c._http.calls[0]
    assert method == "delete"
    assert url == "https://admin.hotellux.example/api/users/a%2Fb"


def test_delete_requires_id():
    c = MockClient([])
    with pytest.raises(ValidationError):
        c._delete("users", " ")


def test_get_single_entity():
    c = MockClient([(200, {}, {"id": 5, "username": "eve", "@odata.etag": 'W/"1"'})])
    user = c._get("users", 5)
    assert user.id == 5
    assert user.etag == 'W/"1"'


def test_request_ids_and_correlation_header():
    c = MockClient([(200, {}, []), (200, {}, [])])
    c._fetch_all("users")
    c._fetch_all("users")
    h1 = c._http.calls[0][2]["headers"]
    h2 = c._http.calls[1][2]["headers"]
    assert h1["x-client-request-id"] != h2["x-client-request-id"]
    assert h1["x-correlation-id"] == h2["x-correlation-id"]


def test_hook_headers_are_added():
    class Hook:
        def get_additional_headers(self):
            return {"x-tenant": "lux"}

    c = MockClient([(200, {}, [])], AdminConfig(telemetry=TelemetryConfig(hooks=[Hook()])))
    c._fetch_all("users")
    assert c._http.calls[0][2]["headers"]["x-tenant"] == "lux"


def test_error_response_reaches_hooks_as_response_only():
    hook = MagicMock()
    hook.get_additional_headers.return_value = {}
    c = MockClient([(500, {}, "boom")], AdminConfig(telemetry=TelemetryConfig(hooks=[hook])))
    with pytest.raises(HttpError):
        c._fetch_all("users")
    _, response = hook.on_request_end.call_args.args
    assert response.status_code == 500
    assert isinstance(response.error, HttpError)
    hook.on_request_error.assert_not_called()


def test_network_failure_reaches_hooks_as_error_only():
    hook = MagicMock()
    hook.get_additional_headers.return_value = {}
    c = MockClient([], AdminConfig(telemetry=TelemetryConfig(hooks=[hook])))
    c._http._request = MagicMock(side_effect=requests.ConnectionError("unreachable"))
    with pytest.raises(requests.ConnectionError):
        c._fetch_all("users")
    hook.on_request_error.assert_called_once()
    hook.on_request_end.assert_not_called()


# --- Error mapping ---


def test_http_404_subcode_and_service_code():
    responses = [(404, {"x-request-id": "rid1"}, {"error": {"code": "USER_NOT_FOUND", "message": "Not found"}})]
    c = MockClient(responses)
    with pytest.raises(HttpError) as ei:
        c._delete("users", 42)
    err = ei.value.to_dict()
    assert err["subcode"] == HTTP_404
    assert err["status_code"] == 404
    assert err["message"] == "Not found"
    assert err["details"]["service_error_code"] == "USER_NOT_FOUND"
    assert err["details"]["request_id"] == "rid1"
    assert err["is_transient"] is False


def test_http_429_transient_and_retry_after():
    c = MockClient([(429, {"Retry-After": "7"}, {"error": {"message": "Throttle"}})])
    with pytest.raises(HttpError) as ei:
        c._fetch_all("users")
    err = ei.value.to_dict()
    assert err["is_transient"] is True
    assert err["subcode"] == HTTP_429
    assert err["details"]["retry_after"] == 7


def test_http_500_body_excerpt():
    c = MockClient([(500, {}, "Internal failure XYZ stack truncated")])
    with pytest.raises(HttpError) as ei:
        c._fetch_all("users")
    err = ei.value.to_dict()
    assert err["subcode"] == HTTP_500
    assert "XYZ stack" in err["details"]["body_excerpt"]


def test_spring_style_message_is_used():
    c = MockClient([(403, {}, {"status": 403, "error": "Forbidden", "message": "Admins only"})])
    with pytest.raises(HttpError) as ei:
        c._search("users", "ada")
    assert ei.value.message == "Admins only"


def test_http_non_mapped_status_code_subcode_fallback():
    c = MockClient([(418, {}, {"error": {"message": "Teapot"}})])
    with pytest.raises(HttpError) as ei:
        c._fetch_all("users")
    assert ei.value.subcode == "http_418"


def test_error_without_body_gets_generic_message():
    c = MockClient([(502, {}, "")])
    with pytest.raises(HttpError) as ei:
        c._fetch_all("users")
    assert "HTTP 502" in ei.value.message
    assert "body_excerpt" not in ei.value.details


def test_fetch_all_through_session_context(mock_credential, test_config, sample_base_url, sample_users_payload):
    from HotelLux.Admin.core._auth import SessionContext

    c = _EntityServiceClient(SessionContext(mock_credential), sample_base_url, test_config)
    c._http = DummyHTTP([(200, {}, sample_users_payload)])

    users = c._fetch_all("users")

    assert [u["username"] for u in users] == ["ada", "bob"]
    assert c._http.calls[0][2]["headers"]["Authorization"] == "Bearer test_token_12345"
    mock_credential.get_token.assert_called_once_with(f"{sample_base_url}/.default")


def test_terminated_session_stops_requests(mock_credential, sample_base_url):
    from HotelLux.Admin.core._auth import SessionContext
    from HotelLux.Admin.core.errors import AuthenticationError

    session = SessionContext(mock_credential)
    c = _EntityServiceClient(session, sample_base_url)
    c._http = DummyHTTP([])
    session.terminate_session()

    with pytest.raises(AuthenticationError):
        c._fetch_all("users")
    assert c._http.calls == []
