import json
from unittest.mock import MagicMock

import pytest
from requests.exceptions import ConnectionError, Timeout

from config import Settings
from services.client import PortalClient, normalize_errors
from services.errors import PortalError, ValidationFailed


def make_response(status=200, body=None, headers=None, text=""):
    resp = MagicMock()
    resp.status_code = status
    resp.headers = headers if headers is not None else {"X-Inertia": "true"}
    resp.text = text
    if body is None:
        resp.json.side_effect = ValueError("no json")
    else:
        resp.json.return_value = body
    return resp


def make_client(*responses, xsrf=None):
    session = MagicMock()
    session.cookies.get.return_value = xsrf
    session.request.side_effect = list(responses)
    config = Settings(api_base_url="http://portal.test/", request_timeout=5)
    return PortalClient(config=config, session=session), session


def page(props, version="abc"):
    return {"component": "Page", "props": props, "url": "/", "version": version}


def test_url_for_drops_empty_params():
    client, _ = make_client()
    assert client.url_for("/guidance/x", {"a": 1, "b": "", "c": None}) == "http://portal.test/guidance/x?a=1"


def test_get_page_returns_props_and_tracks_version():
    client, session = make_client(make_response(body=page({"courses": []}, version="v2")))
    assert client.get_page("/guidance/course-management") == {"courses": []}
    assert client.version == "v2"
    kwargs = session.request.call_args.kwargs
    assert kwargs["headers"]["X-Inertia"] == "true"
    assert kwargs["timeout"] == 5


def test_xsrf_cookie_is_sent_decoded():
    client, session = make_client(make_response(body=page({})), xsrf="tok%3D%3D")
    client.submit("POST", "/guidance/courses", {"course_code": "BSIT"})
    assert session.request.call_args.kwargs["headers"]["X-XSRF-TOKEN"] == "tok=="


def test_version_mismatch_falls_back_to_html():
    html_page = json.dumps(page({"exams": [1]})).replace('"', "&quot;")
    conflict = make_response(status=409, headers={"X-Inertia-Location": "http://portal.test/guidance/exam-management"})
    full = make_response(headers={}, text=f'<html><body><div id="app" data-page="{html_page}"></div></body></html>')
    client, session = make_client(conflict, full)
    assert client.get_page("/guidance/exam-management") == {"exams": [1]}
    assert session.request.call_count == 2
    assert session.request.call_args.args == ("GET", "http://portal.test/guidance/exam-management")


def test_html_without_page_data_raises():
    client, _ = make_client(make_response(headers={}, text="<html></html>"))
    with pytest.raises(PortalError):
        client.get_page("/guidance/dashboard")


def test_submit_success_reads_flash():
    body = page({"flash": {"success": "Course created successfully"}, "errors": {}})
    client, session = make_client(make_response(body=body))
    result = client.submit("POST", "/guidance/courses", {"course_code": "BSIT"})
    assert result.success
    assert result.message == "Course created successfully"
    assert session.request.call_count == 1


def test_submit_errors_in_props_fail():
    body = page({"errors": {"course_code": "The course code has already been taken."}})
    client, _ = make_client(make_response(body=body))
    result = client.submit("POST", "/guidance/courses", {})
    assert not result.success
    assert result.first_error() == "The course code has already been taken."


def test_submit_422_returns_field_errors():
    client, _ = make_client(make_response(status=422, body={"errors": {"email": ["taken"]}}))
    result = client.submit("POST", "/guidance/evaluators", {})
    assert not result.success
    assert result.errors == {"email": "taken"}


def test_files_spoof_the_method():
    client, session = make_client(make_response(body=page({})))
    client.submit("PUT", "/guidance/questions/3", {"question": "Q"}, files={"image": ("a.png", b"x")})
    args, kwargs = session.request.call_args
    assert args[0] == "POST"
    assert kwargs["data"]["_method"] == "PUT"


def test_timeout_becomes_portal_error():
    client, _ = make_client(Timeout())
    with pytest.raises(PortalError) as excinfo:
        client.get_page("/guidance/dashboard")
    assert "did not respond" in str(excinfo.value)


def test_connection_error_becomes_portal_error():
    client, _ = make_client(ConnectionError("refused"))
    with pytest.raises(PortalError):
        client.fetch_json("GET", "/auth-check")


@pytest.mark.parametrize("status", [401, 419, 500])
def test_failure_statuses_raise(status):
    client, _ = make_client(make_response(status=status, body={}))
    with pytest.raises(PortalError) as excinfo:
        client.get_page("/guidance/dashboard")
    assert excinfo.value.status == status


def test_fetch_json_422_raises_validation_failed():
    client, _ = make_client(make_response(status=422, body={
        "message": "The given data was invalid.", "errors": {"course_name": ["required"]}}))
    with pytest.raises(ValidationFailed) as excinfo:
        client.fetch_json("POST", "/guidance/course-descriptions/generate", {})
    assert excinfo.value.first() == "required"


def test_normalize_errors_flattens_named_bags():
    assert normalize_errors({"default": {"name": ["Required"]}, "email": "Bad"}) == {
        "name": "Required", "email": "Bad"}
    assert normalize_errors(None) == {}


def _html(props):
    encoded = json.dumps(page(props)).replace('"', "&quot;")
    return make_response(headers={}, text=f'<div id="app" data-page="{encoded}"></div>')


def test_submit_409_reads_errors_from_reloaded_page():
    conflict = make_response(status=409, headers={"X-Inertia-Location": "http://portal.test/guidance/question-builder"})
    reloaded = _html({"errors": {"questions": "The questions field is invalid."}})
    client, session = make_client(conflict, reloaded)
    result = client.submit("POST", "/guidance/questions/bulk-create", {"questions": "[]"})
    assert not result.success
    assert result.errors == {"questions": "The questions field is invalid."}
    assert session.request.call_count == 2
    assert session.request.call_args.args == ("GET", "http://portal.test/guidance/question-builder")


def test_submit_409_success_uses_reloaded_flash():
    conflict = make_response(status=409, headers={"X-Inertia-Location": "http://portal.test/guidance/course-management"})
    reloaded = _html({"errors": {}, "flash": {"success": "Course created successfully"}})
    client, _ = make_client(conflict, reloaded)
    result = client.submit("POST", "/guidance/courses", {"course_code": "BSIT"})
    assert result.success
    assert result.message == "Course created successfully"


def test_submit_409_without_location_is_not_a_success():
    client, session = make_client(make_response(status=409, headers={}))
    result = client.submit("PUT", "/guidance/courses/3", {})
    assert not result.success
    assert session.request.call_count == 1
