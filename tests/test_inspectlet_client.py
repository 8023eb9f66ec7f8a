"""Tests for the public Inspectlet client operations."""

import gc
import json
import logging

import pytest

from conftest import FakeSessionFactory, load_snapshot, make_response, session_cookie

from inspectlet import ClientSettings, Inspectlet, MissingCredentialsError, SiteRecord
from inspectlet.infrastructure.http import CookieJarFile, SessionTransport


def login_ok():
    return make_response("", status=302)


def logout_ok():
    return make_response("", status=200)


@pytest.fixture
def factory() -> FakeSessionFactory:
    return FakeSessionFactory()


@pytest.fixture
def inspectlet(tmp_path, factory) -> Inspectlet:
    settings = ClientSettings()
    transport = SessionTransport(
        settings, CookieJarFile(tmp_path / "cookies.txt"), session_factory=factory
    )
    return Inspectlet("me@example.com", "secret", settings=settings, transport=transport)


@pytest.mark.parametrize(
    "username,password,message",
    [
        ("", "secret", "Missing username."),
        (None, "secret", "Missing username."),
        ("me@example.com", "", "Missing password."),
        ("", "", "Missing username."),
    ],
)
def test_construction_requires_credentials(username, password, message):
    with pytest.raises(MissingCredentialsError, match=message):
        Inspectlet(username, password)


def test_construction_creates_cookie_jar_and_close_removes_it():
    with Inspectlet("me@example.com", "secret") as client:
        jar_path = client.transport.jar_file.path
        assert jar_path.exists()
    assert not jar_path.exists()


def test_cookie_jar_is_removed_when_client_is_garbage_collected():
    client = Inspectlet("me@example.com", "secret")
    jar_path = client.transport.jar_file.path
    assert jar_path.exists()

    del client
    gc.collect()

    assert not jar_path.exists()


def test_injected_transport_keeps_its_jar_until_close(tmp_path):
    jar_file = CookieJarFile(tmp_path / "jar.txt")
    client = Inspectlet("u", "p", transport=SessionTransport(ClientSettings(), jar_file))

    del client
    gc.collect()
    assert jar_file.path.exists()


def test_disabled_tls_verification_is_logged(caplog):
    with caplog.at_level(logging.WARNING, logger="inspectlet"):
        client = Inspectlet("u", "p")
    client.close()
    assert any("TLS certificate verification is disabled" in r.getMessage() for r in caplog.records)

    caplog.clear()
    with caplog.at_level(logging.WARNING, logger="inspectlet"):
        client = Inspectlet("u", "p", settings=ClientSettings(verify_tls=True))
    client.close()
    assert not caplog.records


def test_session_token_argument_overrides_settings():
    with Inspectlet("u", "p", session_token="abc") as client:
        assert client.settings.session_cookies() == {"PHPSESSID": "abc"}


def test_list_sites_returns_records_and_keeps_html(inspectlet, factory):
    html = load_snapshot("dashboard", "sitelist")
    factory.script = [login_ok(), make_response(html), logout_ok()]

    result = inspectlet.list_sites()

    assert result.success
    assert result.html == html
    assert [site.id for site in result.data] == ["123456", "789012"]
    assert all(isinstance(site, SiteRecord) for site in result.data)
    request = factory.calls[1]
    assert request.method == "GET"
    assert request.url == "https://www.inspectlet.com/dashboard"
    assert request.headers == {"Content-type": "text/html"}

    payload = result.to_dict()
    assert payload["html"] == html
    assert payload["data"][0] == {
        "id": "123456",
        "name": "Example Shop",
        "captures": "/dashboard/captures/123456",
        "heatmaps": "/dashboard/heatmaps/123456",
        "forms": "/dashboard/formanalytics/123456",
        "status": "/static/images/status-green.png",
    }


def test_list_sites_with_unexpected_markup_returns_partial_list(inspectlet, factory):
    factory.script = [
        login_ok(),
        make_response(load_snapshot("dashboard", "sitelist_drift")),
        logout_ok(),
    ]

    result = inspectlet.list_sites()

    assert result.success
    assert [site.name for site in result.data] == ["First Site"]


def test_list_sites_passes_failures_through(inspectlet, factory):
    factory.script = [make_response("", status=500)]

    result = inspectlet.list_sites()

    assert result.to_dict() == {"success": False, "message": "Failed to log in."}
    assert result.html is None


def test_get_captures_posts_json_to_site_path(inspectlet, factory):
    captures = {"captures": [{"id": 1, "duration": 30}], "total": 1}
    factory.script = [login_ok(), make_response(json.dumps(captures)), logout_ok()]

    result = inspectlet.get_captures("42", {"foo": "bar"})

    assert result.success
    assert result.data == captures
    request = factory.calls[1]
    assert request.method == "POST"
    assert "42" in request.url
    assert request.url == "https://www.inspectlet.com/dashboard/captureapi/42"
    assert request.data == '{"foo":"bar"}'


def test_get_captures_reports_json_errors(inspectlet, factory):
    factory.script = [login_ok(), make_response("<html>login again</html>"), logout_ok()]

    result = inspectlet.get_captures(7)

    assert not result.success
    assert result.message == "JSON Error [4]"
    assert factory.calls[1].data == "{}"


def test_cookie_jar_is_shared_between_calls(inspectlet, factory):
    factory.set_cookies = [session_cookie("PHPSESSID", "first-login")]
    factory.script = [login_ok(), make_response("null"), logout_ok()]
    inspectlet.get_captures(1)

    jar_path = inspectlet.transport.jar_file.path
    assert "first-login" in jar_path.read_text()

    factory.script = [login_ok(), make_response("null"), logout_ok()]
    inspectlet.get_captures(2)
    # session cookies from the previous call are not replayed
    assert len(factory.sessions[1].cookies) == 0
