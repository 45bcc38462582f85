from __future__ import annotations

import pytest
from flask import Flask

from marketplace.shared.middleware.csrf import (
    CSRF_COOKIE,
    CSRF_HEADER,
    SESSION_COOKIE,
    CSRFError,
    CSRFGuard,
    configure_csrf,
    csrf_protect,
)
from marketplace.shared.middleware.error_handler import configure_error_handling


@pytest.fixture()
def guard() -> CSRFGuard:
    return CSRFGuard("unit-test-secret")


def test_issued_token_validates_for_its_session(guard: CSRFGuard) -> None:
    token = guard.issue("session-a")

    guard.validate(header=token, cookie=token, session_id="session-a")


def test_tokens_are_fresh_per_issue(guard: CSRFGuard) -> None:
    assert guard.issue("session-a") != guard.issue("session-a")


@pytest.mark.parametrize(
    ("header", "cookie", "reason"),
    [
        (None, "x.y", "missing"),
        ("x.y", None, "missing"),
        ("", "", "missing"),
        ("a.b", "a.c", "mismatch"),
        ("nodot", "nodot", "malformed"),
    ],
)
def test_invalid_pairs_are_rejected(
    guard: CSRFGuard, header: str | None, cookie: str | None, reason: str
) -> None:
    with pytest.raises(CSRFError) as exc_info:
        guard.validate(header=header, cookie=cookie, session_id="session-a")

    assert exc_info.value.code == "csrf_invalid"
    assert exc_info.value.status == 403
    assert exc_info.value.context == {"reason": reason}


def test_token_is_bound_to_session(guard: CSRFGuard) -> None:
    token = guard.issue("session-a")

    with pytest.raises(CSRFError) as exc_info:
        guard.validate(header=token, cookie=token, session_id="session-b")

    assert exc_info.value.context == {"reason": "signature"}


def test_token_from_other_secret_is_rejected(guard: CSRFGuard) -> None:
    forged = CSRFGuard("another-secret").issue("session-a")

    with pytest.raises(CSRFError):
        guard.validate(header=forged, cookie=forged, session_id="session-a")


def _protected_app(guard: CSRFGuard) -> Flask:
    app = Flask(__name__)
    configure_error_handling(app)
    configure_csrf(app, guard)

    @csrf_protect
    def mutate():
        return {"ok": True}

    app.add_url_rule("/mutate", view_func=mutate, methods=["GET", "POST"])
    return app


def test_protect_enforces_on_post_only(guard: CSRFGuard) -> None:
    app = _protected_app(guard)

    with app.test_client() as client:
        assert client.get("/mutate").status_code == 200
        denied = client.post("/mutate")
        assert denied.status_code == 403
        assert denied.get_json()["error"] == "csrf_invalid"

        token = guard.issue("sess")
        client.set_cookie(SESSION_COOKIE, "sess")
        client.set_cookie(CSRF_COOKIE, token)
        allowed = client.post("/mutate", headers={CSRF_HEADER: token})

    assert allowed.status_code == 200


def test_disabled_guard_lets_everything_through() -> None:
    app = _protected_app(CSRFGuard("unit-test-secret", enabled=False))

    with app.test_client() as client:
        assert client.post("/mutate").status_code == 200


def test_attach_sets_cookie_and_header(guard: CSRFGuard) -> None:
    app = Flask(__name__)
    with app.test_request_context():
        response = app.make_response({"ok": True})
        guard.attach(response, "n.s")

    assert response.headers[CSRF_HEADER] == "n.s"
    cookie = response.headers["Set-Cookie"]
    assert cookie.startswith(f"{CSRF_COOKIE}=n.s")
    assert "HttpOnly" not in cookie
