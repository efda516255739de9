from __future__ import annotations

import json
from pathlib import Path

from conftest import ADMIN_PASSWORD, FakeClock
from flask.testing import FlaskClient

from portfolio_admin.container import Container
from portfolio_admin.shared.config import AppConfig

BLOCKED_ADDRESS = "10.0.0.5"


def _login(
    client: FlaskClient,
    username: str = "admin",
    password: str = ADMIN_PASSWORD,
    address: str = "127.0.0.1",
    **extra: object,
):
    return client.post(
        "/api/auth/login",
        json={"username": username, "password": password, **extra},
        environ_base={"REMOTE_ADDR": address},
    )


def test_health_carries_security_headers(client: FlaskClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.get_json() == {"status": "ok"}
    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["X-Content-Type-Options"] == "nosniff"


def test_login_sets_cookies_and_me_returns_user(client: FlaskClient) -> None:
    response = _login(client)

    assert response.status_code == 200
    body = response.get_json()
    assert body["ok"] is True
    assert body["user"]["username"] == "admin"
    assert body["user"]["role"] == "admin"

    cookies = response.headers.getlist("Set-Cookie")
    auth_cookie = next(c for c in cookies if c.startswith("auth_token="))
    assert "HttpOnly" in auth_cookie
    assert "SameSite=Strict" in auth_cookie
    assert "Max-Age" not in auth_cookie
    assert client.get_cookie("user_info") is not None

    me = client.get("/api/auth/me")
    assert me.status_code == 200
    assert me.get_json()["username"] == "admin"


def test_remember_me_makes_cookie_persistent(client: FlaskClient) -> None:
    response = _login(client, remember_me=True)

    auth_cookie = next(
        c for c in response.headers.getlist("Set-Cookie") if c.startswith("auth_token=")
    )
    assert "Max-Age=86400" in auth_cookie


def test_bearer_header_is_accepted(client: FlaskClient) -> None:
    _login(client)
    token = client.get_cookie("auth_token").value
    client.delete_cookie("auth_token")

    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200


def test_wrong_password_reports_attempts_left(client: FlaskClient) -> None:
    response = _login(client, password="wrong-password")

    assert response.status_code == 401
    assert response.get_json() == {
        "error": "invalid_credentials",
        "context": {"attempts_left": 4},
    }


def test_unknown_user_looks_like_wrong_password(client: FlaskClient) -> None:
    response = _login(client, username="nobody")

    assert response.status_code == 401
    assert response.get_json()["error"] == "invalid_credentials"


def test_invalid_payload_is_a_validation_error(client: FlaskClient) -> None:
    response = _login(client, username="ab")

    assert response.status_code == 422
    body = response.get_json()
    assert body["error"] == "validation_error"
    assert body["context"]["fields"] == ["username"]


def test_five_failures_block_the_address(client: FlaskClient, clock: FakeClock) -> None:
    statuses = [
        _login(client, password="wrong-password", address=BLOCKED_ADDRESS).status_code
        for _ in range(4)
    ]
    fifth = _login(client, password="wrong-password", address=BLOCKED_ADDRESS)

    assert statuses == [401, 401, 401, 401]
    assert fifth.status_code == 429
    assert fifth.get_json()["error"] == "login_blocked"
    assert fifth.get_json()["context"]["remaining_minutes"] == 30

    correct = _login(client, address=BLOCKED_ADDRESS)
    assert correct.status_code == 429

    assert _login(client, address="10.0.0.6").status_code == 200

    clock.advance(minutes=30)
    assert _login(client, address=BLOCKED_ADDRESS).status_code == 200


def test_forwarded_headers_from_untrusted_peer_are_ignored(client: FlaskClient) -> None:
    for idx in range(5):
        client.post(
            "/api/auth/login",
            json={"username": "admin", "password": "wrong-password"},
            headers={"X-Forwarded-For": f"198.51.100.{idx}"},
            environ_base={"REMOTE_ADDR": BLOCKED_ADDRESS},
        )

    assert _login(client, address=BLOCKED_ADDRESS).status_code == 429


def test_protected_endpoint_without_token(client: FlaskClient) -> None:
    response = client.get("/api/auth/me")

    assert response.status_code == 401
    assert response.get_json() == {"error": "unauthorized", "context": {"reason": "missing_token"}}


def test_token_expires_after_session_ttl(client: FlaskClient, clock: FakeClock) -> None:
    _login(client)

    clock.advance(hours=24)
    response = client.get("/api/auth/me")

    assert response.status_code == 401
    assert response.get_json()["context"]["reason"] == "token_expired"


def test_logout_revokes_session(client: FlaskClient) -> None:
    _login(client)
    token = client.get_cookie("auth_token").value

    response = client.post("/api/auth/logout")

    assert response.status_code == 200
    assert client.get_cookie("auth_token") is None
    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 401
    assert me.get_json()["context"]["reason"] == "session_not_found"


def test_logout_without_session_is_ok(client: FlaskClient) -> None:
    assert client.post("/api/auth/logout").status_code == 200


def test_change_password(client: FlaskClient) -> None:
    _login(client)

    rejected = client.post(
        "/api/auth/password", json={"current_password": "nope", "new_password": "brand-new-1"}
    )
    assert rejected.status_code == 401

    accepted = client.post(
        "/api/auth/password",
        json={"current_password": ADMIN_PASSWORD, "new_password": "brand-new-1"},
    )
    assert accepted.status_code == 200

    assert _login(client, password=ADMIN_PASSWORD).status_code == 401
    assert _login(client, password="brand-new-1").status_code == 200


def test_dashboard_redirects_anonymous_browser(client: FlaskClient) -> None:
    response = client.get("/admin/dashboard")

    assert response.status_code == 302
    assert response.headers["Location"].endswith("/admin/login?return=%2Fadmin%2Fdashboard")


def test_dashboard_for_admin(client: FlaskClient) -> None:
    _login(client)

    response = client.get("/admin/dashboard")

    assert response.status_code == 200
    assert response.get_json()["user"]["username"] == "admin"


def test_delete_content_file(client: FlaskClient, content_dir: Path) -> None:
    (content_dir / "post-1.mdx").write_text("# hi", encoding="utf-8")
    (content_dir / "post-2.mdx").write_text("# there", encoding="utf-8")
    _login(client)

    listing = client.get("/api/content")
    assert listing.get_json() == {"files": ["post-1.mdx", "post-2.mdx"]}

    response = client.post("/api/content/delete", data={"filename": "post-1.mdx"})

    assert response.status_code == 200
    assert response.get_json() == {
        "success": True,
        "message": "File post-1.mdx deleted successfully",
    }
    assert not (content_dir / "post-1.mdx").exists()
    assert (content_dir / "post-2.mdx").exists()


def test_delete_content_rejects_bad_names(client: FlaskClient, content_dir: Path) -> None:
    _login(client)

    def delete(payload: dict) -> tuple[int, str]:
        response = client.post("/api/content/delete", json=payload)
        return response.status_code, response.get_json()["error"]

    assert delete({}) == (400, "filename_required")
    assert delete({"filename": "post-1"}) == (400, "invalid_file_type")
    assert delete({"filename": "../../etc/passwd.mdx"}) == (400, "invalid_filename")
    assert delete({"filename": "missing.mdx"}) == (404, "file_not_found")


def test_content_requires_admin_role(
    client: FlaskClient, container: Container, content_dir: Path
) -> None:
    (content_dir / "post-1.mdx").write_text("# hi", encoding="utf-8")
    container.credential_store.create_user("editor1", "hashed:editor-pass", "editor")
    _login(client, username="editor1", password="editor-pass")

    response = client.post("/api/content/delete", data={"filename": "post-1.mdx"})

    assert response.status_code == 403
    assert response.get_json() == {"error": "forbidden", "context": {"required_role": "admin"}}
    assert (content_dir / "post-1.mdx").exists()


def test_content_requires_authentication(client: FlaskClient) -> None:
    response = client.post("/api/content/delete", data={"filename": "post-1.mdx"})

    assert response.status_code == 401


def test_admin_can_inspect_and_clear_rate_limits(client: FlaskClient) -> None:
    for _ in range(2):
        _login(client, password="wrong-password", address="10.0.0.9")
    _login(client)

    stats = client.get("/api/admin/rate-limits")
    assert stats.status_code == 200
    body = stats.get_json()
    assert body["max_attempts"] == 5
    assert body["block_seconds"] == 1800
    assert [(e["ip"], e["attempts"]) for e in body["entries"]] == [("10.0.0.9", 2)]

    cleared = client.delete("/api/admin/rate-limits/10.0.0.9")
    assert cleared.get_json() == {"ok": True, "cleared": True}
    assert client.get("/api/admin/rate-limits").get_json()["entries"] == []


def test_maintenance_sweeps_expired_sessions(
    client: FlaskClient, container: Container, clock: FakeClock
) -> None:
    container.credential_store.create_user("editor1", "hashed:editor-pass", "editor")
    _login(client, username="editor1", password="editor-pass")
    clock.advance(hours=13)
    _login(client)
    clock.advance(hours=12)

    response = client.post("/api/admin/maintenance/cleanup")

    assert response.status_code == 200
    body = response.get_json()
    assert body["expired_sessions"] == 1
    assert "stale_rate_limits" in body
    assert len(container.credential_store.list_sessions()) == 1


def test_admin_endpoints_are_admin_only(client: FlaskClient, container: Container) -> None:
    container.credential_store.create_user("viewer1", "hashed:viewer-pass", "viewer")
    _login(client, username="viewer1", password="viewer-pass")

    assert client.get("/api/admin/rate-limits").status_code == 403
    assert client.post("/api/admin/maintenance/cleanup").status_code == 403


def test_me_lists_role_permissions(client: FlaskClient, container: Container) -> None:
    container.credential_store.create_user("editor1", "hashed:editor-pass", "editor")
    _login(client, username="editor1", password="editor-pass")

    response = client.get("/api/auth/me")

    assert response.status_code == 200
    assert response.get_json()["permissions"] == ["read", "write"]


def test_username_is_trimmed_before_length_check(client: FlaskClient) -> None:
    too_short = _login(client, username="  ab")
    assert too_short.status_code == 422

    padded = _login(client, username=" admin ")
    assert padded.status_code == 200
    assert padded.get_json()["user"]["username"] == "admin"


def test_user_record_with_bad_timestamp_fails_login_cleanly(
    client: FlaskClient, config: AppConfig
) -> None:
    users_file = config.storage.users_file
    records = json.loads(users_file.read_text(encoding="utf-8"))
    records[0]["createdAt"] = 0
    users_file.write_text(json.dumps(records), encoding="utf-8")

    response = _login(client)

    assert response.status_code == 401
    assert response.get_json()["error"] == "invalid_credentials"
