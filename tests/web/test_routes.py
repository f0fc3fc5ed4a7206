from __future__ import annotations

from typing import Optional

from membership.common.security import md5_hex
from membership.web.extension import current_user, get_provider

SECRET_DIGEST = md5_hex("secret")


def _set_cookie_header(resp, key: str = "Admin") -> Optional[str]:
    for header in resp.headers.getlist("Set-Cookie"):
        if header.startswith(f"{key}="):
            return header
    return None


def test_register_endpoint(client, users_repo):
    resp = client.post("/register", data={"username": "alice", "password": "secret"})

    assert resp.status_code == 201
    assert resp.get_json()["user"]["name"] == "alice"
    assert users_repo.by_id[1].password == SECRET_DIGEST


def test_register_duplicate_is_bad_request(client, alice):
    resp = client.post("/register", json={"username": "alice", "password": "other"})

    assert resp.status_code == 400
    assert "already exists" in resp.get_json()["error"]


def test_login_with_remember_me_sets_cookie(client, alice):
    resp = client.post("/login", data={"username": "alice", "password": "secret", "remember_me": "on"})

    assert resp.status_code == 200
    header = _set_cookie_header(resp)
    assert header.startswith(f"Admin=u=alice&p={SECRET_DIGEST};")
    assert "Expires=" in header
    assert "HttpOnly" in header


def test_login_failure_is_unauthorized_and_clears_cookie(client, alice):
    resp = client.post("/login", json={"username": "alice", "password": "wrong", "remember_me": True})

    assert resp.status_code == 401
    assert _set_cookie_header(resp).startswith("Admin=;")
    assert client.get("/me").status_code == 401


def test_me_follows_login_and_logout(client, alice):
    assert client.get("/me").status_code == 401

    client.post("/login", data={"username": "alice", "password": "secret"})
    resp = client.get("/me")
    assert resp.status_code == 200
    assert resp.get_json()["user"]["name"] == "alice"

    resp = client.post("/logout")
    assert resp.status_code == 200
    assert _set_cookie_header(resp).startswith("Admin=;")
    assert client.get("/me").status_code == 401


def test_remember_me_cookie_logs_in_fresh_client(app, alice, logs_repo):
    client = app.test_client()
    client.set_cookie("Admin", f"u=alice&p={SECRET_DIGEST}")

    resp = client.get("/me")

    assert resp.status_code == 200
    assert resp.get_json()["user"]["name"] == "alice"
    assert "AutoLogin" in logs_repo.actions()
    # restored into the session, so the next request does not need the cookie
    client.delete_cookie("Admin")
    assert client.get("/me").status_code == 200


def test_stale_remember_me_cookie_is_ignored(app, alice):
    client = app.test_client()
    client.set_cookie("Admin", f"u=alice&p={md5_hex('old')}")

    assert client.get("/me").status_code == 401


def test_admin_route_requires_role(client, provider, alice):
    root = provider.register("root", "toor", 1, True)

    assert client.get(f"/admin/users/{alice.user_id}").status_code == 401

    client.post("/login", data={"username": "alice", "password": "secret"})
    assert client.get(f"/admin/users/{alice.user_id}").status_code == 403

    client.post("/login", data={"username": "root", "password": "toor"})
    resp = client.get(f"/admin/users/{alice.user_id}")
    assert resp.status_code == 200
    assert resp.get_json()["user"]["name"] == "alice"
    assert client.get("/admin/users/999").status_code == 404
    assert client.get("/me").get_json()["user"]["principal_roles"] == ["Administrator"]
    assert root.roles[0].name == "Administrator"


def test_current_user_proxy(app, provider, alice):
    with app.test_request_context("/"):
        assert get_provider() is provider
        assert not current_user
        provider.current = alice
        assert current_user.name == "alice"


def test_end_to_end_register_login_cookie(client):
    client.post("/register", data={"username": "alice", "password": "secret"})

    resp = client.post("/login", data={"username": "alice", "password": "secret", "remember_me": "1"})

    assert resp.get_json()["user"]["name"] == "alice"
    cookie = client.get_cookie("Admin")
    assert cookie is not None
    assert cookie.value == f"u=alice&p={SECRET_DIGEST}"


def test_login_as_other_user_replaces_remember_me_cookie(client, provider, alice):
    provider.register("bob", "hunter2", 0, True)
    client.post("/login", data={"username": "alice", "password": "secret", "remember_me": "on"})

    resp = client.post("/login", data={"username": "bob", "password": "hunter2"})

    header = _set_cookie_header(resp)
    assert header.startswith(f"Admin=u=bob&p={md5_hex('hunter2')};")
    assert "Expires=" not in header
    # browser session ends, only the identity cookie is left
    client.delete_cookie("session")
    resp = client.get("/me")
    assert resp.status_code == 200
    assert resp.get_json()["user"]["name"] == "bob"
