from __future__ import annotations

from dataclasses import dataclass

from flask import g

from membership.common.datetime_utils import now_local
from membership.common.security import md5_hex
from membership.provider.helper import describe_user, get_cookie_key, load_cookie, save_cookie, set_principal
from membership.provider.principal import get_principal
from membership.web.cookies import parse_cookie_values, peek_response_cookie

SECRET_DIGEST = md5_hex("secret")


def _cookie_header(value: str, key: str = "Admin") -> dict:
    return {"Cookie": f"{key}={value}"}


@dataclass
class BareUser:
    """Has an identity but no credentials or roles."""

    user_id: int
    name: str
    enabled: bool = True
    is_authenticated: bool = True


def test_cookie_key_falls_back_when_unset(provider):
    assert get_cookie_key(provider) == "Admin"
    provider.cookie_key = ""
    assert get_cookie_key(provider) == "cube_user"


def test_parse_cookie_values_keeps_encoding():
    assert parse_cookie_values("u=bob%20smith&p=abc") == {"u": "bob%20smith", "p": "abc"}
    assert parse_cookie_values("") == {}


def test_save_cookie_encodes_name_and_digest(app, provider, alice):
    with app.test_request_context("/"):
        save_cookie(provider, alice)
        assert peek_response_cookie("Admin").values == {"u": "alice", "p": SECRET_DIGEST}


def test_save_cookie_url_encodes_name(app, provider):
    user = provider.register("bob smith", "pw", 0, True)

    with app.test_request_context("/"):
        save_cookie(provider, user)
        assert peek_response_cookie("Admin").values["u"] == "bob%20smith"


def test_save_cookie_skips_write_when_request_cookie_matches(app, provider, alice):
    with app.test_request_context("/", headers=_cookie_header(f"u=alice&p={SECRET_DIGEST}")):
        save_cookie(provider, alice)
        save_cookie(provider, alice)
        assert peek_response_cookie("Admin") is None


def test_save_cookie_rewrites_stale_request_cookie(app, provider, alice):
    with app.test_request_context("/", headers=_cookie_header("u=alice&p=olddigest")):
        save_cookie(provider, alice)
        assert peek_response_cookie("Admin").values["p"] == SECRET_DIGEST


def test_save_cookie_without_user_expires_it(app, provider):
    with app.test_request_context("/"):
        save_cookie(provider, None)
        cookie = peek_response_cookie("Admin")
        assert cookie.value == ""
        assert cookie.expires < now_local()


def test_save_cookie_for_user_without_credentials_expires_it(app, provider):
    with app.test_request_context("/"):
        save_cookie(provider, BareUser(user_id=1, name="ghost"))
        assert peek_response_cookie("Admin").expired


def test_save_cookie_outside_request_is_noop(provider, alice):
    save_cookie(provider, alice)


def test_load_cookie_restores_user_and_records_auto_login(app, provider, alice, users_repo, logs_repo):
    with app.test_request_context("/", headers=_cookie_header(f"u=alice&p={SECRET_DIGEST}")):
        user = load_cookie(provider)

    assert user is not None and user.name == "alice"
    assert users_repo.by_id[alice.user_id].logins == 1
    assert users_repo.by_id[alice.user_id].online is True
    assert logs_repo.entries[-1].action == "AutoLogin"
    assert logs_repo.entries[-1].subject == "alice"


def test_load_cookie_without_autologin_has_no_side_effects(app, provider, alice, users_repo, logs_repo):
    with app.test_request_context("/", headers=_cookie_header(f"u=alice&p={SECRET_DIGEST}")):
        assert load_cookie(provider, autologin=False).name == "alice"

    assert users_repo.by_id[alice.user_id].logins == 0
    assert logs_repo.actions() == ["Register"]


def test_load_cookie_compares_digest_case_insensitively(app, provider, alice):
    with app.test_request_context("/", headers=_cookie_header(f"u=alice&p={SECRET_DIGEST.upper()}")):
        assert load_cookie(provider, autologin=False) is not None


def test_load_cookie_decodes_user_name(app, provider):
    provider.register("bob smith", "pw", 0, True)

    with app.test_request_context("/", headers=_cookie_header(f"u=bob%20smith&p={md5_hex('pw')}")):
        assert load_cookie(provider, autologin=False).name == "bob smith"


def test_load_cookie_rejects_after_password_change(app, provider, alice, users_repo):
    users_repo.by_id[alice.user_id].password = md5_hex("changed")

    with app.test_request_context("/", headers=_cookie_header(f"u=alice&p={SECRET_DIGEST}")):
        assert load_cookie(provider) is None


def test_load_cookie_rejects_disabled_user(app, provider, alice, users_repo):
    users_repo.by_id[alice.user_id].enabled = False

    with app.test_request_context("/", headers=_cookie_header(f"u=alice&p={SECRET_DIGEST}")):
        assert load_cookie(provider) is None


def test_load_cookie_ignores_incomplete_or_unknown_cookies(app, provider, alice):
    for value in ("u=alice", f"p={SECRET_DIGEST}", "garbage", f"u=nobody&p={SECRET_DIGEST}"):
        with app.test_request_context("/", headers=_cookie_header(value)):
            assert load_cookie(provider) is None

    with app.test_request_context("/"):
        assert load_cookie(provider) is None


def test_load_cookie_uses_fallback_key(app, provider, alice):
    provider.cookie_key = None
    with app.test_request_context("/", headers=_cookie_header(f"u=alice&p={SECRET_DIGEST}", key="cube_user")):
        assert load_cookie(provider, autologin=False).name == "alice"


def test_set_principal_carries_role_names(app, provider):
    provider.register("boss", "pw", 1, True)

    with app.test_request_context("/"):
        provider.login("boss", "pw")
        principal = set_principal(provider)

        assert principal is get_principal()
        assert principal.name == "boss"
        assert principal.roles == ("Administrator",)
        assert principal.is_in_role("Administrator")
        assert not principal.is_in_role("Staff")


def test_set_principal_for_anonymous_is_noop(app, provider):
    with app.test_request_context("/"):
        assert set_principal(provider) is None
        assert "principal" not in g


def test_set_principal_without_roles(app, provider, alice):
    with app.test_request_context("/"):
        provider.current = alice
        assert set_principal(provider).roles == ()


def test_describe_user(app, provider, alice):
    provider.register("boss", "pw", 1, True)

    with app.test_request_context("/"):
        assert describe_user(provider) is None
        provider.login("alice", "secret")
        assert describe_user(provider) == "Login: alice"
        provider.login("boss", "pw")
        assert describe_user(provider) == "Login: boss(Administrator)"
