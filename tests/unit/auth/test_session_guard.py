from __future__ import annotations

from datetime import timedelta

import pytest

from app.auth.jwt import create_access_token, encode_jwt
from app.auth.session import extract_bearer_token, resolve
from app.auth.visibility import can_view_contract, contract_visibility_clause
from app.core.exceptions import InactiveOrUnknownUserError, InvalidTokenError, UnauthenticatedError


def test_extract_bearer_token_requires_scheme():
    assert extract_bearer_token("Bearer abc.def.ghi") == "abc.def.ghi"
    assert extract_bearer_token("bearer   abc") == "abc"
    for header in (None, "", "Token abc", "Bearer "):
        with pytest.raises(UnauthenticatedError):
            extract_bearer_token(header)


def test_resolve_returns_current_identity(session, seed, config):
    token = create_access_token(seed.manager.id, "manager", config.JWT_SECRET)
    identity = resolve(token, session, config.JWT_SECRET)
    assert identity.user_id == seed.manager.id
    assert identity.role == "manager"
    assert identity.username == "manager"
    assert not hasattr(identity, "password_hash")


def test_resolve_uses_stored_role_not_token_claim(session, seed, config):
    token = create_access_token(seed.announcer.id, "admin", config.JWT_SECRET)
    assert resolve(token, session, config.JWT_SECRET).role == "announcer"


def test_resolve_rejects_deactivated_user(session, seed, config):
    token = create_access_token(seed.manager.id, "manager", config.JWT_SECRET)
    seed.manager.is_active = False
    session.commit()
    with pytest.raises(InactiveOrUnknownUserError):
        resolve(token, session, config.JWT_SECRET)


def test_resolve_rejects_unknown_user_and_non_access_tokens(session, seed, config):
    with pytest.raises(InactiveOrUnknownUserError):
        resolve(create_access_token(9999, "admin", config.JWT_SECRET), session, config.JWT_SECRET)

    refresh_like = encode_jwt({"sub": str(seed.admin.id), "token_use": "refresh"}, config.JWT_SECRET, timedelta(minutes=5))
    with pytest.raises(InvalidTokenError):
        resolve(refresh_like, session, config.JWT_SECRET)

    with pytest.raises(UnauthenticatedError):
        resolve(None, session, config.JWT_SECRET)


def test_visibility_clause_only_for_announcers(seed):
    assert contract_visibility_clause(seed.as_admin) is None
    assert contract_visibility_clause(seed.as_manager) is None
    assert contract_visibility_clause(seed.as_announcer) is not None


def test_can_view_contract_checks_program_owner(seed, contracts, make_payload):
    own = contracts.create_contract(seed.as_manager, make_payload())
    foreign = contracts.create_contract(seed.as_manager, make_payload(program=seed.other_program))
    assert can_view_contract(seed.as_announcer, own) is True
    assert can_view_contract(seed.as_announcer, foreign) is False
    assert can_view_contract(seed.as_manager, foreign) is True
