import pytest

from formbuilder.csrf import CsrfGuard, MappingSessionStore
from formbuilder.exceptions import CsrfValidationFailed


def test_token_is_stable_per_session():
    session = {}
    guard = CsrfGuard(MappingSessionStore(session))
    token = guard.token()
    assert token
    assert guard.token() == token
    assert session["csrf_token"] == token


def test_sessions_get_different_tokens():
    assert CsrfGuard(MappingSessionStore({})).token() != CsrfGuard(MappingSessionStore({})).token()


def test_validate():
    guard = CsrfGuard(MappingSessionStore({}))
    token = guard.token()
    guard.validate(token)
    with pytest.raises(CsrfValidationFailed):
        guard.validate("other")
    with pytest.raises(CsrfValidationFailed):
        guard.validate(None)


def test_validate_without_issued_token():
    with pytest.raises(CsrfValidationFailed):
        CsrfGuard(MappingSessionStore({})).validate("anything")
