"""
Tests for CsrfGuard - CSRF token issuance and validation.
"""

import re
from unittest.mock import patch

import pytest

from src.core.exceptions import SessionValidationError
from src.sessions.accessor import LazySession
from src.sessions.csrf import CSRF_TOKEN_KEY

HEX_40 = re.compile(r"^[0-9a-f]{40}$")


class TestCsrfIssuance:
    """Tests for get_token()/has_token()/regenerate_token()."""

    def test_no_token_initially(self, session) -> None:
        assert session.csrf.has_token() is False

    def test_get_token_issues_lazily(self, session) -> None:
        token = session.csrf.get_token()

        assert session.csrf.has_token() is True
        assert session.get(CSRF_TOKEN_KEY) == token

    def test_get_token_is_stable(self, session) -> None:
        assert session.csrf.get_token() == session.csrf.get_token()

    def test_get_token_is_stable_across_requests(self, session, next_request) -> None:
        token = session.csrf.get_token()
        second = next_request(session)

        assert second.csrf.get_token() == token

    def test_regenerate_default_length_is_40_hex(self, session) -> None:
        token = session.csrf.regenerate_token()

        assert HEX_40.match(token)

    def test_regenerate_20_bytes_is_40_hex(self, session) -> None:
        assert HEX_40.match(session.csrf.regenerate_token(20))

    @pytest.mark.parametrize("byte_length", [1, 16, 32, 64])
    def test_regenerate_length_is_twice_bytes(self, session, byte_length) -> None:
        assert len(session.csrf.regenerate_token(byte_length)) == 2 * byte_length

    def test_regenerate_overwrites(self, session) -> None:
        first = session.csrf.get_token()
        second = session.csrf.regenerate_token()

        assert first != second
        assert session.csrf.get_token() == second

    def test_token_length_from_constructor(self, engine) -> None:
        session = LazySession(engine, csrf_token_bytes=8)

        assert len(session.csrf.get_token()) == 16

    def test_token_length_from_settings(self, engine, test_settings) -> None:
        settings = test_settings.model_copy(update={"csrf_token_bytes": 12})
        with patch("src.sessions.csrf.get_settings", return_value=settings):
            session = LazySession(engine)

        assert len(session.csrf.get_token()) == 24

    @pytest.mark.parametrize("bad_length", [0, -1, 2.5, "20", True])
    def test_invalid_length_raises(self, session, bad_length) -> None:
        with pytest.raises(SessionValidationError) as exc_info:
            session.csrf.regenerate_token(bad_length)

        assert exc_info.value.field == "byte_length"

    def test_uses_secrets_module(self, session) -> None:
        with patch("src.sessions.csrf.secrets.token_hex", return_value="ab" * 20) as mock_hex:
            token = session.csrf.regenerate_token(20)

        mock_hex.assert_called_once_with(20)
        assert token == "ab" * 20


class TestCsrfValidation:
    """Tests for validate_token()."""

    def test_current_token_validates(self, session) -> None:
        token = session.csrf.get_token()

        assert session.csrf.validate_token(token) is True

    def test_other_string_fails(self, session) -> None:
        token = session.csrf.get_token()

        assert session.csrf.validate_token(token[:-1] + ("0" if token[-1] != "0" else "1")) is False
        assert session.csrf.validate_token(token + "0") is False
        assert session.csrf.validate_token(token.upper() + "X") is False

    def test_no_token_issued_fails_without_error(self, session) -> None:
        assert session.csrf.validate_token("anything") is False
        assert session.csrf.has_token() is False

    @pytest.mark.parametrize("candidate", [None, "", 123, b"bytes", ["list"]])
    def test_invalid_candidates_fail(self, session, candidate) -> None:
        session.csrf.get_token()

        assert session.csrf.validate_token(candidate) is False

    def test_non_ascii_candidate_fails(self, session) -> None:
        session.csrf.get_token()

        assert session.csrf.validate_token("tökén") is False

    def test_previous_token_fails_after_regeneration(self, session) -> None:
        old = session.csrf.get_token()
        session.csrf.regenerate_token()

        assert session.csrf.validate_token(old) is False

    def test_uses_constant_time_comparison(self, session) -> None:
        token = session.csrf.get_token()

        with patch("src.sessions.csrf.hmac.compare_digest", return_value=True) as mock_compare:
            assert session.csrf.validate_token(token) is True

        mock_compare.assert_called_once_with(token.encode("utf-8"), token.encode("utf-8"))

    def test_token_cleared_with_session(self, session) -> None:
        token = session.csrf.get_token()
        session.clear()

        assert session.csrf.validate_token(token) is False
