"""Tests for action tokens, password policy and session cookies."""

from datetime import timedelta

import pytest

from app.errors import InvalidOrExpiredToken, ValidationError
from app.models import ActionToken, TokenKind
from app.services.auth import (
    create_session_cookie,
    decode_session_cookie,
    hash_token,
    validate_password_strength,
)
from app.services.tokens import delete_user_tokens, find_valid_token, issue_token, purge_expired_tokens


class TestActionTokens:
    """Tests for the token store."""

    def test_only_hash_is_stored(self, db, verified_user):
        token = issue_token(db, verified_user.id, TokenKind.VERIFY_EMAIL, timedelta(hours=1))
        db.commit()

        record = db.query(ActionToken).one()
        assert record.token_hash == hash_token(token)
        assert token not in record.token_hash

    def test_find_valid_token(self, db, verified_user):
        token = issue_token(db, verified_user.id, TokenKind.RESET_PASSWORD, timedelta(hours=1))
        db.commit()

        record = find_valid_token(db, token, TokenKind.RESET_PASSWORD)
        assert record.user_id == verified_user.id

    @pytest.mark.parametrize("token", [None, "", "unknown"])
    def test_find_missing_token(self, db, token):
        with pytest.raises(InvalidOrExpiredToken):
            find_valid_token(db, token, TokenKind.VERIFY_EMAIL)

    def test_find_wrong_kind(self, db, verified_user):
        token = issue_token(db, verified_user.id, TokenKind.DELETE_ACCOUNT, timedelta(hours=24))
        db.commit()

        with pytest.raises(InvalidOrExpiredToken):
            find_valid_token(db, token, TokenKind.RESET_PASSWORD)

    def test_find_expired(self, db, verified_user):
        token = issue_token(db, verified_user.id, TokenKind.VERIFY_EMAIL, timedelta(seconds=-1))
        db.commit()

        with pytest.raises(InvalidOrExpiredToken):
            find_valid_token(db, token, TokenKind.VERIFY_EMAIL)

    def test_delete_user_tokens_by_kind(self, db, verified_user, second_user):
        issue_token(db, verified_user.id, TokenKind.DELETE_ACCOUNT, timedelta(hours=24))
        issue_token(db, verified_user.id, TokenKind.RESET_PASSWORD, timedelta(hours=1))
        issue_token(db, second_user.id, TokenKind.DELETE_ACCOUNT, timedelta(hours=24))
        db.commit()

        assert delete_user_tokens(db, verified_user.id, TokenKind.DELETE_ACCOUNT) == 1
        db.commit()

        assert db.query(ActionToken).count() == 2

    def test_purge_expired_tokens(self, db, verified_user):
        issue_token(db, verified_user.id, TokenKind.VERIFY_EMAIL, timedelta(hours=-2))
        issue_token(db, verified_user.id, TokenKind.VERIFY_EMAIL, timedelta(hours=1))
        db.commit()

        assert purge_expired_tokens(db) == 1
        assert db.query(ActionToken).count() == 1


class TestPasswordStrength:
    """Tests for validate_password_strength."""

    @pytest.mark.parametrize("password", ["Abcdef1!", "Correct Horse-Battery", "Zürich-2026"])
    def test_strong_passwords(self, password):
        validate_password_strength(password)

    def test_no_upper_length_limit(self):
        """Long passphrases only need to meet the minimum rules."""
        validate_password_strength("A!" + "a" * 200)

    def test_surrounding_whitespace_only_checked_on_signup(self):
        validate_password_strength(" Abcdef1! ")
        with pytest.raises(ValidationError, match="whitespace"):
            validate_password_strength(" Abcdef1! ", signup=True)


class TestSessionCookie:
    """Tests for the signed session cookie."""

    def test_round_trip(self):
        cookie = create_session_cookie("abc123")
        assert decode_session_cookie(cookie) == "abc123"

    def test_expired_cookie(self):
        cookie = create_session_cookie("abc123", expires_delta=timedelta(seconds=-1))
        assert decode_session_cookie(cookie) is None

    def test_tampered_cookie(self):
        header, payload, signature = create_session_cookie("abc123").split(".")
        forged = ".".join([header, payload, "A" * len(signature)])
        assert decode_session_cookie(forged) is None

    def test_garbage_cookie(self):
        assert decode_session_cookie("not.a.jwt") is None
