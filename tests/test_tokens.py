"""
Tests for signed bearer token issue / verify, including the 7 day
expiry boundary.
"""

import json
from base64 import urlsafe_b64decode, urlsafe_b64encode

import pytest

from auth.errors import ExpiredToken, InvalidToken, TokenError
from auth.tokens import TokenIssuer
from tests.conftest import TEST_SECRET, FakeClock

T0 = 1_700_000_000
DAY = 86400


def _segment(data: dict) -> str:
    return urlsafe_b64encode(json.dumps(data).encode()).rstrip(b"=").decode()


def _payload(token: str) -> dict:
    seg = token.split(".")[1]
    return json.loads(urlsafe_b64decode(seg + "=" * (-len(seg) % 4)))


@pytest.fixture
def clock():
    return FakeClock(T0)


@pytest.fixture
def issuer(clock):
    return TokenIssuer(TEST_SECRET, 7 * DAY, clock=clock)


class TestIssue:
    def test_claims_embedded(self, issuer):
        token = issuer.issue("user-1", "a@test.com")
        claims = issuer.verify(token)
        assert claims.sub == "user-1"
        assert claims.email == "a@test.com"
        assert claims.iat == T0
        assert claims.exp == T0 + 7 * DAY

    def test_compact_three_part_form(self, issuer):
        token = issuer.issue("user-1", "a@test.com")
        assert token.count(".") == 2
        assert "=" not in token


class TestExpiryWindow:
    def test_valid_at_issue_time(self, issuer):
        token = issuer.issue("user-1", "a@test.com")
        assert issuer.verify(token).sub == "user-1"

    def test_valid_just_before_seven_days(self, issuer, clock):
        token = issuer.issue("user-1", "a@test.com")
        clock.advance(6 * DAY + 23 * 3600)
        assert issuer.verify(token).sub == "user-1"

    def test_expired_after_seven_days(self, issuer, clock):
        token = issuer.issue("user-1", "a@test.com")
        clock.advance(7 * DAY + 1)
        with pytest.raises(ExpiredToken):
            issuer.verify(token)

    def test_expired_exactly_at_seven_days(self, issuer, clock):
        token = issuer.issue("user-1", "a@test.com")
        clock.advance(7 * DAY)
        with pytest.raises(ExpiredToken):
            issuer.verify(token)


class TestRejection:
    def test_tampered_payload(self, issuer):
        header, _, signature = issuer.issue("user-1", "a@test.com").split(".")
        forged = _segment({"sub": "admin", "email": "x@test.com", "iat": T0, "exp": T0 + DAY})
        with pytest.raises(InvalidToken):
            issuer.verify(f"{header}.{forged}.{signature}")

    def test_other_secret(self, clock):
        token = TokenIssuer("another-secret-0123456789", clock=clock).issue("u", "a@test.com")
        with pytest.raises(InvalidToken):
            TokenIssuer(TEST_SECRET, clock=clock).verify(token)

    @pytest.mark.parametrize("token", ["", "abc", "a.b", "a.b.c.d", "...", "not a token"])
    def test_malformed(self, issuer, token):
        with pytest.raises(InvalidToken):
            issuer.verify(token)

    def test_unsupported_algorithm(self, issuer):
        # Correctly signed, but the header names another algorithm.
        header = _segment({"alg": "none", "typ": "JWT"})
        payload = _segment({"sub": "u", "email": "a@test.com", "iat": T0, "exp": T0 + DAY})
        signature = issuer._sign(f"{header}.{payload}".encode())
        with pytest.raises(InvalidToken):
            issuer.verify(f"{header}.{payload}.{signature}")

    def test_missing_claims(self, issuer):
        header = _segment({"alg": "HS256", "typ": "JWT"})
        payload = _segment({"sub": "u", "iat": T0})
        signature = issuer._sign(f"{header}.{payload}".encode())
        with pytest.raises(InvalidToken):
            issuer.verify(f"{header}.{payload}.{signature}")

    def test_failures_share_base_class(self, issuer, clock):
        token = issuer.issue("user-1", "a@test.com")
        clock.advance(8 * DAY)
        for bad in (token, "garbage"):
            with pytest.raises(TokenError):
                issuer.verify(bad)

    def test_payload_is_readable_but_not_trusted(self, issuer):
        token = issuer.issue("user-1", "a@test.com")
        assert _payload(token)["sub"] == "user-1"


def test_empty_secret_rejected():
    with pytest.raises(ValueError):
        TokenIssuer("")
