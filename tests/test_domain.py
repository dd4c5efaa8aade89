# tests/test_domain.py
from datetime import datetime, timezone

from session_cache.domain.constants import ACCOUNT_FIELD, TOKEN_FIELD
from session_cache.domain.entities import DecodedClaims, TokenRecord
from session_cache.domain.validity import format_valid_until, is_still_valid

from conftest import NOW_MS, NOW_S


def test_token_record_document_round_trip():
    record = TokenRecord(account_name="alice", token="a.b.c")
    doc = record.to_document()

    assert doc == {ACCOUNT_FIELD: "alice", TOKEN_FIELD: "a.b.c"}
    assert TokenRecord.from_document({**doc, "_id": 1}) == record


def test_decoded_claims_expires_at():
    claims = DecodedClaims(expires_at_unix_seconds=0)
    assert claims.expires_at == datetime(1970, 1, 1, tzinfo=timezone.utc)


def test_decoded_claims_equality_ignores_raw():
    assert DecodedClaims(10, raw={"exp": 10}) == DecodedClaims(10, raw={"exp": 10, "sub": "x"})


def test_is_still_valid():
    # --- future ---
    assert is_still_valid(DecodedClaims(NOW_S + 3600), NOW_MS)
    assert is_still_valid(DecodedClaims(NOW_S + 1), NOW_MS)

    # --- past ---
    assert not is_still_valid(DecodedClaims(NOW_S - 10), NOW_MS)


def test_expiry_equal_to_now_is_expired():
    claims = DecodedClaims(NOW_S)
    assert claims.expires_at_unix_seconds * 1000 == NOW_MS
    assert not is_still_valid(claims, NOW_MS)

    # one millisecond earlier it is still valid
    assert is_still_valid(claims, NOW_MS - 1)


def test_format_valid_until():
    claims = DecodedClaims(expires_at_unix_seconds=1729347903)
    assert format_valid_until(claims) == "2024-10-19 14:25:03 (GMT time)"


def test_format_valid_until_out_of_range():
    claims = DecodedClaims(expires_at_unix_seconds=10**20)
    assert format_valid_until(claims) == f"{10**20} (unix time)"


def test_float_expiry_compared_in_milliseconds():
    claims = DecodedClaims(expires_at_unix_seconds=NOW_S + 0.5)

    assert is_still_valid(claims, NOW_MS + 499)
    assert not is_still_valid(claims, NOW_MS + 500)
