# tests/test_jwt_decoder.py
import pytest

from session_cache.adapters.jwt.decoder import UnverifiedJWTDecoder
from session_cache.domain.entities import DecodedClaims
from session_cache.domain.exceptions import MalformedTokenError

from conftest import NOW_S, b64, json_token, make_token, raw_token


@pytest.fixture
def decoder():
    return UnverifiedJWTDecoder()


def test_decode_reads_exp(decoder):
    token = make_token(sub="alice", exp=NOW_S + 3600)

    claims = decoder.decode(token)

    assert claims == DecodedClaims(expires_at_unix_seconds=NOW_S + 3600)
    assert claims.raw["sub"] == "alice"


def test_decode_ignores_signature(decoder):
    token = make_token(exp=NOW_S)
    header, payload, _ = token.split(".")
    tampered = f"{header}.{payload}.{b64(b'not-the-signature')}"

    assert decoder.decode(tampered).expires_at_unix_seconds == NOW_S


def test_decode_does_not_reject_expired_tokens(decoder):
    # judging expiry is the caller's job
    assert decoder.decode(make_token(exp=1)).expires_at_unix_seconds == 1


def test_decode_keeps_float_exp(decoder):
    assert decoder.decode(json_token({"exp": 1700000000.9})).expires_at_unix_seconds == 1700000000.9


def test_decode_unpadded_payload(decoder):
    # base64url segments come without "=" padding
    token = json_token({"exp": 12345, "x": "y"})
    assert "=" not in token
    assert decoder.decode(token).expires_at_unix_seconds == 12345


@pytest.mark.parametrize(
    "token",
    [
        "",
        "abc",
        "a.b",
        "a.b.c.d",
        make_token(exp=NOW_S) + ".extra",
    ],
)
def test_decode_wrong_segment_count(decoder, token):
    with pytest.raises(MalformedTokenError):
        decoder.decode(token)


@pytest.mark.parametrize(
    "token",
    [
        raw_token(b"this is not json"),
        raw_token(b"[1, 2, 3]"),
        raw_token(b'"just a string"'),
        raw_token(b"\xff\xfe\x00garbage"),
        "eyJhbGciOiJIUzI1NiJ9.!!!not-base64!!!.c2ln",
        "eyJhbGciOiJIUzI1NiJ9..c2ln",
    ],
)
def test_decode_bad_payload(decoder, token):
    with pytest.raises(MalformedTokenError):
        decoder.decode(token)


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"sub": "alice"},
        {"exp": None},
        {"exp": "1700000000"},
        {"exp": True},
        {"exp": [1700000000]},
    ],
)
def test_decode_missing_or_bad_exp(decoder, payload):
    with pytest.raises(MalformedTokenError):
        decoder.decode(json_token(payload))


def test_decode_non_string_input(decoder):
    with pytest.raises(MalformedTokenError):
        decoder.decode(None)
    with pytest.raises(MalformedTokenError):
        decoder.decode(12345)


def test_try_decode(decoder):
    assert decoder.try_decode("garbage") is None
    assert decoder.try_decode(make_token(exp=42)).expires_at_unix_seconds == 42


@pytest.mark.parametrize(
    "header, signature",
    [
        ("garbage", "sig"),
        (b64(b"not json"), "sig"),
        (b64(b'{"alg":"HS256"}'), "!!!"),
        ("", ""),
        ("%%%", "not-base64-at-all!!"),
    ],
)
def test_decode_reads_only_payload_segment(decoder, header, signature):
    payload = b64(f'{{"exp": {NOW_S + 3600}}}'.encode())

    claims = decoder.decode(f"{header}.{payload}.{signature}")

    assert claims.expires_at_unix_seconds == NOW_S + 3600


def test_decode_non_utf8_payload(decoder):
    with pytest.raises(MalformedTokenError):
        decoder.decode(raw_token(b"\xff\xfe\xfd"))


def test_decode_non_ascii_payload_segment(decoder):
    with pytest.raises(MalformedTokenError):
        decoder.decode("a.ééé.c")
