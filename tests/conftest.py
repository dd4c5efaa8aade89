# tests/conftest.py
import base64
import json

import jwt
import pytest

NOW_MS = 1_700_000_000_000
NOW_S = NOW_MS // 1000

SIGNING_KEY = "throwaway-test-signing-key-0123456789"


def make_token(**claims) -> str:
    return jwt.encode(claims, SIGNING_KEY, algorithm="HS256")


def b64(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode()


def raw_token(payload: bytes, header: bytes = b'{"alg":"HS256","typ":"JWT"}') -> str:
    """Assemble a three-segment token around an arbitrary payload."""
    return f"{b64(header)}.{b64(payload)}.{b64(b'sig')}"


def json_token(payload) -> str:
    return raw_token(json.dumps(payload).encode())


@pytest.fixture
def clock():
    return lambda: NOW_MS
