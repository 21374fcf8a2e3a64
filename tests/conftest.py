"""
pytest configuration and fixtures.
"""

import io
import http.client
from typing import Callable
from email.message import Message

import pytest


@pytest.fixture
def http_headers() -> Callable[..., http.client.HTTPMessage]:
    """Build the header container a BaseHTTPRequestHandler would expose, from raw header lines."""

    def build(*lines: str) -> http.client.HTTPMessage:
        raw = "".join(f"{line}\r\n" for line in lines) + "\r\n"
        return http.client.parse_headers(io.BytesIO(raw.encode("latin-1")))

    return build


@pytest.fixture
def email_headers() -> Message:
    """email.message.Message with two Forwarded occurrences around an unrelated header."""
    message = Message()
    message["Forwarded"] = "for=192.0.2.43"
    message["Host"] = "example.com"
    message["forwarded"] = 'for="[2001:db8:cafe::17]:4711"'
    return message
