"""Shared test fixtures."""

from __future__ import annotations

import ssl
from collections.abc import Iterator

import pytest
import trustme
from pytest_httpserver import HTTPServer


@pytest.fixture(scope="session")
def untrusted_ca() -> trustme.CA:
    """Throwaway CA that no default trust store knows about."""
    return trustme.CA()


@pytest.fixture
def tls_httpserver(untrusted_ca: trustme.CA) -> Iterator[HTTPServer]:
    """HTTPS server presenting a certificate from the untrusted CA."""
    context = ssl.SSLContext(ssl.PROTOCOL_TLS_SERVER)
    untrusted_ca.issue_cert("localhost", "127.0.0.1").configure_cert(context)

    server = HTTPServer(host="localhost", port=0, ssl_context=context)
    server.start()
    yield server
    server.clear()
    if server.is_running():
        server.stop()


@pytest.fixture(scope="session")
def make_httpserver() -> Iterator[HTTPServer]:
    """Session server that serves requests concurrently.

    A slow handler left running by one test must not block the next test's
    request on the shared server.
    """
    server = HTTPServer(host="localhost", port=0, threaded=True)
    server.start()
    yield server
    server.clear()
    if server.is_running():
        server.stop()
