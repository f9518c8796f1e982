"""Tests for client key derivation."""

from starlette.requests import Request

from folio.api.dependencies import client_ip, client_key
from folio.core.services import hash_client_ip


def _request(headers: dict[str, str] | None = None, peer: tuple[str, int] | None = None) -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/api/search",
        "headers": [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()],
        "client": peer,
    }
    return Request(scope)


class TestClientIp:
    """Tests for client_ip() fallbacks."""

    def test_first_forwarded_hop(self):
        request = _request({"X-Forwarded-For": " 198.51.100.1 , 10.0.0.1"}, ("10.0.0.2", 5000))
        assert client_ip(request) == "198.51.100.1"

    def test_real_ip_when_no_forwarded(self):
        request = _request({"X-Real-IP": " 203.0.113.5 "}, ("10.0.0.2", 5000))
        assert client_ip(request) == "203.0.113.5"

    def test_empty_forwarded_falls_through(self):
        request = _request({"X-Forwarded-For": " , 10.0.0.1", "X-Real-IP": "203.0.113.5"})
        assert client_ip(request) == "203.0.113.5"

    def test_peer_address(self):
        assert client_ip(_request(peer=("192.0.2.44", 61000))) == "192.0.2.44"

    def test_unknown(self):
        assert client_ip(_request()) == "unknown"


class TestClientKey:
    """Tests for client_key()."""

    def test_route_and_salted_hash(self):
        request = _request({"X-Real-IP": "203.0.113.5"})

        key = client_key(request, "search")

        assert key == f"search:{hash_client_ip('203.0.113.5', 'test-salt')}"
        assert "203.0.113.5" not in key

    def test_routes_do_not_share_keys(self):
        request = _request(peer=("192.0.2.44", 61000))
        assert client_key(request, "search") != client_key(request, "track_click")
