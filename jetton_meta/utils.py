"""Utility helpers shared across modules."""
from __future__ import annotations

from typing import Optional
from urllib.parse import urlparse

from pytoniq_core import Address

from .config import DEFAULT_IPFS_GATEWAY

IPFS_SCHEME = "ipfs://"


def resolve_uri(uri: str, ipfs_gateway: Optional[str] = None) -> str:
    """Return an HTTP(S) URL for ``uri``, routing ``ipfs://`` through a gateway."""

    uri = uri.strip()
    if not uri.startswith(IPFS_SCHEME):
        return uri
    gateway = ipfs_gateway or DEFAULT_IPFS_GATEWAY
    path = uri[len(IPFS_SCHEME):]
    if path.startswith("ipfs/"):
        path = path[len("ipfs/"):]
    return f"{gateway.rstrip('/')}/{path.lstrip('/')}"


def is_http_uri(uri: str) -> bool:
    try:
        parsed = urlparse(uri)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def parse_address(value: str | Address) -> Address:
    if isinstance(value, Address):
        return value
    return Address(value.strip())


def friendly_address(address: Address) -> str:
    return address.to_str(is_user_friendly=True, is_url_safe=True, is_bounceable=True)
