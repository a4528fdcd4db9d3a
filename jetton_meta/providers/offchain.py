"""Fetch jetton metadata documents referenced by content URIs."""
from __future__ import annotations

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from .. import utils
from ..errors import DecodeError, RemoteError
from ..types import OffchainContent

LOGGER = logging.getLogger(__name__)

# same as httpx's own default, stated so callers can override it explicitly
DEFAULT_TIMEOUT = 5.0


async def _perform_request(client: httpx.AsyncClient, url: str) -> httpx.Response:
    try:
        return await client.get(url, headers={"accept": "application/json"})
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise RemoteError(url, f"Request failed: {exc}") from exc


async def fetch_offchain_content(
    uri: str,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    ipfs_gateway: Optional[str] = None,
) -> OffchainContent:
    """Download and decode the metadata JSON served at ``uri``.

    Raises :class:`RemoteError` for transport failures and any status other
    than 200, and :class:`DecodeError` when the body is not the expected JSON
    object. No retries are attempted.
    """

    url = utils.resolve_uri(uri, ipfs_gateway)
    if not utils.is_http_uri(url):
        raise RemoteError(uri, "Unsupported content URI")
    async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
        response = await _perform_request(client, url)
    if response.status_code != httpx.codes.OK:
        status = f"{response.status_code} {response.reason_phrase}".strip()
        raise RemoteError(uri, f"Unexpected response status {status}", status_code=response.status_code)
    try:
        payload = response.json()
    except ValueError as exc:
        raise DecodeError(uri, "Response body is not valid JSON") from exc
    if not isinstance(payload, dict):
        raise DecodeError(uri, "Response body is not a JSON object")
    try:
        content = OffchainContent.model_validate(payload)
    except ValidationError as exc:
        raise DecodeError(uri, f"Unexpected content schema: {exc.error_count()} error(s)") from exc
    LOGGER.debug("Fetched off-chain content from %s", url)
    return content
