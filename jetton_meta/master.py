"""Jetton master data lookups by master or wallet address."""
from __future__ import annotations

import logging
import re
from typing import Optional

from pytoniq_core import Address, Slice

from .chain.client import ChainAPI
from .errors import AddressDecodeError, ChainQueryError, DecimalsParseError
from .resolver import ContentResolver
from .types import MasterData

LOGGER = logging.getLogger(__name__)

WALLET_DATA_METHOD = "get_wallet_data"
# signed 64-bit range
_DECIMALS_RE = re.compile(r"[+-]?[0-9]{1,19}")
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def parse_decimals(raw: str) -> Optional[int]:
    """Parse a base-10 integer, rejecting whitespace, underscores, empty input and values outside int64."""

    if not _DECIMALS_RE.fullmatch(raw):
        return None
    value = int(raw, 10)
    if not INT64_MIN <= value <= INT64_MAX:
        return None
    return value


async def get_master_data(
    api: ChainAPI, master: Address, *, resolver: Optional[ContentResolver] = None
) -> MasterData:
    """Fetch and normalize the metadata of the jetton master at ``master``.

    Chain failures raise :class:`ChainQueryError`. Off-chain content failures
    are absorbed and show up as empty fields with ``resolution="partial"``.
    If the resolved decimals are not an integer, :class:`DecimalsParseError`
    is raised carrying the otherwise complete record with ``decimals=0``.
    """

    resolver = resolver or ContentResolver()
    try:
        data = await api.get_jetton_data(master)
    except ChainQueryError:
        raise
    except Exception as exc:
        raise ChainQueryError(f"Failed to get jetton data for master={master.to_str()}: {exc}") from exc

    resolved = await resolver.resolve(data.content)
    decimals = parse_decimals(resolved.decimals_raw)
    master_data = MasterData(
        address=master,
        content_type=resolved.content_type,
        name=resolved.name,
        symbol=resolved.symbol,
        description=resolved.description,
        image=resolved.image,
        decimals=decimals or 0,
        resolution=resolved.resolution,
    )
    if decimals is None:
        LOGGER.error("Cannot convert decimals %r for master=%s", resolved.decimals_raw, master.to_str())
        raise DecimalsParseError(resolved.decimals_raw, master_data)
    return master_data


async def get_master_by_wallet(
    api: ChainAPI, wallet: Address, *, resolver: Optional[ContentResolver] = None
) -> MasterData:
    """Resolve the jetton master of ``wallet`` and return its master data."""

    try:
        block = await api.current_masterchain_info()
    except Exception as exc:
        raise ChainQueryError(f"Failed to get current masterchain info: {exc}") from exc
    try:
        stack = await api.run_get_method(block, wallet, WALLET_DATA_METHOD)
    except Exception as exc:
        raise ChainQueryError(f"Failed to run {WALLET_DATA_METHOD} on wallet={wallet.to_str()}: {exc}") from exc

    # balance, owner, master, wallet_code: the last address slice is the master
    master: Optional[Address] = None
    for entry in stack:
        if not isinstance(entry, Slice):
            continue
        try:
            address = entry.load_address()
        except Exception as exc:
            raise AddressDecodeError(f"Failed to load master address from {WALLET_DATA_METHOD} result") from exc
        if address is not None:
            master = address
    if master is None:
        raise AddressDecodeError(f"{WALLET_DATA_METHOD} on wallet={wallet.to_str()} returned no address")

    return await get_master_data(api, master, resolver=resolver)
