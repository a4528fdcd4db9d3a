"""Blockchain access used by the master data lookups."""
from __future__ import annotations

import json
import logging
from typing import Any, List, Protocol, Sequence

from pytoniq import LiteBalancer
from pytoniq_core import Address, Cell, Slice
from pytoniq_core.tl import BlockIdExt

from ..config import AppSettings
from ..errors import ChainQueryError
from ..types import JettonData
from .content import decode_content

LOGGER = logging.getLogger(__name__)

JETTON_DATA_METHOD = "get_jetton_data"


class ChainAPI(Protocol):
    async def current_masterchain_info(self) -> Any:
        """Return the id of the latest masterchain block."""
        ...

    async def run_get_method(
        self, block: Any, address: Address, method: str, stack: Sequence[Any] = ()
    ) -> List[Any]:
        ...

    async def get_jetton_data(self, master: Address) -> JettonData:
        ...


def parse_jetton_data(stack: Sequence[Any]) -> JettonData:
    """Build :class:`JettonData` from a TEP-74 ``get_jetton_data`` result stack."""

    if len(stack) < 4:
        raise ChainQueryError(f"{JETTON_DATA_METHOD} returned {len(stack)} stack entries, expected at least 4")
    total_supply, mintable, admin, content = stack[:4]
    if not isinstance(total_supply, int) or not isinstance(mintable, int):
        raise ChainQueryError(f"{JETTON_DATA_METHOD} returned non-integer supply or mintable flag")
    admin_address = None
    if isinstance(admin, Slice):
        try:
            admin_address = admin.load_address()
        except Exception as exc:
            raise ChainQueryError("Failed to decode jetton admin address") from exc
    if not isinstance(content, (Cell, Slice)):
        raise ChainQueryError(f"{JETTON_DATA_METHOD} returned content of type {type(content).__name__}")
    return JettonData(
        total_supply=total_supply,
        mintable=mintable != 0,
        admin_address=admin_address,
        content=decode_content(content),
    )


class LiteChainAPI:
    """:class:`ChainAPI` backed by a ``pytoniq`` lite-server balancer.

    Use as an async context manager so the underlying connections are opened
    and closed::

        async with LiteChainAPI.from_settings(settings) as api:
            data = await get_master_data(api, master)
    """

    def __init__(self, client: LiteBalancer) -> None:
        self._client = client

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "LiteChainAPI":
        if settings.liteserver_config is not None:
            config = json.loads(settings.liteserver_config.read_text(encoding="utf-8"))
            client = LiteBalancer.from_config(config, trust_level=settings.trust_level)
        elif settings.network == "testnet":
            client = LiteBalancer.from_testnet_config(trust_level=settings.trust_level)
        else:
            client = LiteBalancer.from_mainnet_config(trust_level=settings.trust_level)
        return cls(client)

    async def __aenter__(self) -> "LiteChainAPI":
        await self._client.start_up()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self._client.close_all()

    async def current_masterchain_info(self) -> BlockIdExt:
        info = await self._client.get_masterchain_info()
        last = info["last"]
        if isinstance(last, BlockIdExt):
            return last
        return BlockIdExt.from_dict(last)

    async def run_get_method(
        self, block: Any, address: Address, method: str, stack: Sequence[Any] = ()
    ) -> List[Any]:
        return await self._client.run_get_method(address, method, list(stack), block=block)

    async def get_jetton_data(self, master: Address) -> JettonData:
        stack = await self._client.run_get_method(master, JETTON_DATA_METHOD, [])
        LOGGER.debug("%s on %s returned %d entries", JETTON_DATA_METHOD, master.to_str(), len(stack))
        return parse_jetton_data(stack)
