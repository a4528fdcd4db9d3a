"""Exception hierarchy for jetton metadata lookups."""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:  # pragma: no cover
    from .types import MasterData


class JettonMetaError(RuntimeError):
    pass


class ChainQueryError(JettonMetaError):
    """A lite-server query failed or returned something undecodable."""


class AddressDecodeError(JettonMetaError):
    pass


class RemoteError(JettonMetaError):
    def __init__(self, uri: str, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(f"{message} for uri={uri}")
        self.uri = uri
        self.status_code = status_code


class DecodeError(JettonMetaError):
    def __init__(self, uri: str, message: str = "Malformed off-chain content") -> None:
        super().__init__(f"{message} for uri={uri}")
        self.uri = uri


class DecimalsParseError(JettonMetaError):
    """Decimals could not be parsed as a base-10 integer.

    The lookup itself succeeded, so ``master_data`` still holds the resolved
    record with ``decimals`` set to ``0``.
    """

    def __init__(self, raw: str, master_data: "MasterData") -> None:
        super().__init__(f"Invalid decimals {raw!r} for master={master_data.address.to_str()}")
        self.raw = raw
        self.master_data = master_data
