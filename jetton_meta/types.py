"""Core data models used across the project."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pytoniq_core import Address

ContentType = Literal["onchain", "semichain", "offchain", ""]
Resolution = Literal["resolved", "partial", "unrecognized"]

CONTENT_ONCHAIN: ContentType = "onchain"
CONTENT_SEMICHAIN: ContentType = "semichain"
CONTENT_OFFCHAIN: ContentType = "offchain"

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


class OffchainContent(BaseModel):
    """Metadata document served from a jetton content URI."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    symbol: str = ""
    description: str = ""
    image: str = ""
    decimals: Optional[int] = Field(default=None, ge=INT32_MIN, le=INT32_MAX)

    @field_validator("name", "symbol", "description", "image", mode="before")
    @classmethod
    def _null_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class MasterData(BaseModel):
    """Normalized metadata of a jetton master contract."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    address: Address
    content_type: ContentType = ""
    name: str = ""
    symbol: str = ""
    description: str = ""
    image: str = ""
    decimals: int = 0
    resolution: Resolution = "resolved"


@dataclass(frozen=True)
class ContentOnchain:
    attributes: Mapping[str, str] = field(default_factory=dict)

    def get_attribute(self, name: str) -> str:
        return self.attributes.get(name, "")


@dataclass(frozen=True)
class ContentSemichain:
    """On-chain attributes plus a ``uri`` pointing at the display fields."""

    uri: str
    attributes: Mapping[str, str] = field(default_factory=dict)

    def get_attribute(self, name: str) -> str:
        return self.attributes.get(name, "")


@dataclass(frozen=True)
class ContentOffchain:
    uri: str


@dataclass(frozen=True)
class ContentUnknown:
    prefix: Optional[int] = None


ContentVariant = Union[ContentOnchain, ContentSemichain, ContentOffchain, ContentUnknown]


@dataclass(frozen=True)
class JettonData:
    """Decoded result of the ``get_jetton_data`` get-method."""

    total_supply: int
    mintable: bool
    admin_address: Optional[Address]
    content: ContentVariant


@dataclass(frozen=True)
class ResolvedContent:
    content_type: ContentType = ""
    name: str = ""
    symbol: str = ""
    description: str = ""
    image: str = ""
    decimals_raw: str = ""
    resolution: Resolution = "unrecognized"
