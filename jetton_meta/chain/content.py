"""Decoding of TEP-64 token content cells.

A content cell starts with a one byte layout prefix:

* ``0x00`` on-chain: ``HashmapE 256 ^ContentData`` keyed by
  ``sha256(attribute_name)``. When the dictionary carries a ``uri`` attribute
  the layout is treated as *semichain*: display fields live behind the URI
  while the remaining attributes (notably ``decimals``) stay on-chain.
* ``0x01`` off-chain: the rest of the cell is a snake-encoded URI.

``ContentData`` is either ``0x00`` followed by snake data or ``0x01``
followed by ``HashmapE 32 ^SnakeData`` chunks.
"""
from __future__ import annotations

import hashlib
import logging
from typing import Any, Dict

from pytoniq_core import Cell, Slice

from ..types import ContentOffchain, ContentOnchain, ContentSemichain, ContentUnknown, ContentVariant

LOGGER = logging.getLogger(__name__)

ONCHAIN_PREFIX = 0x00
OFFCHAIN_PREFIX = 0x01
SNAKE_PREFIX = 0x00
CHUNKS_PREFIX = 0x01

ATTRIBUTE_NAMES = (
    "uri",
    "name",
    "description",
    "image",
    "image_data",
    "symbol",
    "decimals",
    "amount_style",
    "render_type",
)


def attribute_key(name: str) -> int:
    return int.from_bytes(hashlib.sha256(name.encode("utf-8")).digest(), "big")


_NAMES_BY_KEY = {attribute_key(name): name for name in ATTRIBUTE_NAMES}


def _key_to_int(key: Any) -> int:
    if isinstance(key, int):
        return key
    if hasattr(key, "to01"):
        return int(key.to01(), 2)
    return int(str(key), 2)


def _load_snake_bytes(cs: Slice) -> bytes:
    chunks = []
    while True:
        chunks.append(cs.load_bytes(cs.remaining_bits // 8))
        if not cs.remaining_refs:
            break
        cs = cs.load_ref().begin_parse()
    return b"".join(chunks)


def _decode_text(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace")


def _load_content_data(cell: Cell) -> str | None:
    cs = cell.begin_parse()
    if cs.remaining_bits < 8:
        return _decode_text(_load_snake_bytes(cs))
    prefix = cs.load_uint(8)
    if prefix == SNAKE_PREFIX:
        return _decode_text(_load_snake_bytes(cs))
    if prefix == CHUNKS_PREFIX:
        chunks = cs.load_dict(32, value_deserializer=lambda src: src.load_ref()) or {}
        ordered = sorted(chunks.items(), key=lambda item: _key_to_int(item[0]))
        return _decode_text(b"".join(_load_snake_bytes(chunk.begin_parse()) for _, chunk in ordered))
    return None


def _load_attributes(cs: Slice) -> Dict[str, str]:
    raw = cs.load_dict(256, value_deserializer=lambda src: src.load_ref()) or {}
    attributes: Dict[str, str] = {}
    for key, value_cell in raw.items():
        name = _NAMES_BY_KEY.get(_key_to_int(key))
        if name is None:
            continue
        value = _load_content_data(value_cell)
        if value is None:
            LOGGER.debug("Skipping content attribute %s with unknown data layout", name)
            continue
        attributes[name] = value
    return attributes


def decode_content(cell: Cell | Slice) -> ContentVariant:
    """Decode a jetton content cell into one of the content variants."""

    cs = cell if isinstance(cell, Slice) else cell.begin_parse()
    if cs.remaining_bits < 8:
        return ContentUnknown()
    prefix = cs.load_uint(8)
    if prefix == OFFCHAIN_PREFIX:
        return ContentOffchain(uri=_decode_text(_load_snake_bytes(cs)))
    if prefix == ONCHAIN_PREFIX:
        attributes = _load_attributes(cs)
        uri = attributes.get("uri")
        if uri:
            return ContentSemichain(uri=uri, attributes=attributes)
        return ContentOnchain(attributes=attributes)
    return ContentUnknown(prefix=prefix)
