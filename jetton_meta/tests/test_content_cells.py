from __future__ import annotations

import hashlib

import pytest
from pytoniq_core import Address, begin_cell

from jetton_meta.chain import content as content_mod
from jetton_meta.chain.client import parse_jetton_data
from jetton_meta.errors import ChainQueryError
from jetton_meta.types import ContentOffchain, ContentOnchain, ContentUnknown

ADMIN = Address("0:" + "44" * 32)


def _offchain_cell(uri: bytes):
    return begin_cell().store_uint(content_mod.OFFCHAIN_PREFIX, 8).store_bytes(uri).end_cell()


def test_offchain_uri_is_decoded() -> None:
    decoded = content_mod.decode_content(_offchain_cell(b"https://example.com/meta.json"))

    assert decoded == ContentOffchain(uri="https://example.com/meta.json")


def test_offchain_uri_follows_snake_refs() -> None:
    tail = begin_cell().store_bytes(b"meta.json").end_cell()
    cell = (
        begin_cell()
        .store_uint(content_mod.OFFCHAIN_PREFIX, 8)
        .store_bytes(b"https://example.com/")
        .store_ref(tail)
        .end_cell()
    )

    decoded = content_mod.decode_content(cell)

    assert decoded == ContentOffchain(uri="https://example.com/meta.json")


def test_onchain_without_attributes() -> None:
    # prefix byte followed by an empty HashmapE
    cell = begin_cell().store_uint(content_mod.ONCHAIN_PREFIX, 8).store_uint(0, 1).end_cell()

    decoded = content_mod.decode_content(cell)

    assert isinstance(decoded, ContentOnchain)
    assert decoded.get_attribute("name") == ""


def test_unknown_prefix() -> None:
    cell = begin_cell().store_uint(0x05, 8).end_cell()

    assert content_mod.decode_content(cell) == ContentUnknown(prefix=0x05)


def test_empty_cell_is_unknown() -> None:
    assert content_mod.decode_content(begin_cell().end_cell()) == ContentUnknown()


def test_attribute_key_is_sha256_of_name() -> None:
    expected = int.from_bytes(hashlib.sha256(b"decimals").digest(), "big")
    assert content_mod.attribute_key("decimals") == expected


@pytest.mark.parametrize("key, expected", [(5, 5), ("101", 5), ("0000", 0)])
def test_dictionary_keys_normalize_to_int(key, expected) -> None:
    assert content_mod._key_to_int(key) == expected


def test_parse_jetton_data_stack() -> None:
    admin = begin_cell().store_address(ADMIN).end_cell().begin_parse()
    stack = [21_000_000, -1, admin, _offchain_cell(b"https://example.com/j.json"), begin_cell().end_cell()]

    data = parse_jetton_data(stack)

    assert data.total_supply == 21_000_000
    assert data.mintable is True
    assert data.admin_address is not None
    assert data.admin_address.to_str(is_user_friendly=False) == ADMIN.to_str(is_user_friendly=False)
    assert data.content == ContentOffchain(uri="https://example.com/j.json")


def test_parse_jetton_data_rejects_short_stack() -> None:
    with pytest.raises(ChainQueryError):
        parse_jetton_data([1, 0])


def test_parse_jetton_data_rejects_non_cell_content() -> None:
    with pytest.raises(ChainQueryError):
        parse_jetton_data([1, 0, None, 42])
