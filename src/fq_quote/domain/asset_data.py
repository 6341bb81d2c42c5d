"""0x asset data decoding.

ERC20 asset data is the 4-byte proxy id 0xf47261b0 followed by the token
address ABI-encoded as one 32-byte word (12 zero bytes + 20 address bytes):

    0xf47261b0 000000000000000000000000 <40 hex chars>

Only ERC20 is accepted; every quote in an RFQ batch trades a fungible token.
"""

import re

from src.fq_common.errors import InvalidAssetDataError

ERC20_PROXY_ID = "f47261b0"

_HEX_RE = re.compile(r"^[0-9a-f]*$")
_ERC20_ASSET_DATA_HEX_LEN = 8 + 64
_ADDRESS_PADDING = "0" * 24


def decode_erc20_asset_data(asset_data: str) -> str:
    """Return the lowercase 0x-prefixed token address encoded in `asset_data`."""
    if not isinstance(asset_data, str) or not asset_data.startswith("0x"):
        raise InvalidAssetDataError(str(asset_data), "expected 0x-prefixed hex string")
    body = asset_data[2:].lower()
    if not _HEX_RE.match(body):
        raise InvalidAssetDataError(asset_data, "not hex encoded")
    if len(body) < 8:
        raise InvalidAssetDataError(asset_data, "missing proxy id")
    proxy_id = body[:8]
    if proxy_id != ERC20_PROXY_ID:
        raise InvalidAssetDataError(asset_data, f"unsupported proxy id 0x{proxy_id}")
    if len(body) != _ERC20_ASSET_DATA_HEX_LEN:
        raise InvalidAssetDataError(
            asset_data, f"expected {_ERC20_ASSET_DATA_HEX_LEN} hex chars, got {len(body)}"
        )
    word = body[8:]
    if not word.startswith(_ADDRESS_PADDING):
        raise InvalidAssetDataError(asset_data, "token address word is not zero-padded")
    return "0x" + word[24:]


def encode_erc20_asset_data(token_address: str) -> str:
    """Inverse of decode_erc20_asset_data, for building quotes in tooling and tests."""
    address = token_address.lower()
    if not address.startswith("0x") or len(address) != 42 or not _HEX_RE.match(address[2:]):
        raise InvalidAssetDataError(token_address, "not a 20-byte hex address")
    return f"0x{ERC20_PROXY_ID}{_ADDRESS_PADDING}{address[2:]}"
