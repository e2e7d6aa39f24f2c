"""
Bech32 address re-encoding.

Chain addresses are bech32 strings: a human readable prefix (HRP) and a
payload of raw address bytes. Re-encoding keeps the payload and swaps the
prefix, so an address from the source chain can be stored in the target
network's encoding.
"""

from __future__ import annotations

import bech32

from ledgerview.errors import AddressDecodeError


def decode_address(address: str) -> tuple[str, bytes]:
    """
    Decode a bech32 address into its prefix and raw payload.

    Args:
        address: The bech32 address string

    Returns:
        Tuple of (prefix, payload bytes)

    Raises:
        AddressDecodeError: If the address is not valid bech32
    """
    hrp, data = bech32.bech32_decode(address)
    if hrp is None or data is None:
        raise AddressDecodeError(f"invalid bech32 address: {address!r}")

    payload = bech32.convertbits(data, 5, 8, False)
    if payload is None:
        raise AddressDecodeError(f"invalid bech32 payload in address: {address!r}")

    return hrp, bytes(payload)


def encode_address(prefix: str, payload: bytes) -> str:
    """
    Encode raw address bytes under a bech32 prefix.

    Args:
        prefix: The target human readable prefix
        payload: The raw address bytes

    Returns:
        The bech32 address string

    Raises:
        AddressDecodeError: If the prefix or payload cannot be encoded
    """
    if not prefix or prefix != prefix.lower():
        raise AddressDecodeError(f"invalid bech32 prefix: {prefix!r}")

    data = bech32.convertbits(payload, 8, 5)
    encoded = bech32.bech32_encode(prefix, data) if data is not None else None
    if encoded is None or bech32.bech32_decode(encoded)[0] is None:
        raise AddressDecodeError(f"cannot encode {len(payload)} byte payload under prefix {prefix!r}")

    return encoded


def convert_address_prefix(target_prefix: str, address: str) -> str:
    """
    Re-encode an address under a different prefix, preserving its payload.

    Example:
        convert_address_prefix("like", "cosmos1...")  # -> "like1..."

    Args:
        target_prefix: The prefix to encode under
        address: A bech32 address with any prefix

    Returns:
        The address in target_prefix encoding

    Raises:
        AddressDecodeError: If the address is invalid or cannot be re-encoded
    """
    _, payload = decode_address(address)
    return encode_address(target_prefix, payload)
