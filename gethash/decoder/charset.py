"""
Six-bit character set decoding.

Reverses the uuencode-style packing where every 3 bytes are split into four
6-bit symbols and each symbol is written as ``chr(symbol + 32)``. The first
character of an encoded string is a scheme marker and carries no data.
"""

from typing import List

from gethash.decoder.bits import get_bits
from gethash.models import ShortGroupPolicy
from gethash.utils.errors import ShortCharacterGroupError
from gethash.utils.logging import get_logger

logger = get_logger(__name__)

GROUP_SIZE = 4
SYMBOL_BITS = 6


def symbol_value(char: str) -> int:
    """Map an encoded character to its 6-bit value."""
    return (ord(char) - 32) % 64


def decode_group(symbols: List[int]) -> List[int]:
    """
    Rebuild three bytes from four 6-bit symbols.

    Args:
        symbols: Exactly four values in ``[0, 63]``

    Returns:
        The three reconstructed byte values, zeros included
    """
    s0, s1, s2, s3 = symbols
    return [
        (get_bits(s0, 0, 6, SYMBOL_BITS) << 2) | get_bits(s1, 0, 2, SYMBOL_BITS),
        (get_bits(s1, 2, 6, SYMBOL_BITS) << 4) | get_bits(s2, 0, 4, SYMBOL_BITS),
        (get_bits(s2, 4, 6, SYMBOL_BITS) << 6) | get_bits(s3, 0, 6, SYMBOL_BITS),
    ]


def decode_bytes(
    cipher_text: str,
    policy: ShortGroupPolicy = ShortGroupPolicy.TRUNCATE,
) -> List[int]:
    """
    Decode ``cipher_text`` into raw byte values, zeros included.

    Args:
        cipher_text: Marker character followed by groups of four symbols
        policy: Handling of a final group shorter than four symbols

    Returns:
        Reconstructed byte values in order

    Raises:
        ShortCharacterGroupError: If the final group is short and the
            policy is ``STRICT``
    """
    decoded: List[int] = []

    for offset in range(1, len(cipher_text), GROUP_SIZE):
        group = cipher_text[offset:offset + GROUP_SIZE]
        symbols = [symbol_value(char) for char in group]

        if len(symbols) == GROUP_SIZE:
            decoded.extend(decode_group(symbols))
            continue

        if policy == ShortGroupPolicy.STRICT:
            raise ShortCharacterGroupError(group, offset)

        padded = decode_group(symbols + [0] * (GROUP_SIZE - len(symbols)))
        if policy == ShortGroupPolicy.ZERO_FILL:
            decoded.extend(padded)
        else:
            # Only bytes whose 8 bits all come from present symbols
            determined = len(symbols) * SYMBOL_BITS // 8
            decoded.extend(padded[:determined])
        logger.debug(
            "Short character group",
            extra={"offset": offset, "symbols": len(symbols), "policy": policy.value},
        )

    return decoded


def decode_uu_charset(
    cipher_text: str,
    policy: ShortGroupPolicy = ShortGroupPolicy.TRUNCATE,
) -> str:
    """
    Decode one pass of the six-bit character set.

    Zero bytes are packing artifacts and are dropped wherever they occur.

    Args:
        cipher_text: Marker character followed by groups of four symbols
        policy: Handling of a final group shorter than four symbols

    Returns:
        Decoded text, one character per non-zero byte
    """
    return "".join(chr(byte) for byte in decode_bytes(cipher_text, policy) if byte != 0)
