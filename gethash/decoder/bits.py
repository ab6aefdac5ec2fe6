"""
Bit-field extraction from fixed-width unsigned integers.
"""

from gethash.utils.errors import InvalidRangeError


def get_bits(value: int, start: int, end: int, length: int = 64) -> int:
    """
    Extract bits ``[start, end)`` of ``value``, counted from the most
    significant bit of a ``length``-bit word, right-aligned.

    Args:
        value: Unsigned integer assumed to fit in ``length`` bits
        start: First bit of the range (0 is the most significant bit)
        end: One past the last bit of the range
        length: Declared bit width of ``value``

    Returns:
        Integer in ``[0, 2 ** (end - start) - 1]``

    Raises:
        InvalidRangeError: If the range is empty or exceeds ``length``
    """
    if start < 0 or start >= end or end > length:
        raise InvalidRangeError(start, end, length)

    mask = 2 ** (end - start) - 1
    shift = length - (end - start) - start

    return (value & (mask << shift)) >> shift
