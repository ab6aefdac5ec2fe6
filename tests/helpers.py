"""
Payload builders for the decoder tests.

Only the tests need to pack data, so the packer lives here rather than in the
package.
"""

import base64


def uu_pack(data: str, marker: str = "M") -> str:
    """Pack text with the six-bit scheme: marker, then 4 symbols per 3 bytes."""
    padded = data + "\x00" * (-len(data) % 3)
    chars = [marker]
    for i in range(0, len(padded), 3):
        b0, b1, b2 = (ord(c) for c in padded[i:i + 3])
        symbols = [
            b0 >> 2,
            ((b0 & 0x03) << 4) | (b1 >> 4),
            ((b1 & 0x0F) << 2) | (b2 >> 6),
            b2 & 0x3F,
        ]
        chars.extend(chr(symbol + 32) for symbol in symbols)
    return "".join(chars)


def encode_payload(text: str, marker: str = "M") -> str:
    """Build the base64 field for ``text`` packed twice."""
    packed = uu_pack(uu_pack(text, marker), marker)
    return base64.b64encode(packed.encode("latin-1")).decode("ascii")
