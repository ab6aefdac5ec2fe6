from gethash.decoder.bits import get_bits
from gethash.decoder.charset import decode_uu_charset
from gethash.decoder.numbers import digit_runs, extract_numbers, join_digit_runs
from gethash.decoder.payload import decode_payload
from gethash.decoder.pipeline import LinePipeline, decode_text

__all__ = [
    "LinePipeline",
    "decode_payload",
    "decode_text",
    "decode_uu_charset",
    "digit_runs",
    "extract_numbers",
    "get_bits",
    "join_digit_runs",
]
