"""
Digit-run extraction from decoded text.
"""

import re
from typing import List

_DIGIT_RUN = re.compile(r"[0-9]+")


def digit_runs(text: str) -> List[str]:
    """
    Return every maximal run of ASCII digits in ``text``, in order, written
    as its integer value would be (leading zeros dropped, ``"0"`` for all zeros).
    """
    return [run.lstrip("0") or "0" for run in _DIGIT_RUN.findall(text)]


def extract_numbers(text: str) -> List[int]:
    """Return every maximal run of ASCII digits in ``text`` as an integer, in order."""
    return [int(run) for run in digit_runs(text)]


def join_digit_runs(text: str) -> str:
    """Concatenate the digit runs of ``text``; no runs give ``""``."""
    return "".join(digit_runs(text))
