"""
Core data models for the gethash decoder.

This module defines the Pydantic models and enums used to describe decoding
policies and per-line decoding results.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================


class ShortGroupPolicy(str, Enum):
    """How to decode a final character group with fewer than four symbols."""

    TRUNCATE = "truncate"
    ZERO_FILL = "zero_fill"
    STRICT = "strict"


class LineFailurePolicy(str, Enum):
    """What to emit for a line that could not be decoded."""

    PASSTHROUGH = "passthrough"
    SKIP = "skip"
    MARK = "mark"


class LineStatus(str, Enum):
    """Outcome of decoding a single line."""

    DECODED = "decoded"
    BLANK = "blank"
    NO_DIGITS = "no_digits"
    MISSING_DELIMITER = "missing_delimiter"
    INVALID_BASE64 = "invalid_base64"
    SHORT_GROUP = "short_group"


FAILED_STATUSES = frozenset(
    {LineStatus.MISSING_DELIMITER, LineStatus.INVALID_BASE64, LineStatus.SHORT_GROUP}
)


# =============================================================================
# Result Models
# =============================================================================


class LineResult(BaseModel):
    """Decoding result for one input line."""

    line_number: int = Field(..., ge=1, description="Line number (1-indexed)")
    original: str = Field(..., description="Line as it appeared in the input")
    output: Optional[str] = Field(None, description="Rendered line, None when skipped")
    status: LineStatus = Field(..., description="Decoding outcome")
    encoded_field: Optional[str] = Field(None, description="Segment after the first delimiter")
    digits: str = Field("", description="Concatenated digit runs")
    error_message: Optional[str] = Field(None, description="Error message if decoding failed")

    @property
    def failed(self) -> bool:
        """Whether the line could not be decoded."""
        return self.status in FAILED_STATUSES


class DecodeReport(BaseModel):
    """Decoding results for a whole input text."""

    lines: List[LineResult] = Field(default_factory=list)

    @property
    def output(self) -> str:
        """Rendered text, skipped lines omitted."""
        return "\n".join(line.output for line in self.lines if line.output is not None)

    @property
    def failed(self) -> List[LineResult]:
        """Lines that could not be decoded."""
        return [line for line in self.lines if line.failed]

    def count(self, status: LineStatus) -> int:
        """Number of lines with the given status."""
        return sum(1 for line in self.lines if line.status == status)
