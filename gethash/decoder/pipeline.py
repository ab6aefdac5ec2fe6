"""
Line pipeline for decoding hash exports.

Every input line looks like ``<prefix>|<base64 payload>``. The payload is
base64-decoded, run twice through the six-bit charset decoder, and replaced in
the line by the digit runs found in the result. Lines are independent: a
failure on one line never stops the others.
"""

from typing import Optional

from gethash.config import get_settings, parse_policy
from gethash.decoder.charset import decode_uu_charset
from gethash.decoder.numbers import join_digit_runs
from gethash.decoder.payload import decode_payload
from gethash.models import (
    DecodeReport,
    LineFailurePolicy,
    LineResult,
    LineStatus,
    ShortGroupPolicy,
)
from gethash.utils.errors import DecodingError, MissingDelimiterError
from gethash.utils.logging import LogContext, get_logger, log_performance

logger = get_logger(__name__)

DELIMITER = "|"
DECODE_PASSES = 2


class LinePipeline:
    """Decode whole texts line by line."""

    def __init__(
        self,
        short_group_policy: Optional[ShortGroupPolicy] = None,
        failure_policy: Optional[LineFailurePolicy] = None,
        failure_marker: Optional[str] = None,
    ) -> None:
        """
        Initialize the pipeline.

        Args:
            short_group_policy: Handling of short character groups (defaults to settings)
            failure_policy: Output for undecodable lines (defaults to settings)
            failure_marker: Marker template used by the ``MARK`` policy,
                formatted with ``status``
        """
        settings = get_settings()
        self.short_group_policy = parse_policy(
            ShortGroupPolicy,
            "short group policy",
            short_group_policy or settings.short_group_policy,
        )
        self.failure_policy = parse_policy(
            LineFailurePolicy,
            "line failure policy",
            failure_policy or settings.line_failure_policy,
        )
        self.failure_marker = failure_marker or settings.failure_marker

    def decode_field(self, field: str) -> str:
        """
        Decode one encoded field into its digit string.

        Raises:
            InvalidBase64Error: If the field is not base64
            ShortCharacterGroupError: Under the ``STRICT`` short group policy
        """
        text = decode_payload(field)
        for _ in range(DECODE_PASSES):
            text = decode_uu_charset(text, self.short_group_policy)
        return join_digit_runs(text)

    def decode_line(self, line: str, line_number: int = 1) -> LineResult:
        """Decode a single line. Decoding failures are reported, not raised."""
        if not line:
            return LineResult(
                line_number=line_number, original=line, output=line, status=LineStatus.BLANK
            )

        segments = line.split(DELIMITER)
        field = segments[1] if len(segments) > 1 else None

        with LogContext(line_number=line_number):
            try:
                if field is None:
                    raise MissingDelimiterError(line, DELIMITER)
                digits = self.decode_field(field)
            except DecodingError as e:
                logger.warning(f"Line {line_number} not decoded: {e.message}")
                return LineResult(
                    line_number=line_number,
                    original=line,
                    output=self._render_failure(line, field, e),
                    status=LineStatus(e.status),
                    encoded_field=field,
                    error_message=str(e),
                )

            if digits:
                status = LineStatus.DECODED
                logger.debug(f"Line {line_number} decoded", extra={"digits": digits})
            else:
                status = LineStatus.NO_DIGITS
                logger.debug(f"Line {line_number} decoded without digits")

        return LineResult(
            line_number=line_number,
            original=line,
            output=line.replace(field, digits, 1),
            status=status,
            encoded_field=field,
            digits=digits,
        )

    @log_performance
    def decode(self, text: str) -> DecodeReport:
        """Decode every line of ``text``."""
        return DecodeReport(
            lines=[
                self.decode_line(line, number)
                for number, line in enumerate(text.split("\n"), start=1)
            ]
        )

    def decode_text(self, text: str) -> str:
        """Decode every line of ``text`` and return the rendered output."""
        return self.decode(text).output

    def _render_failure(
        self, line: str, field: Optional[str], error: DecodingError
    ) -> Optional[str]:
        if self.failure_policy == LineFailurePolicy.SKIP:
            return None
        if self.failure_policy == LineFailurePolicy.PASSTHROUGH:
            return line

        marker = self.failure_marker.format(status=error.status)
        if field is None:
            return f"{line}{DELIMITER}{marker}"
        return line.replace(field, marker, 1)


def decode_text(
    text: str,
    short_group_policy: Optional[ShortGroupPolicy] = None,
    failure_policy: Optional[LineFailurePolicy] = None,
) -> str:
    """
    Decode a full input text.

    Args:
        text: Newline separated ``<prefix>|<payload>`` lines
        short_group_policy: Handling of short character groups
        failure_policy: Output for undecodable lines

    Returns:
        The input with each payload replaced by its digits
    """
    pipeline = LinePipeline(
        short_group_policy=short_group_policy, failure_policy=failure_policy
    )
    return pipeline.decode_text(text)
