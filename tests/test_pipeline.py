"""
Tests for the line pipeline.
"""

import base64

import pytest

from gethash.decoder.pipeline import LinePipeline, decode_text
from gethash.models import LineFailurePolicy, LineStatus, ShortGroupPolicy
from gethash.utils.errors import InvalidPolicyError
from tests.helpers import encode_payload


class TestDecodeLine:
    """Test decoding of single lines."""

    @pytest.fixture
    def pipeline(self):
        """Pipeline with default policies."""
        return LinePipeline()

    def test_hand_packed_payload(self, pipeline, payload_42):
        """A known double-packed payload decodes to its digits."""
        result = pipeline.decode_line(f"id|{payload_42}")

        assert result.output == "id|42"
        assert result.status == LineStatus.DECODED
        assert result.digits == "42"
        assert result.encoded_field == payload_42

    def test_digit_runs_are_concatenated(self, pipeline):
        """All digit runs in the decoded text form one replacement."""
        result = pipeline.decode_line(f"user|{encode_payload('uid=12;seq=345')}")

        assert result.output == "user|12345"

    def test_trailing_segments_are_kept(self, pipeline):
        """Only the segment after the first delimiter is replaced."""
        line = f"id|{encode_payload('n 7')}|extra|fields"

        assert pipeline.decode_line(line).output == "id|7|extra|fields"

    def test_first_occurrence_is_replaced(self, pipeline):
        """The replacement targets the first matching substring of the line."""
        field = encode_payload("9")
        result = pipeline.decode_line(f"{field}|{field}")

        assert result.output == f"9|{field}"

    def test_no_digits(self, pipeline):
        """A payload without digits leaves an empty replacement."""
        result = pipeline.decode_line(f"id|{encode_payload('no numbers')}")

        assert result.output == "id|"
        assert result.status == LineStatus.NO_DIGITS
        assert not result.failed

    def test_empty_field(self, pipeline):
        """An empty field decodes to nothing and the line is unchanged."""
        result = pipeline.decode_line("id|")

        assert result.output == "id|"
        assert result.status == LineStatus.NO_DIGITS

    def test_missing_delimiter_passes_through(self, pipeline):
        """A line without a delimiter is emitted unchanged."""
        result = pipeline.decode_line("just some text", line_number=3)

        assert result.output == "just some text"
        assert result.status == LineStatus.MISSING_DELIMITER
        assert result.line_number == 3
        assert result.encoded_field is None
        assert result.failed

    def test_invalid_base64_passes_through(self, pipeline):
        """A malformed payload is emitted unchanged with its error recorded."""
        result = pipeline.decode_line("id|not*base64")

        assert result.output == "id|not*base64"
        assert result.status == LineStatus.INVALID_BASE64
        assert "Invalid base64 payload" in result.error_message

    def test_blank_line(self, pipeline):
        """Empty lines are kept and are not failures."""
        result = pipeline.decode_line("")

        assert result.output == ""
        assert result.status == LineStatus.BLANK
        assert not result.failed


class TestFailurePolicies:
    """Test output for lines that cannot be decoded."""

    def test_skip(self):
        """Skipped lines are left out of the output."""
        pipeline = LinePipeline(failure_policy=LineFailurePolicy.SKIP)
        text = f"bad line\nid|{encode_payload('5')}\nid|***"

        assert pipeline.decode_text(text) == "id|5"

    def test_mark_replaces_field(self):
        """Marked lines carry the failure status in place of the field."""
        pipeline = LinePipeline(failure_policy=LineFailurePolicy.MARK)

        assert pipeline.decode_line("id|***").output == "id|<error:invalid_base64>"

    def test_mark_appends_when_delimiter_missing(self):
        """A marker is appended as a new field when there is no delimiter."""
        pipeline = LinePipeline(failure_policy=LineFailurePolicy.MARK)

        assert pipeline.decode_line("orphan").output == "orphan|<error:missing_delimiter>"

    def test_custom_marker(self):
        """The marker template is configurable."""
        pipeline = LinePipeline(failure_policy=LineFailurePolicy.MARK, failure_marker="?{status}?")

        assert pipeline.decode_line("id|***").output == "id|?invalid_base64?"

    def test_policy_from_settings(self, monkeypatch):
        """Policies default to the configured settings."""
        monkeypatch.setenv("GETHASH_LINE_FAILURE_POLICY", "skip")

        assert LinePipeline().failure_policy == LineFailurePolicy.SKIP

    def test_strict_short_groups_fail_the_line(self):
        """Under strict decoding a short group is a per-line failure."""
        field = base64.b64encode(b"M-#(").decode("ascii")
        pipeline = LinePipeline(short_group_policy=ShortGroupPolicy.STRICT)
        result = pipeline.decode_line(f"id|{field}")

        assert result.status == LineStatus.SHORT_GROUP
        assert result.output == f"id|{field}"


class TestDecodeText:
    """Test decoding of whole texts."""

    def test_every_line_is_decoded(self):
        """Lines are decoded independently and joined with newlines."""
        text = "\n".join(
            [
                f"alice|{encode_payload('id 101')}",
                "no delimiter",
                "bob|%%%",
                f"carol|{encode_payload('id 202')}",
            ]
        )

        assert decode_text(text) == "alice|101\nno delimiter\nbob|%%%\ncarol|202"

    def test_trailing_newline_is_preserved(self):
        """A trailing newline keeps its empty final line."""
        text = f"a|{encode_payload('1')}\nb|{encode_payload('2')}\n"
        output = decode_text(text)

        assert output == "a|1\nb|2\n"
        assert len(output.split("\n")) == len(text.split("\n"))

    def test_very_long_digit_run_does_not_stop_later_lines(self):
        """A digit run longer than the int/str conversion limit is decoded in full."""
        run = "7" * 5000
        text = f"a|{encode_payload(run)}\nb|{encode_payload('42')}"

        assert decode_text(text) == f"a|{run}\nb|42"

    def test_empty_text(self):
        """Empty input gives empty output."""
        assert decode_text("") == ""

    def test_report_counts(self):
        """The report records the status of every line."""
        text = f"a|{encode_payload('1')}\nb|{encode_payload('x')}\nc\n"
        report = LinePipeline().decode(text)

        assert [line.line_number for line in report.lines] == [1, 2, 3, 4]
        assert report.count(LineStatus.DECODED) == 1
        assert report.count(LineStatus.NO_DIGITS) == 1
        assert report.count(LineStatus.MISSING_DELIMITER) == 1
        assert report.count(LineStatus.BLANK) == 1
        assert [line.line_number for line in report.failed] == [3]
        assert report.output == "a|1\nb|\nc\n"

    def test_decoding_is_repeatable(self):
        """Re-running on the same text gives the same output."""
        pipeline = LinePipeline()
        text = f"x|{encode_payload('77')}"

        assert pipeline.decode_text(text) == pipeline.decode_text(text) == "x|77"


class TestPolicyArguments:
    """Test policies passed to the pipeline by name."""

    def test_names_are_normalised(self):
        """Policy names are accepted in any case, with hyphens or underscores."""
        pipeline = LinePipeline(short_group_policy="Zero-Fill", failure_policy="MARK")

        assert pipeline.short_group_policy == ShortGroupPolicy.ZERO_FILL
        assert pipeline.failure_policy == LineFailurePolicy.MARK

    def test_module_level_decode_accepts_names(self):
        """The convenience function accepts policy names."""
        assert decode_text("orphan", failure_policy="mark") == "orphan|<error:missing_delimiter>"

    def test_unknown_name(self):
        """Unknown policy names raise a configuration error."""
        with pytest.raises(InvalidPolicyError, match="not a valid short group policy"):
            LinePipeline(short_group_policy="pad")
