"""
Unit tests for heading-based Markdown segmentation.
"""
import re

import pytest

from md_translator.core.segmenter import split, is_heading_line
from md_translator.core.exceptions import EmptyInputError


def _non_whitespace(text: str) -> str:
    return re.sub(r'\s+', '', text)


class TestHeadingDetection:
    """Tests for is_heading_line."""

    @pytest.mark.parametrize("line", ["# A", "## B", "###### Six", "#", "##\n", "#\tTabbed"])
    def test_atx_headings(self, line):
        assert is_heading_line(line)

    @pytest.mark.parametrize("line", ["#hashtag", "####### Seven", " # indented", "text # not", ""])
    def test_not_headings(self, line):
        assert not is_heading_line(line)


class TestSplit:
    """Tests for split()."""

    def test_two_headings(self):
        """Boundary at each heading line."""
        assert split("# A\ntext1\n## B\ntext2") == ["# A\ntext1", "## B\ntext2"]

    def test_no_headings_single_fragment(self):
        assert split("just text, no headings") == ["just text, no headings"]

    def test_empty_input_raises(self):
        with pytest.raises(EmptyInputError):
            split("")

    def test_whitespace_only_input_raises(self):
        with pytest.raises(EmptyInputError):
            split("  \n\t\n")

    def test_preamble_is_first_fragment(self, sample_markdown):
        fragments = split(sample_markdown)
        assert fragments[0] == "Preamble paragraph."
        assert fragments[1] == "# Title\nIntro text."

    def test_hash_inside_code_fence_is_not_a_boundary(self, sample_markdown):
        fragments = split(sample_markdown)
        assert len(fragments) == 4
        assert fragments[2] == (
            "## Install\n"
            "```bash\n"
            "# not a heading\n"
            "pip install md-translator\n"
            "```"
        )
        assert fragments[3] == "### Usage\nRun it."

    def test_tilde_fence(self):
        text = "# A\n~~~\n# inside\n~~~\n# B\nend"
        assert split(text) == ["# A\n~~~\n# inside\n~~~", "# B\nend"]

    def test_shorter_fence_does_not_close_block(self):
        text = "# A\n````\n```\n# inside\n````\n# B"
        assert split(text) == ["# A\n````\n```\n# inside\n````", "# B"]

    def test_unclosed_fence_runs_to_end(self):
        text = "# A\n```\n# inside\n# still inside"
        assert split(text) == [text]

    def test_consecutive_headings(self):
        assert split("# A\n## B\n### C") == ["# A", "## B", "### C"]

    def test_blank_lines_between_sections_are_dropped(self):
        assert split("# A\n\n\n\n# B\n\n") == ["# A", "# B"]

    def test_inline_backtick_span_does_not_open_fence(self):
        text = "# A\n```x``` is inline code\n# B\nbody"
        assert split(text) == ["# A\n```x``` is inline code", "# B\nbody"]

    def test_fence_with_info_string(self):
        text = "# A\n```python title=demo\n# inside\n```\n# B"
        assert split(text) == ["# A\n```python title=demo\n# inside\n```", "# B"]

    def test_tilde_fence_info_string_may_contain_backticks(self):
        text = "# A\n~~~ `odd`\n# inside\n~~~\n# B"
        assert split(text) == ["# A\n~~~ `odd`\n# inside\n~~~", "# B"]

    def test_crlf_line_endings(self):
        assert split("# A\r\nx\r\n# B\r\ny") == ["# A\r\nx", "# B\r\ny"]

    def test_lone_cr_line_endings(self):
        assert split("# A\rx\r# B\ry") == ["# A\rx", "# B\ry"]

    @pytest.mark.parametrize("separator", ["\x0b", "\x0c", "\x1c", "\x1d", "\x1e", "\x85", "\u2028", "\u2029"])
    def test_non_markdown_line_separators_do_not_start_headings(self, separator):
        text = f"# A\nsome text{separator}# not a heading\n# B"
        assert split(text) == [f"# A\nsome text{separator}# not a heading", "# B"]

    def test_fragment_without_headings_splits_to_itself(self):
        """Splitting an already-split heading-free fragment is idempotent."""
        fragment = "Some paragraph.\n\n- item one\n- item two"
        assert split(fragment) == [fragment]

    def test_heading_fragment_splits_to_itself(self):
        fragment = "## Section\nBody line.\nAnother line."
        assert split(fragment) == [fragment]

    @pytest.mark.parametrize("text", [
        "# A\ntext1\n## B\ntext2",
        "intro\n# A\n\n  body  \n\n## B\n```\n# code\n```\ntail",
        "no headings here\n\nat all",
        "#\n#\n#",
        "# 見出し\n本文です。\n## 次\n続き",
    ])
    def test_round_trip_keeps_all_content(self, text):
        """Every non-whitespace character survives once, in order."""
        fragments = split(text)
        assert _non_whitespace("".join(f.strip() for f in fragments)) == _non_whitespace(text)

    def test_deterministic(self, sample_markdown):
        assert split(sample_markdown) == split(sample_markdown)

    def test_fragments_are_trimmed_and_non_empty(self, sample_markdown):
        for fragment in split(sample_markdown):
            assert fragment
            assert fragment == fragment.strip()
