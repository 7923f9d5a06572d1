"""
Output formatting for translated documents.

Plain text output joins the translations with blank lines. HTML output
renders a two-column table, original on the left and translation on the
right, one row per fragment.
"""
from html import escape
from itertools import zip_longest
from typing import Sequence

from markdown_it import MarkdownIt


HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{title}</title>
<style>
table {{ border-collapse: collapse; width: 100%; table-layout: fixed; }}
th, td {{ border: 1px solid #ccc; padding: 0.5em 1em; vertical-align: top; }}
pre {{ white-space: pre-wrap; }}
</style>
</head>
<body>
<table>
<thead>
<tr><th>{source_language}</th><th>{target_language}</th></tr>
</thead>
<tbody>
{rows}
</tbody>
</table>
</body>
</html>
"""


def _markdown_renderer() -> MarkdownIt:
    # Raw HTML in fragments is escaped, not passed through
    return MarkdownIt("commonmark", {"html": False}).enable(["table", "strikethrough"])


def format_text(translations: Sequence[str]) -> str:
    """Join translated fragments with a blank line between them."""
    return "\n\n".join(translation.strip() for translation in translations) + "\n"


def format_html_table(originals: Sequence[str], translations: Sequence[Sequence[str]],
                      source_language: str = "Original",
                      target_language: str = "Translation",
                      title: str = "Translation") -> str:
    """
    Render originals and translations side by side as an HTML document.

    translations holds one entry per fragment: the list of completion texts
    returned for it, shown together in one cell separated by a blank line.
    A plain string counts as a single completion. Rows pair originals[i] with
    translations[i]; when one list is longer the missing cells are left empty.
    """
    md = _markdown_renderer()
    rows = []
    for original, texts in zip_longest(originals, translations):
        if isinstance(texts, str):
            texts = [texts]
        original = original or ""
        translation = "\n\n".join(text.strip() for text in texts or ())
        rows.append(
            f"<tr><td>{md.render(original)}</td><td>{md.render(translation)}</td></tr>"
        )

    return HTML_TEMPLATE.format(
        title=escape(title),
        source_language=escape(source_language),
        target_language=escape(target_language),
        rows="\n".join(rows)
    )
