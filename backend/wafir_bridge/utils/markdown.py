"""
Lightweight markdown renderer for form descriptions and markdown fields.

Supports headings, bold, italic, links, lists, fenced code blocks and inline
code. Input is HTML-escaped before any markup is produced.
"""

from __future__ import annotations

import html
import re
from typing import List

_FENCED_CODE_RE = re.compile(r"```(\w*)\n(.*?)```", re.S)
_INLINE_CODE_RE = re.compile(r"`([^`\n]+)`")
_HEADING_RE = re.compile(r"^(#{1,6})\s+(.+)$", re.M)
_BULLET_RE = re.compile(r"^[*-]\s+(.+)$")
_NUMBERED_RE = re.compile(r"^\d+\.\s+(.+)$")
_BOLD_RE = re.compile(r"\*\*(.+?)\*\*|__(.+?)__")
_ITALIC_RE = re.compile(r"\*(.+?)\*|(?<!\w)_(.+?)_(?!\w)")
_LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)\s]+)\)")
_PLACEHOLDER_RE = re.compile("\x00(\\d+)\x00")


def _group_lists(text: str) -> str:
    out: List[str] = []
    items: List[str] = []
    tag = None

    def flush() -> None:
        nonlocal tag
        if tag:
            out.append(f"<{tag}>{''.join(items)}</{tag}>")
        items.clear()
        tag = None

    for line in text.split("\n"):
        bullet = _BULLET_RE.match(line)
        numbered = None if bullet else _NUMBERED_RE.match(line)
        match = bullet or numbered
        if match is None:
            flush()
            out.append(line)
            continue

        line_tag = "ul" if bullet else "ol"
        if tag != line_tag:
            flush()
            tag = line_tag
        items.append(f"<li>{match.group(1)}</li>")

    flush()
    return "\n".join(out)


def parse_markdown(markdown: str) -> str:
    if not markdown:
        return ""

    text = html.escape(markdown)

    # Code is stashed so inline formatting never touches it.
    code: List[str] = []

    def stash(fragment: str) -> str:
        code.append(fragment)
        return f"\x00{len(code) - 1}\x00"

    def fenced(match: re.Match) -> str:
        lang = match.group(1)
        attrs = f' class="language-{lang}"' if lang else ""
        return stash(f"<pre><code{attrs}>{match.group(2).strip()}</code></pre>")

    text = _FENCED_CODE_RE.sub(fenced, text)
    text = _INLINE_CODE_RE.sub(lambda m: stash(f"<code>{m.group(1)}</code>"), text)

    text = _HEADING_RE.sub(
        lambda m: f"<h{len(m.group(1))}>{m.group(2)}</h{len(m.group(1))}>", text
    )
    text = _group_lists(text)
    text = _BOLD_RE.sub(lambda m: f"<strong>{m.group(1) or m.group(2)}</strong>", text)
    text = _ITALIC_RE.sub(lambda m: f"<em>{m.group(1) or m.group(2)}</em>", text)
    text = _LINK_RE.sub(r'<a href="\2">\1</a>', text)
    text = text.replace("\n\n", "<br><br>")

    return _PLACEHOLDER_RE.sub(lambda m: code[int(m.group(1))], text)
