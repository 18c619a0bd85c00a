"""Text conversion for message bodies.

Feed descriptions arrive as HTML; cards want Markdown, Telegram wants its
legacy Markdown dialect, and SMS wants plain text.
"""

from __future__ import annotations

import html
import re

ELLIPSIS = "…"

_BREAK_RE = re.compile(r"<\s*br\s*/?\s*>", re.IGNORECASE)
_BLOCK_END_RE = re.compile(r"<\s*/\s*(?:p|div|h[1-6]|ul|ol|blockquote)\s*>", re.IGNORECASE)
_LIST_ITEM_RE = re.compile(r"<\s*li(?:\s[^<>]*)?>", re.IGNORECASE)
# Inner text never spans another opening tag of the same kind.
_LINK_RE = re.compile(
    r"<\s*a\s[^<>]*?href\s*=\s*[\"']([^\"'<>]*)[\"'][^<>]*>"
    r"((?:(?!<\s*a[\s>]).)*?)<\s*/\s*a\s*>",
    re.IGNORECASE | re.DOTALL,
)
_BOLD_RE = re.compile(
    r"<\s*(b|strong)\s*>((?:(?!<\s*(?:b|strong)\s*>).)*?)<\s*/\s*\1\s*>",
    re.IGNORECASE | re.DOTALL,
)
_ITALIC_RE = re.compile(
    r"<\s*(i|em)\s*>((?:(?!<\s*(?:i|em)\s*>).)*?)<\s*/\s*\1\s*>",
    re.IGNORECASE | re.DOTALL,
)
# A tag needs a name right after "<"; "3 < 5" and "<3" are text.
_TAG_RE = re.compile(r"</?[A-Za-z!][^<>]*>")


def _link(m: re.Match) -> str:
    href, label = m.group(1).strip(), _TAG_RE.sub("", m.group(2)).strip()
    if not href:
        return label
    if not label or label == href:
        return href
    return f"[{label}]({href})"


def truncate(text: str, max_length: int) -> str:
    """Clip *text* to at most *max_length* characters, marking the cut."""
    if len(text) <= max_length:
        return text
    if max_length <= len(ELLIPSIS):
        return text[:max_length]
    return text[: max_length - len(ELLIPSIS)].rstrip() + ELLIPSIS


def html_to_markdown(raw: str, max_length: int) -> str:
    """Convert feed HTML to Markdown no longer than *max_length* characters."""
    text = raw or ""
    text = _BREAK_RE.sub("\n", text)
    text = _BLOCK_END_RE.sub("\n", text)
    text = _LIST_ITEM_RE.sub("\n- ", text)
    text = _LINK_RE.sub(_link, text)
    text = _BOLD_RE.sub(r"**\2**", text)
    text = _ITALIC_RE.sub(r"*\2*", text)
    text = _TAG_RE.sub("", text)
    text = html.unescape(text)
    text = re.sub(r"[ \t\r\f\v\xa0]+", " ", text)
    text = re.sub(r" *\n *", "\n", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return truncate(text.strip(), max_length)


def markdown_to_telegram(text: str) -> str:
    """Convert standard Markdown to Telegram legacy Markdown."""
    placeholders: list[str] = []

    def _stash(m: re.Match) -> str:
        idx = len(placeholders)
        placeholders.append(m.group(0))
        return f"\x00PH{idx}\x00"

    text = re.sub(r"`([^`\n]+)`", _stash, text)
    text = re.sub(r"\[([^\]]+)\]\(([^)]+)\)", _stash, text)
    text = re.sub(r"\*\*(.+?)\*\*", r"*\1*", text)
    text = re.sub(r"__(.+?)__", r"*\1*", text)
    text = re.sub(r"~~(.+?)~~", r"\1", text)

    for idx, original in enumerate(placeholders):
        text = text.replace(f"\x00PH{idx}\x00", original, 1)

    return text.strip()


def strip_markdown(text: str) -> str:
    """Strip Markdown formatting to produce clean plain text."""
    text = re.sub(r"\*\*(.+?)\*\*", r"\1", text)
    text = re.sub(r"__(.+?)__", r"\1", text)
    text = re.sub(r"(?<!\w)\*([^*\n]+?)\*(?!\w)", r"\1", text)
    text = re.sub(r"(?<!\w)_([^_\n]+?)_(?!\w)", r"\1", text)
    text = re.sub(r"~~(.+?)~~", r"\1", text)
    text = re.sub(r"`([^`\n]+)`", r"\1", text)
    text = re.sub(r"\[([^\]]+)\]\(([^)]+)\)", r"\1 (\2)", text)
    return text.strip()
