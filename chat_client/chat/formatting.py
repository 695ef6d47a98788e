"""Lightweight markdown-to-HTML rendering for chat bubbles.

Inline markup (bold, italic, inline code) is applied to the raw text as-is.
Only fenced code blocks are HTML-escaped, so their contents are never
interpreted as markup.
"""

import re

_BOLD = re.compile(r"\*\*(.*?)\*\*")
_ITALIC = re.compile(r"\*(.*?)\*")
_INLINE_CODE = re.compile(r"`(.*?)`")
_FENCED = re.compile(r"```([\s\S]*?)```")

# & first, otherwise the entities inserted below would be escaped again.
_HTML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#039;"),
)


def escape_html(unsafe: str) -> str:
    for char, entity in _HTML_ESCAPES:
        unsafe = unsafe.replace(char, entity)
    return unsafe


def _clean_code(code: str) -> str:
    if code.startswith("\n"):
        code = code[1:]
    # The closing fence sits on its own line; that newline is not content.
    if code.endswith("\n"):
        code = code[:-1]
    return code


def _format_inline(text: str) -> str:
    text = _BOLD.sub(r"<strong>\1</strong>", text)
    text = _ITALIC.sub(r"<em>\1</em>", text)
    text = _INLINE_CODE.sub(r"<code>\1</code>", text)
    return text.replace("\n", "<br>")


def render(raw: str) -> str:
    out: list[str] = []
    pos = 0
    # Fenced blocks are cut out first so inline rules never see their contents.
    for match in _FENCED.finditer(raw):
        out.append(_format_inline(raw[pos:match.start()]))
        out.append(f"<pre><code>{escape_html(_clean_code(match.group(1)))}</code></pre>")
        pos = match.end()
    out.append(_format_inline(raw[pos:]))
    return "".join(out)
