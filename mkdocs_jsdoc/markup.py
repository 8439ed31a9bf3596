"""
Doc-comment text to HTML conversion.

Supports only the small syntax JSDoc descriptions use in practice:
triple-backtick fences, inline backticks, blank-line separated paragraphs and
``{@link target|label}`` directives. Fenced code is split out by a tokenizer
first so paragraph wrapping never reaches into code.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from enum import Enum, auto

log = logging.getLogger("mkdocs.plugins.jsdoc")

FENCE = "```"

_FENCED_CODE_RE = re.compile(r"(```\s*)([\s\S]*?)(\s*```)")
_INLINE_CODE_RE = re.compile(r"(`)(.*?)(`)")
_PARAGRAPH_BREAK_RE = re.compile(r"[\r\n]{2,}")
_LINK_RE = re.compile(r"\{@link +([^}]*?)\}")
_LEADING_JUNK_RE = re.compile(r"^[\s\-\u2014]*")
_INDENT_RE = re.compile(r"^ *")


class ParseOptions:
    def __init__(self, *, keep_if_single=False, target=""):
        self.keep_if_single = keep_if_single
        self.target = target


def _options(options):
    if options is None:
        return ParseOptions()
    if isinstance(options, Mapping):
        return ParseOptions(
            keep_if_single=bool(options.get("keep_if_single", False)),
            target=options.get("target") or "",
        )
    return options


def _identity(block, is_code):
    return block


# ── Tokenizer ──


class _State(Enum):
    PROSE = auto()
    CODE = auto()


def tokenize(string, callback=None):
    """Split *string* into prose and fenced-code blocks.

    Returns ``[callback(block, is_code), ...]`` in source order. Code blocks
    keep their opening and closing fences. Text left over at the end of the
    input is emitted as a last block in whatever state the scanner is in, so
    an unterminated fence comes out as a code block.
    """
    if callback is None:
        callback = _identity
    if FENCE not in string:
        return [callback(string, False)]

    width = len(FENCE)
    blocks = []
    state = _State.PROSE
    window = ""
    start = 0
    for i, ch in enumerate(string):
        window = (window + ch)[-width:]
        if window != FENCE:
            continue
        end = i + 1
        if state is _State.PROSE:
            blocks.append(callback(string[start : end - width], False))
            start = end - width
            state = _State.CODE
            window = ""
        else:
            blocks.append(callback(string[start:end], True))
            start = end
            state = _State.PROSE
            window = ""

    if start < len(string):
        if state is _State.CODE:
            log.debug("jsdoc: unterminated code fence at offset %d", start)
        blocks.append(callback(string[start:], state is _State.CODE))
    return blocks


_tokenize = tokenize


# ── Converters ──


def _wrap_escape_code(code, pre=False):
    code = code.replace("<", "&lt;").replace(">", "&gt;")
    code = f"<code>{code}</code>"
    return f"<pre>{code}</pre>" if pre else code


def trim_left(string):
    """Remove leading whitespace and dashes, e.g. ``"- Current date."``."""
    return _LEADING_JUNK_RE.sub("", string, count=1)


def normalize_tabs(string):
    """Normalize the indentation of a code block or example.

    Tabs become two spaces, the common indent of all lines but the first is
    removed, the first line is left-stripped and whatever indent remains is
    rounded down to a multiple of two.
    """
    lines = string.replace("\t", "  ").split("\n")
    rest = lines[1:]

    indents = [len(ln) - len(ln.lstrip(" ")) for ln in rest if ln.strip()]
    common = min(indents) if indents else 0

    out = [lines[0].lstrip()]
    for line in rest:
        line = line[min(common, len(line) - len(line.lstrip(" "))) :]
        indent = len(_INDENT_RE.match(line).group(0))
        out.append(" " * (indent - indent % 2) + line[indent:])
    return "\n".join(out)


def parse_ticks(string):
    """Convert fenced blocks to ``<pre><code>`` and backtick spans to ``<code>``."""

    def fenced(m):
        code = _wrap_escape_code(m.group(2), pre=True).replace("`", "&#x60;")
        return normalize_tabs(code)

    string = _FENCED_CODE_RE.sub(fenced, string)
    return _INLINE_CODE_RE.sub(lambda m: _wrap_escape_code(m.group(2)), string)


def parse_new_lines(string, options=None):
    """Wrap blank-line separated prose in ``<p>`` tags, leaving code alone."""
    opts = _options(options)

    def paragraphs(block, is_code):
        if is_code:
            return block
        parts = _PARAGRAPH_BREAK_RE.split(block)
        if len(parts) <= 1 and opts.keep_if_single:
            return block
        return "".join(f"<p>{part}</p>" for part in parts)

    return "".join(tokenize(string, paragraphs))


def parse_links(string, options=None):
    """Turn ``{@link target}`` / ``{@link target|label}`` into anchors."""
    opts = _options(options)
    target = f' target="{opts.target}"' if opts.target else ""

    def anchor(m):
        parts = m.group(1).split("|")
        link = parts[0].strip()
        label = parts[1].strip() if len(parts) > 1 else link
        return f'<a href="{link}"{target}>{label}</a>'

    return parse_ticks(_LINK_RE.sub(anchor, string))


def parse(string, options=None):
    """Render a JSDoc description as an HTML fragment."""
    opts = _options(options)
    string = trim_left(string)
    string = parse_new_lines(string, opts)
    string = parse_ticks(string)
    return parse_links(string, opts)


# ── Type lists ──


def list_type(names):
    return ", ".join(_wrap_escape_code(name) for name in names)


def list_type_desc(items):
    """Render ``@param``/``@returns``-style entries: type plus description."""
    if not items:
        return ""
    entries = []
    for item in items:
        names = (item.get("type") or {}).get("names") or []
        desc = parse(item.get("description") or "", ParseOptions(keep_if_single=True))
        if desc:
            desc = "&nbsp;&nbsp;&mdash;&nbsp;&nbsp;" + desc
        entries.append(_wrap_escape_code("|".join(names)) + desc)
    if len(entries) == 1:
        return entries[0]
    return "<ul>\n" + "\n".join(f"<li>{e}</li>" for e in entries) + "\n</ul>"
