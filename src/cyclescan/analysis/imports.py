"""
Import specifier extraction for JavaScript/TypeScript-family sources.

Extraction is textual. Comments are blanked out first (string and template
literals are skipped over while doing so, so ``"http://x"`` survives), then
statement patterns are matched over the whole text so multi-line
``import { a,\n b } from './x'`` forms are found. Only relative specifiers
(``./`` and ``../``) are returned; bare package names are ignored.

Recognised forms::

    import x from './a'            import './side-effect'
    import { a, b } from './a'     import type { T } from './types'
    import * as ns from './a'      export { a } from './a'
    export * from './a'            const a = require('./a')
    const m = await import('./a')
"""

from __future__ import annotations

import regex

# import ... from '...', export ... from '...'
_FROM_RE = regex.compile(
    r"""(?<![\w$.])(?:import|export)\b(?:\s+type\b)?[^;'"`=()]*?\bfrom\s*(['"])([^'"\n]+)\1""",
    regex.MULTILINE,
)
# import '...'
_SIDE_EFFECT_RE = regex.compile(r"""(?<![\w$.])import\s*(['"])([^'"\n]+)\1""")
# require('...'), import('...')
_CALL_RE = regex.compile(r"""(?<![\w$.])(?:require|import)\s*\(\s*(['"`])([^'"`\n]+)\1\s*\)""")

_STRING_QUOTES = "'\"`"


def strip_comments(text: str) -> str:
    """
    Replace ``//`` and ``/* */`` comments with spaces, keeping offsets and
    newlines. String and template literals are copied through untouched.
    """
    out: list[str] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        nxt = text[i + 1] if i + 1 < n else ""
        if ch in _STRING_QUOTES:
            j = i + 1
            while j < n and text[j] != ch:
                if text[j] == "\\":
                    j += 1
                elif text[j] == "\n" and ch != "`":
                    break  # unterminated literal
                j += 1
            out.append(text[i : j + 1])
            i = j + 1
        elif ch == "/" and nxt == "/":
            j = text.find("\n", i)
            if j == -1:
                j = n
            out.append(" " * (j - i))
            i = j
        elif ch == "/" and nxt == "*":
            j = text.find("*/", i + 2)
            j = n if j == -1 else j + 2
            out.append("".join(c if c == "\n" else " " for c in text[i:j]))
            i = j
        else:
            out.append(ch)
            i += 1
    return "".join(out)


def _blank_literals(text: str) -> str:
    """Blank the contents of every string literal, keeping the quotes and offsets."""
    out = list(text)
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch in _STRING_QUOTES:
            j = i + 1
            while j < n and text[j] != ch:
                if text[j] == "\\":
                    j += 1
                elif text[j] == "\n" and ch != "`":
                    break
                j += 1
            for k in range(i + 1, min(j, n)):
                if out[k] != "\n":
                    out[k] = " "
            i = j + 1
        else:
            i += 1
    return "".join(out)


def is_relative_specifier(specifier: str) -> bool:
    return specifier in (".", "..") or specifier.startswith(("./", "../"))


def extract_specifiers(text: str, relative_only: bool = True) -> list[str]:
    """
    Return import specifiers in order of appearance.

    Args:
        text: Raw file content
        relative_only: Drop specifiers that do not start with ``./`` or ``../``

    Returns:
        Specifiers in source order; a specifier imported twice appears twice
    """
    code = strip_comments(text)
    # a keyword only counts when it sits outside every literal
    skeleton = _blank_literals(code)

    found: list[tuple[int, str]] = []
    for pattern in (_FROM_RE, _SIDE_EFFECT_RE, _CALL_RE):
        for m in pattern.finditer(code):
            if skeleton[m.start()] == " " and code[m.start()] != " ":
                continue
            found.append((m.start(), m.group(2).strip()))

    found.sort(key=lambda item: item[0])
    specifiers = [spec for _, spec in found]
    if relative_only:
        specifiers = [spec for spec in specifiers if is_relative_specifier(spec)]
    return specifiers
