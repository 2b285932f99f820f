"""
taqvim.format.pattern
---------------------
Compiles a pattern string into an immutable token sequence.

Tokens are matched longest first at each position, so "MMMM" is never read as
two "MM". Text in single quotes is literal ('' is an escaped quote); any other
character that does not start a token is literal as well.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Literal, Optional, Tuple

FIELD_TOKENS = (
    "yyyy", "yy",
    "MMMM", "MMM", "MM", "M",
    "dddd", "DDDD", "ddd", "dd", "d",
    "HH", "hh", "H", "h",
    "mm", "m",
    "ss", "s",
    "a", "A",
)
TIME_TOKENS = frozenset({"HH", "hh", "H", "h", "mm", "m", "ss", "s", "a", "A"})

_TOKEN_RE = re.compile("'(?:[^']|'')*'|" + "|".join(FIELD_TOKENS))


@dataclass(frozen=True)
class Token:
    kind: Literal["field", "literal"]
    text: str  # token code for fields, the literal text otherwise

    @property
    def is_field(self) -> bool:
        return self.kind == "field"

    @property
    def is_time(self) -> bool:
        return self.kind == "field" and self.text in TIME_TOKENS


@dataclass(frozen=True)
class Pattern:
    source: str
    tokens: Tuple[Token, ...]

    @property
    def fields(self) -> Tuple[str, ...]:
        return tuple(t.text for t in self.tokens if t.is_field)

    def split_date_time(self) -> Optional[Tuple["Pattern", "Pattern", "Pattern"]]:
        """
        (head, separator, tail) when the fields form one date run and one time
        run (either order); None otherwise. Literals before the first field go
        with head, literals after the last field go with tail.
        """
        idx = [i for i, t in enumerate(self.tokens) if t.is_field]
        changes = [k for k in range(1, len(idx)) if self.tokens[idx[k]].is_time != self.tokens[idx[k - 1]].is_time]
        if len(changes) != 1:
            return None
        i, j = idx[changes[0] - 1], idx[changes[0]]
        return (self._sub(0, i + 1), self._sub(i + 1, j), self._sub(j, len(self.tokens)))

    def _sub(self, a: int, b: int) -> "Pattern":
        toks = self.tokens[a:b]
        return Pattern(render(toks), toks)


def _literal(out: List[Token], text: str) -> None:
    if out and out[-1].kind == "literal":
        out[-1] = Token("literal", out[-1].text + text)
    else:
        out.append(Token("literal", text))


@lru_cache(maxsize=256)
def compile_pattern(source: str) -> Pattern:
    out: List[Token] = []
    pos = 0
    while pos < len(source):
        m = _TOKEN_RE.match(source, pos)
        if m:
            text = m.group(0)
            if text.startswith("'"):
                _literal(out, "'" if text == "''" else text[1:-1].replace("''", "'"))
            else:
                out.append(Token("field", text))
            pos = m.end()
        elif source[pos] == "'":
            raise ValueError(f"Unterminated quote in pattern {source!r}")
        else:
            _literal(out, source[pos])
            pos += 1
    return Pattern(source, tuple(out))


def render(tokens: Tuple[Token, ...]) -> str:
    """Token sequence -> equivalent pattern source (literals quoted when needed)."""
    parts = []
    for t in tokens:
        if t.is_field:
            parts.append(t.text)
        elif _TOKEN_RE.search(t.text.replace("'", "")) or "'" in t.text:
            parts.append("'" + t.text.replace("'", "''") + "'")
        else:
            parts.append(t.text)
    return "".join(parts)
