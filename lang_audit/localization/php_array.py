"""
Static reader for PHP translation files.

Laravel group files look like::

    <?php

    return [
        'welcome' => 'Welcome, :name',
        'menu' => [
            'home' => "Home",
        ],
    ];

Only the array literal after ``return`` is read. Nothing is executed: leaf
values that are not literals (constants, concatenations, function calls) are
kept as their raw source text, which is enough since only keys matter here.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

from ..errors import ResourceParseError

_TOKEN_RE = re.compile(
    r"""
      (?P<ws>\s+)
    | (?P<comment>//[^\n]*|\#(?!\[)[^\n]*|/\*.*?\*/)
    | (?P<attribute>\#\[)
    | (?P<open_tag><\?php|<\?=)
    | (?P<close_tag>\?>)
    | (?P<heredoc><<<[ \t]*(?P<hd_quote>["']?)(?P<hd_label>[A-Za-z_][A-Za-z0-9_]*)(?P=hd_quote)\r?\n(?:.*?\n)??[ \t]*(?P=hd_label)\b)
    | (?P<sq>'(?:[^'\\]|\\.)*')
    | (?P<dq>"(?:[^"\\]|\\.)*")
    | (?P<number>\d+(?:\.\d+)?(?:[eE][+-]?\d+)?)
    | (?P<arrow>=>)
    | (?P<name>\$?[A-Za-z_\\][A-Za-z0-9_\\]*)
    | (?P<punct>::|->|\?\?|[\[\](){},;.=?:+\-*/%&|!<>@^~])
    """,
    re.VERBOSE | re.DOTALL,
)

_DQ_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "v": "\v",
    "e": "\x1b",
    "f": "\f",
    "\\": "\\",
    "$": "$",
    '"': '"',
}

# Heredoc bodies keep \" as written
_HEREDOC_ESCAPES = {k: v for k, v in _DQ_ESCAPES.items() if k != '"'}

_HEREDOC_RE = re.compile(
    r"<<<[ \t]*([\"']?)(\w+)\1\r?\n(?:(.*?)\r?\n)??([ \t]*)\2\Z", re.DOTALL
)


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    line: int


@dataclass(frozen=True)
class Expression:
    """Leaf value that is not a plain literal, kept as source text."""

    source: str

    def __str__(self) -> str:
        return self.source


Scalar = Union[str, int, float, bool, None, Expression]


def _unquote_single(body: str) -> str:
    return re.sub(r"\\([\\'])", r"\1", body)


def _unquote_double(body: str, escapes: Dict[str, str] = _DQ_ESCAPES) -> str:
    def replace(match: "re.Match[str]") -> str:
        char = match.group(1)
        return escapes.get(char, "\\" + char)

    return re.sub(r"\\(.)", replace, body, flags=re.DOTALL)


def _unquote_heredoc(text: str) -> str:
    match = _HEREDOC_RE.match(text)
    if match is None:
        return text
    quote, _, body, indent = match.groups()
    lines = (body or "").split("\n")
    if indent:
        # The closing marker's indentation is removed from every line
        lines = [line[len(indent):] if line.startswith(indent) else line.lstrip(" \t") for line in lines]
    body = "\n".join(lines)
    if quote == "'":
        return body
    return _unquote_double(body, _HEREDOC_ESCAPES)


def tokenize(source: str, path: Optional[Path] = None) -> Iterator[Token]:
    """Yield significant tokens, dropping whitespace and comments."""
    pos = 0
    line = 1
    length = len(source)
    while pos < length:
        match = _TOKEN_RE.match(source, pos)
        if match is None:
            raise ResourceParseError(
                f"unexpected character {source[pos]!r}", path=path, line=line
            )
        kind = match.lastgroup or ""
        text = match.group()
        if kind not in ("ws", "comment", "open_tag"):
            yield Token(kind, text, line)
        line += text.count("\n")
        pos = match.end()


class PhpArrayParser:
    """Recursive-descent parser for the ``return [...]`` of a PHP file."""

    _CLOSERS = {"[": "]", "(": ")", "{": "}"}

    def __init__(self, source: str, path: Optional[Path] = None):
        self.path = path
        self.tokens: List[Token] = list(tokenize(source, path))
        self.pos = 0

    def parse(self) -> Dict[str, Any]:
        """Parse the returned array literal into a nested dict."""
        self._skip_to_return()
        value = self._parse_value()
        if not isinstance(value, dict):
            raise self._error("file does not return an array literal")
        return value

    def _error(self, message: str, token: Optional[Token] = None) -> ResourceParseError:
        token = token or self._peek()
        if token is None and self.tokens:
            token = self.tokens[-1]
        return ResourceParseError(message, path=self.path, line=token.line if token else None)

    def _peek(self) -> Optional[Token]:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def _advance(self) -> Token:
        token = self._peek()
        if token is None:
            raise self._error("unexpected end of file")
        self.pos += 1
        return token

    def _at(self, kind: str, text: Optional[str] = None) -> bool:
        token = self._peek()
        if token is None or token.kind != kind:
            return False
        return text is None or token.text.lower() == text

    def _skip_to_return(self) -> None:
        while self._peek() is not None:
            token = self._advance()
            if token.kind == "name" and token.text.lower() == "return":
                return
        raise self._error("no return statement found")

    def _parse_value(self) -> Union[Dict[str, Any], Scalar]:
        if self._at("punct", "["):
            self._advance()
            return self._parse_entries("]")
        if self._at("name", "array") and self._next_is("punct", "("):
            self._advance()
            self._advance()
            return self._parse_entries(")")
        return self._parse_scalar()

    def _next_is(self, kind: str, text: str) -> bool:
        index = self.pos + 1
        if index >= len(self.tokens):
            return False
        token = self.tokens[index]
        return token.kind == kind and token.text == text

    def _parse_entries(self, closer: str) -> Dict[str, Any]:
        entries: Dict[str, Any] = {}
        next_index = 0
        while True:
            if self._peek() is None:
                raise self._error(f"unterminated array, expected {closer!r}")
            if self._at("punct", closer):
                self._advance()
                return entries

            key_token = self._peek()
            first = self._parse_value()
            if self._at("arrow"):
                self._advance()
                key = self._array_key(first, key_token)
                value = self._parse_value()
            else:
                key = next_index
                value = first

            if isinstance(key, int):
                next_index = max(next_index, key + 1)
            entries[str(key)] = value

            if self._at("punct", ","):
                self._advance()
            elif not self._at("punct", closer):
                raise self._error(f"expected ',' or {closer!r}")

    def _array_key(self, value: Any, token: Optional[Token]) -> Union[str, int]:
        # PHP casts keys: bools and floats become ints, null becomes ""
        if isinstance(value, dict):
            raise self._error("array used as array key", token)
        if isinstance(value, Expression):
            raise self._error(f"unsupported array key expression {value.source!r}", token)
        if isinstance(value, bool):
            return int(value)
        if isinstance(value, float):
            return int(value)
        if value is None:
            return ""
        if isinstance(value, str) and re.fullmatch(r"-?[1-9][0-9]*|0", value):
            return int(value)
        return value

    def _parse_scalar(self) -> Scalar:
        start = self.pos
        parts: List[Token] = []
        stack: List[str] = []
        # Each `fn (...) =>` owns the next top-level arrow
        arrow_fns = 0
        while True:
            token = self._peek()
            if token is None:
                break
            if not stack:
                if token.kind == "name" and token.text.lower() == "fn":
                    arrow_fns += 1
                elif token.kind == "arrow":
                    if not arrow_fns:
                        break
                    arrow_fns -= 1
                if token.kind == "punct" and token.text in (",", ";", "]", ")", "}"):
                    break
            if token.kind == "punct" and token.text in self._CLOSERS:
                stack.append(self._CLOSERS[token.text])
            elif token.kind == "punct" and stack and token.text == stack[-1]:
                stack.pop()
            parts.append(self._advance())

        if not parts:
            raise self._error("expected a value")
        if len(parts) == 1:
            return self._literal(parts[0])
        if len(parts) == 2 and parts[0].text == "-" and parts[1].kind == "number":
            return -self._number(parts[1].text)
        return Expression(" ".join(t.text for t in self.tokens[start:self.pos]))

    def _literal(self, token: Token) -> Scalar:
        if token.kind == "sq":
            return _unquote_single(token.text[1:-1])
        if token.kind == "dq":
            return _unquote_double(token.text[1:-1])
        if token.kind == "heredoc":
            return _unquote_heredoc(token.text)
        if token.kind == "number":
            return self._number(token.text)
        if token.kind == "name":
            lowered = token.text.lower()
            if lowered == "true":
                return True
            if lowered == "false":
                return False
            if lowered == "null":
                return None
        return Expression(token.text)

    @staticmethod
    def _number(text: str) -> Union[int, float]:
        if re.fullmatch(r"\d+", text):
            return int(text)
        return float(text)


def loads(source: str, path: Optional[Path] = None) -> Dict[str, Any]:
    """Parse PHP source that returns an array literal."""
    # A byte-order mark before <?php is inline output, not code
    if source.startswith("\ufeff"):
        source = source[1:]
    return PhpArrayParser(source, path).parse()


def load(path: Path) -> Dict[str, Any]:
    """Read and parse a PHP translation file."""
    return loads(path.read_text(encoding="utf-8-sig"), path)
