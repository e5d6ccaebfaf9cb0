"""Parser for the issue query language.

Grammar, lowest precedence first::

    expr      := or_expr
    or_expr   := and_expr ( "OR" and_expr )*
    and_expr  := not_expr ( "AND"? not_expr )*
    not_expr  := "NOT" not_expr | atom
    atom      := "(" expr ")" | predicate
    predicate := "label:" token | "milestone:" token | "assignee:" token
               | "is:issue" | "is:pr" | "is:open" | "is:closed"

Two adjacent operands without an operator are AND'ed, so
``label:bug is:open`` means ``label:bug AND is:open``. Keywords and
predicate keys are case-insensitive; label, milestone and assignee names
are matched exactly.
"""

from dataclasses import dataclass
from typing import Literal

from .expressions import (
    And,
    Assignee,
    Expression,
    IsIssue,
    IsOpen,
    Label,
    Milestone,
    Not,
    Or,
)

_KEYWORDS = ("AND", "OR", "NOT")

_IS_VALUES: dict[str, Expression] = {
    "issue": IsIssue(True),
    "pr": IsIssue(False),
    "open": IsOpen(True),
    "closed": IsOpen(False),
}


class QueryParseError(ValueError):
    """Raised when query text cannot be parsed.

    Attributes:
        position: 0-based character offset of the offending text
        text: The full query text
    """

    def __init__(self, message: str, position: int, text: str):
        super().__init__(f"{message} (at position {position})")
        self.message = message
        self.position = position
        self.text = text

    @property
    def line_number(self) -> int:
        """1-based number of the line holding ``position``."""
        return self.text.count("\n", 0, self.position) + 1

    @property
    def column(self) -> int:
        """0-based offset of ``position`` within its line."""
        return self.position - (self.text.rfind("\n", 0, self.position) + 1)

    @property
    def line(self) -> str:
        """The line of query text holding ``position``."""
        start = self.text.rfind("\n", 0, self.position) + 1
        end = self.text.find("\n", self.position)
        return self.text[start:] if end < 0 else self.text[start:end]


@dataclass(frozen=True)
class _Token:
    kind: Literal["lparen", "rparen", "keyword", "predicate"]
    position: int
    value: str = ""
    key: str = ""


class _Tokenizer:
    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def tokens(self) -> list[_Token]:
        result = []
        while True:
            self._skip_whitespace()
            if self.pos >= len(self.text):
                return result
            ch = self.text[self.pos]
            if ch == "(":
                result.append(_Token("lparen", self.pos))
                self.pos += 1
            elif ch == ")":
                result.append(_Token("rparen", self.pos))
                self.pos += 1
            else:
                result.append(self._word())

    def _skip_whitespace(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def _bareword_end(self, start: int) -> int:
        end = start
        while end < len(self.text) and not (
            self.text[end].isspace() or self.text[end] == ")"
        ):
            end += 1
        return end

    def _word(self) -> _Token:
        start = self.pos
        end = self._bareword_end(start)
        word = self.text[start:end]
        paren = word.find("(")
        if paren > 0 and word[:paren].upper() in _KEYWORDS:
            # NOT(label:a) ends the keyword at its opening parenthesis
            self.pos = start + paren
            return _Token("keyword", start, word[:paren].upper())
        colon = word.find(":")
        if colon < 0 or word.startswith('"'):
            self.pos = end
            if word.upper() in _KEYWORDS:
                return _Token("keyword", start, word.upper())
            raise QueryParseError(f"Unexpected term '{word}'", start, self.text)

        key = word[:colon].lower()
        if key not in ("label", "milestone", "assignee", "is"):
            raise QueryParseError(f"Unknown predicate '{word[:colon]}:'", start, self.text)

        value_start = start + colon + 1
        value, self.pos = self._value(value_start)
        if key == "is" and value.lower() not in _IS_VALUES:
            raise QueryParseError(f"Unknown qualifier 'is:{value}'", start, self.text)
        return _Token("predicate", start, value, key)

    def _value(self, start: int) -> tuple[str, int]:
        if start < len(self.text) and self.text[start] == '"':
            return self._quoted(start)
        end = self._bareword_end(start)
        if end == start:
            raise QueryParseError("Missing value after ':'", start, self.text)
        return self.text[start:end], end

    def _quoted(self, start: int) -> tuple[str, int]:
        # \" and \\ are escapes; any other backslash is literal
        chars = []
        pos = start + 1
        while pos < len(self.text):
            ch = self.text[pos]
            if ch == '"':
                if not chars:
                    raise QueryParseError("Empty quoted value", start, self.text)
                return "".join(chars), pos + 1
            if ch == "\\" and self.text[pos + 1 : pos + 2] in ('"', "\\"):
                pos += 1
                ch = self.text[pos]
            chars.append(ch)
            pos += 1
        raise QueryParseError("Unterminated quoted value", start, self.text)


class _Parser:
    def __init__(self, text: str):
        self.text = text
        self.tokens = _Tokenizer(text).tokens()
        self.index = 0

    def _peek(self) -> _Token | None:
        if self.index < len(self.tokens):
            return self.tokens[self.index]
        return None

    def _is_keyword(self, token: _Token | None, keyword: str) -> bool:
        return token is not None and token.kind == "keyword" and token.value == keyword

    def _starts_operand(self, token: _Token | None) -> bool:
        if token is None:
            return False
        return (
            token.kind in ("lparen", "predicate")
            or self._is_keyword(token, "NOT")
        )

    def _error_here(self, message: str) -> QueryParseError:
        token = self._peek()
        position = token.position if token else len(self.text)
        return QueryParseError(message, position, self.text)

    def parse(self) -> Expression:
        expression = self._or_expr()
        token = self._peek()
        if token is not None:
            if token.kind == "rparen":
                raise self._error_here("Unmatched ')'")
            raise self._error_here("Unexpected text after end of query")
        return expression

    def _or_expr(self) -> Expression:
        children = [self._and_expr()]
        while self._is_keyword(self._peek(), "OR"):
            self.index += 1
            children.append(self._and_expr())
        return children[0] if len(children) == 1 else Or(tuple(children))

    def _and_expr(self) -> Expression:
        children = [self._not_expr()]
        while True:
            token = self._peek()
            if self._is_keyword(token, "AND"):
                self.index += 1
            elif not self._starts_operand(token):
                break
            children.append(self._not_expr())
        return children[0] if len(children) == 1 else And(tuple(children))

    def _not_expr(self) -> Expression:
        if self._is_keyword(self._peek(), "NOT"):
            self.index += 1
            return Not(self._not_expr())
        return self._atom()

    def _atom(self) -> Expression:
        token = self._peek()
        if token is None:
            raise self._error_here("Expected a predicate or '('")
        if token.kind == "lparen":
            self.index += 1
            expression = self._or_expr()
            closing = self._peek()
            if closing is None or closing.kind != "rparen":
                raise QueryParseError("Unmatched '('", token.position, self.text)
            self.index += 1
            return expression
        if token.kind == "predicate":
            self.index += 1
            return _predicate(token)
        raise self._error_here("Expected a predicate or '('")


def _predicate(token: _Token) -> Expression:
    if token.key == "label":
        return Label(token.value)
    if token.key == "milestone":
        return Milestone(token.value)
    if token.key == "assignee":
        return Assignee(token.value)
    return _IS_VALUES[token.value.lower()]


def parse_query(text: str) -> Expression:
    """Parse query text into an expression tree.

    Args:
        text: Query text, single or multi-line

    Returns:
        The parsed expression

    Raises:
        QueryParseError: If the text is empty or malformed

    Example:
        >>> parse_query("label:bug AND is:open")
        And(children=(Label(name='bug'), IsOpen(want_open=True)))
    """
    return _Parser(text).parse()
