from __future__ import annotations
import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional

from .tokens import KEYWORDS, OPERATORS, Token, TokenKind

log = logging.getLogger(__name__)


class LexicalError(Exception):
    """Texto no reconocido dentro de una línea."""

    def __init__(self, message: str, line: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.line = line


# Cada alternativa tiene nombre: la clasificación se hace por el grupo que
# coincidió, nunca por índices posicionales.
_TOKEN_RE = re.compile(
    "|".join([
        r'(?P<string>".*?")',
        r"(?P<identifier>[A-Za-z_][A-Za-z0-9_]*)",
        r"(?P<number>[0-9]+(?:\.[0-9]+)?)",
        "(?P<operator>" + "|".join(re.escape(op) for op in OPERATORS) + ")",
        r"(?P<punctuation>[(){};,])",
    ])
)


def _classify(group: str, text: str) -> TokenKind:
    if group == "string":
        return TokenKind.STRING
    if group == "identifier":
        return TokenKind.KEYWORD if text in KEYWORDS else TokenKind.IDENTIFIER
    if group == "number":
        return TokenKind.NUMBER
    if group == "operator":
        return TokenKind.ASSIGNMENT if text == "=" else TokenKind.OPERATOR
    return TokenKind.PUNCTUATION


def _unrecognized(skipped: str, line: int) -> LexicalError:
    return LexicalError(f"Unrecognized token near: '{skipped}'", line)


def tokenize(text: str, line: int = 1) -> List[Token]:
    """Tokeniza una sola línea de código fuente.

    Los huecos de solo espacios se ignoran. Cualquier otro texto entre dos
    coincidencias (o al final de la línea) aborta la línea con
    :class:`LexicalError`.
    """
    tokens: List[Token] = []
    cursor = 0
    for m in _TOKEN_RE.finditer(text):
        skipped = text[cursor:m.start()].strip()
        if skipped:
            raise _unrecognized(skipped, line)
        lexeme = m.group(0)
        tokens.append(Token(_classify(m.lastgroup, lexeme), lexeme, line, m.start() + 1))
        cursor = m.end()

    trailing = text[cursor:].strip()
    if trailing:
        raise _unrecognized(trailing, line)
    return tokens


@dataclass
class LineResult:
    """Resultado léxico de una línea: sus tokens o el error que la invalidó."""
    line: int
    text: str
    tokens: List[Token] = field(default_factory=list)
    error: Optional[LexicalError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class DocumentResult:
    lines: List[LineResult] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(r.ok for r in self.lines)

    @property
    def errors(self) -> List[LineResult]:
        return [r for r in self.lines if not r.ok]

    @property
    def tokens(self) -> List[Token]:
        # Flujo completo en orden de fuente; las líneas fallidas no aportan tokens
        return [t for r in self.lines if r.ok for t in r.tokens]

    @property
    def is_blank(self) -> bool:
        return all(not r.text.strip() for r in self.lines)


def tokenize_document(text: str) -> DocumentResult:
    result = DocumentResult()
    # split sin recortar: un salto final produce una última línea vacía
    for number, line_text in enumerate(text.split("\n"), 1):
        try:
            result.lines.append(LineResult(number, line_text, tokenize(line_text, number)))
        except LexicalError as e:
            log.debug("line %d rejected: %s", number, e.message)
            result.lines.append(LineResult(number, line_text, error=e))
    log.debug("tokenized %d lines, %d tokens, %d errors",
              len(result.lines), len(result.tokens), len(result.errors))
    return result


class Lexer:
    """Fachada orientada a objetos sobre :func:`tokenize` y :func:`tokenize_document`."""

    def tokenize(self, text: str, line: int = 1) -> List[Token]:
        return tokenize(text, line)

    def tokenize_document(self, text: str) -> DocumentResult:
        return tokenize_document(text)
