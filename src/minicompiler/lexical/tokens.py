from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum


class TokenKind(Enum):
    KEYWORD = "Keyword"
    IDENTIFIER = "Identifier"
    NUMBER = "Number"
    STRING = "String"
    OPERATOR = "Operator"
    ASSIGNMENT = "Assignment"
    PUNCTUATION = "Punctuation"

    def __str__(self) -> str:
        return self.value


# Palabras reservadas del lenguaje (contrato fijo de la gramática)
KEYWORDS = frozenset({
    "int", "float", "double",
    "if", "else", "while", "for", "return",
    "void", "String",
})

# Operadores en orden de prioridad: los de dos caracteres antes que sus prefijos
OPERATORS = ("==", "!=", "<=", ">=", "=", "+", "-", "*", "/", "<", ">")

PUNCTUATION = frozenset("(){};,")


@dataclass(frozen=True)
class Token:
    """Unidad léxica clasificada: tipo, texto literal y línea de origen.

    ``column`` (base 1) es informativa: no participa en la igualdad.
    """
    kind: TokenKind
    lexeme: str
    line: int
    column: int = field(default=0, compare=False)

    def is_punct(self, text: str) -> bool:
        return self.kind is TokenKind.PUNCTUATION and self.lexeme == text

    def __str__(self) -> str:
        # listado de consola: etiqueta en mayúsculas; las tablas usan kind.value
        return f"[{self.kind.name}] {self.lexeme}"
