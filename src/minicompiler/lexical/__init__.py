"""
Análisis léxico: tokens, palabras reservadas y el lexer por líneas.
"""

from .tokens import Token, TokenKind, KEYWORDS, OPERATORS, PUNCTUATION
from .lexer import (
    Lexer,
    LexicalError,
    LineResult,
    DocumentResult,
    tokenize,
    tokenize_document,
)

__all__ = [
    'Token',
    'TokenKind',
    'KEYWORDS',
    'OPERATORS',
    'PUNCTUATION',
    'Lexer',
    'LexicalError',
    'LineResult',
    'DocumentResult',
    'tokenize',
    'tokenize_document',
]
