from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import List, Sequence

from ..lexical.tokens import Token, TokenKind
from ..semantic.diagnostics import Diagnostic, Diagnostics

log = logging.getLogger(__name__)

_NAMES = {"(": "parenthesis", ")": "parenthesis", "{": "brace", "}": "brace"}


@dataclass
class SyntaxResult:
    """Mensajes de la pasada sintáctica; ``ok`` si no hubo ninguno."""
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def messages(self) -> List[str]:
        return [d.message for d in self.diagnostics]

    @property
    def ok(self) -> bool:
        return not self.diagnostics

    def report(self) -> str:
        return "\n".join(self.messages)


class SyntaxChecker:
    """Valida terminación de asignaciones y balance de delimitadores.

    Función pura del flujo de tokens: no lo modifica y siempre evalúa todas
    las reglas antes de devolver.
    """

    def check(self, tokens: Sequence[Token]) -> SyntaxResult:
        diag = Diagnostics()
        self._check_assignments(tokens, diag)
        self._check_delimiters(tokens, diag)
        log.debug("syntax pass over %d tokens: %d messages", len(tokens), len(diag))
        return SyntaxResult(diagnostics=diag.items())

    @staticmethod
    def _check_assignments(tokens: Sequence[Token], diag: Diagnostics) -> None:
        for i, tok in enumerate(tokens):
            if tok.kind is not TokenKind.ASSIGNMENT:
                continue
            found = False
            # la búsqueda del ';' no cruza a otra línea
            for nxt in tokens[i + 1:]:
                if nxt.line != tok.line:
                    break
                if nxt.is_punct(";"):
                    found = True
                    break
            if not found:
                diag.add(phase="syntax", code="S001",
                         message=f"Missing semicolon at or after assignment on line {tok.line}.",
                         line=tok.line)

    @staticmethod
    def _check_delimiters(tokens: Sequence[Token], diag: Diagnostics) -> None:
        depth = {"parenthesis": 0, "brace": 0}
        for tok in tokens:
            if tok.kind is not TokenKind.PUNCTUATION or tok.lexeme not in _NAMES:
                continue
            name = _NAMES[tok.lexeme]
            if tok.lexeme in "({":
                depth[name] += 1
            elif depth[name] == 0:
                # un cierre sobrante no deja el contador negativo
                diag.add(phase="syntax", code="S002",
                         message=f"Unmatched closing {name} at line {tok.line}.",
                         line=tok.line)
            else:
                depth[name] -= 1

        for name in ("parenthesis", "brace"):
            if depth[name] > 0:
                diag.add(phase="syntax", code="S003",
                         message=f"Unmatched opening {name}.", open=depth[name])


def check_syntax(tokens: Sequence[Token]) -> SyntaxResult:
    return SyntaxChecker().check(tokens)
