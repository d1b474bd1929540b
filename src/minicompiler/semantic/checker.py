# semantic/checker.py
from __future__ import annotations
import logging
from typing import List, Optional, Sequence

from ..lexical.tokens import Token, TokenKind
from .diagnostics import Diagnostics
from .symbol_table import SymbolTable

log = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Utilidades
# -----------------------------------------------------------------------------

def _at(tokens: Sequence[Token], i: int) -> Optional[Token]:
    # lookahead acotado: nunca indexa fuera del flujo
    return tokens[i] if 0 <= i < len(tokens) else None


def _is(tok: Optional[Token], kind: TokenKind) -> bool:
    return tok is not None and tok.kind is kind


# -----------------------------------------------------------------------------
# Chequeo semántico sobre el flujo de tokens
# -----------------------------------------------------------------------------
class SemanticChecker:
    """
    Reglas implementadas:
      • Declaración: palabra reservada seguida de identificador (última gana)
      • Asignación antes de declaración
      • Tipos: solo string -> int es un error
      • Variables declaradas y nunca usadas (advertencia)

    La pasada nunca falla: solo reporta cero o más mensajes.
    """

    def __init__(self) -> None:
        self.diag = Diagnostics()
        self.symtab = SymbolTable()

    def _error(self, code: str, msg: str, line: int, **extra) -> None:
        self.diag.add(phase="semantic", code=code, message=msg, line=line, **extra)

    def check(self, tokens: Sequence[Token]) -> List[str]:
        self.run(tokens)
        return self.diag.messages()

    def run(self, tokens: Sequence[Token]) -> Diagnostics:
        # Estado nuevo en cada corrida: nada se arrastra de análisis anteriores
        self.diag = Diagnostics()
        self.symtab = SymbolTable()
        self._declare(tokens)
        self._check_usage(tokens)
        self._report_unused()
        log.debug("semantic pass: %d symbols, %d messages", len(self.symtab), len(self.diag))
        return self.diag

    # ----------------------- pase 1: tabla de símbolos -----------------------
    def _declare(self, tokens: Sequence[Token]) -> None:
        for i, tok in enumerate(tokens):
            nxt = _at(tokens, i + 1)
            if tok.kind is TokenKind.KEYWORD and _is(nxt, TokenKind.IDENTIFIER):
                self.symtab.declare(nxt.lexeme, tok.lexeme, nxt.line)

    # ----------------------- pase 2: usos y asignaciones -----------------------
    def _check_usage(self, tokens: Sequence[Token]) -> None:
        for i, tok in enumerate(tokens):
            if tok.kind is not TokenKind.IDENTIFIER:
                continue
            name = tok.lexeme
            if not _is(_at(tokens, i + 1), TokenKind.ASSIGNMENT):
                # `int x;` declara x, no lo lee
                declared_here = _is(_at(tokens, i - 1), TokenKind.KEYWORD)
                if name in self.symtab and not declared_here:
                    self.symtab.mark_used(name)
                continue

            self.symtab.mark_used(name)
            sym = self.symtab.lookup(name)
            if sym is None:
                self._error("E002", f"Variable '{name}' assigned before declaration (line {tok.line}).",
                            tok.line, name=name)
                continue
            rhs = _at(tokens, i + 2)
            if sym.type == "int" and _is(rhs, TokenKind.STRING):
                self._error("E101", f"Type error: cannot assign string to int variable '{name}' (line {rhs.line}).",
                            rhs.line, name=name, declared=sym.type)

    # ----------------------- pase 3: no usadas -----------------------
    def _report_unused(self) -> None:
        for sym in self.symtab.unused():
            self._error("W001", f"Warning: variable '{sym.name}' declared at line {sym.line} but not used.",
                        sym.line, name=sym.name)


# -----------------------------------------------------------------------------
# API pública
# -----------------------------------------------------------------------------

def check_semantics(tokens: Sequence[Token]) -> List[str]:
    return SemanticChecker().check(tokens)


def analyze(tokens: Sequence[Token]) -> dict:
    """Punto de entrada estable usado por la UI.
    Devuelve un diccionario con 'symbols' y 'errors'.
    """
    v = SemanticChecker()
    v.run(tokens)
    return {"symbols": v.symtab.dump(), "errors": v.diag.to_list()}
