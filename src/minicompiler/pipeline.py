"""
Control de fases: léxico -> sintaxis -> semántica.

El progreso es un valor explícito (:class:`PipelineState`) que el llamador
guarda y pasa a cada fase. Las funciones ``run_*`` son puras respecto a ese
estado; :class:`AnalysisSession` es el controlador que comparten la CLI y la
IDE y que invalida todo cuando cambia el código fuente.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from .lexical import DocumentResult, Token, tokenize_document
from .parsing import SyntaxResult, check_syntax
from .semantic import SemanticChecker

log = logging.getLogger(__name__)


class PipelineState(Enum):
    NOT_STARTED = "not-started"
    LEX_PASSED = "lex-passed"
    SYNTAX_PASSED = "syntax-passed"


class Stage(Enum):
    LEXICAL = "Lexical"
    SYNTAX = "Syntax"
    SEMANTIC = "Semantic"


class StageOrderError(RuntimeError):
    """Una fase se invocó sin que la anterior hubiera pasado."""


_REQUIRES = {
    Stage.SYNTAX: (PipelineState.LEX_PASSED, PipelineState.SYNTAX_PASSED),
    Stage.SEMANTIC: (PipelineState.SYNTAX_PASSED,),
}

_GATE_MESSAGES = {
    Stage.SYNTAX: "Syntax Error: Lexical analysis not completed or failed.",
    Stage.SEMANTIC: "Semantic Error: Syntax analysis not completed or failed.",
}


def _require(stage: Stage, state: PipelineState) -> None:
    if state not in _REQUIRES[stage]:
        raise StageOrderError(f"{stage.value} stage cannot run from state '{state.value}'")


# ------------------ Resultados por fase ------------------
@dataclass
class LexicalOutcome:
    state: PipelineState
    document: Optional[DocumentResult]
    tokens: Tuple[Token, ...] = ()
    console: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.state is PipelineState.LEX_PASSED

    @property
    def no_code(self) -> bool:
        # fuente vacía, o solo espacios y saltos de línea
        if self.document is None:
            return True
        return self.document.ok and not self.document.tokens


@dataclass
class SyntaxOutcome:
    state: PipelineState
    result: SyntaxResult
    console: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.result.ok


@dataclass
class SemanticOutcome:
    state: PipelineState
    messages: List[str]
    symbols: list = field(default_factory=list)
    errors: List[dict] = field(default_factory=list)
    console: List[str] = field(default_factory=list)


# ------------------ Fases ------------------
def run_lexical(source: str) -> LexicalOutcome:
    console = ["--- Lexical Analysis ---"]
    if not source:
        console.append("Error: No code loaded. Please open a file first.")
        return LexicalOutcome(PipelineState.NOT_STARTED, None, console=console)

    doc = tokenize_document(source)
    if not doc.ok:
        for line in doc.errors:
            console.append(f"Lexical Error (line {line.line}): {line.error.message}")
        # un documento con líneas fallidas no entrega tokens a la fase siguiente
        return LexicalOutcome(PipelineState.NOT_STARTED, doc, console=console)

    tokens = tuple(doc.tokens)
    if not tokens:
        console.append("No tokens found (empty or whitespace-only file).")
        return LexicalOutcome(PipelineState.NOT_STARTED, doc, console=console)

    console.append("Tokens:")
    console.extend(str(t) for t in tokens)
    return LexicalOutcome(PipelineState.LEX_PASSED, doc, tokens, console)


def run_syntax(state: PipelineState, tokens: Tuple[Token, ...]) -> SyntaxOutcome:
    _require(Stage.SYNTAX, state)
    result = check_syntax(tokens)
    console = ["--- Syntax Analysis ---"]
    if result.ok:
        console.append("Syntax OK.")
        return SyntaxOutcome(PipelineState.SYNTAX_PASSED, result, console)
    console.append("Syntax Errors:")
    console.extend(result.messages)
    return SyntaxOutcome(PipelineState.LEX_PASSED, result, console)


def run_semantic(state: PipelineState, tokens: Tuple[Token, ...]) -> SemanticOutcome:
    _require(Stage.SEMANTIC, state)
    checker = SemanticChecker()
    diag = checker.run(tokens)
    messages = diag.messages()
    console = ["--- Semantic Analysis ---"]
    if messages:
        console.append("Semantic Warnings/Errors:")
        console.extend(messages)
    else:
        console.append("Semantic OK. No issues found.")
    return SemanticOutcome(state, messages, checker.symtab.dump(), diag.to_list(), console)


# ------------------ Controlador ------------------
class AnalysisSession:
    """Estado mutable de una sesión de análisis sobre un único código fuente."""

    def __init__(self, source: str = ""):
        self.source = source
        self.console: List[str] = []
        self.reset()

    def reset(self) -> None:
        self.state = PipelineState.NOT_STARTED
        self.tokens: Tuple[Token, ...] = ()
        self.lexical_outcome: Optional[LexicalOutcome] = None
        self.syntax_outcome: Optional[SyntaxOutcome] = None
        self.semantic_outcome: Optional[SemanticOutcome] = None

    def load(self, source: str, name: Optional[str] = None) -> None:
        if name:
            self.console.append(f"Opened file: {name}")
        self.source = source
        self.reset()

    def set_source(self, source: str) -> bool:
        """Actualiza el código; si cambió, obliga a reentrar por la fase léxica."""
        if source == self.source:
            return False
        self.source = source
        self.reset()
        log.debug("source changed, pipeline reset")
        return True

    def clear(self) -> None:
        self.source = ""
        self.console = []
        self.reset()

    def can_run(self, stage: Stage) -> bool:
        if stage is Stage.LEXICAL:
            return bool(self.source.strip()) and self.state is PipelineState.NOT_STARTED
        if stage is Stage.SYNTAX:
            return self.state is PipelineState.LEX_PASSED
        return self.state is PipelineState.SYNTAX_PASSED and self.semantic_outcome is None

    def lexical(self) -> LexicalOutcome:
        self.reset()
        out = run_lexical(self.source)
        self.lexical_outcome = out
        self.state = out.state
        self.tokens = out.tokens
        self.console.extend(out.console)
        return out

    def syntax(self) -> Optional[SyntaxOutcome]:
        if self.state not in _REQUIRES[Stage.SYNTAX]:
            return self._refuse(Stage.SYNTAX)
        out = run_syntax(self.state, self.tokens)
        self.syntax_outcome = out
        self.semantic_outcome = None
        self.state = out.state
        self.console.extend(out.console)
        return out

    def semantic(self) -> Optional[SemanticOutcome]:
        if self.state not in _REQUIRES[Stage.SEMANTIC]:
            return self._refuse(Stage.SEMANTIC)
        out = run_semantic(self.state, self.tokens)
        self.semantic_outcome = out
        self.console.extend(out.console)
        return out

    def run_all(self) -> PipelineState:
        """Corre las tres fases en orden, deteniéndose en la primera que falle."""
        self.lexical()
        if self.state is PipelineState.LEX_PASSED:
            self.syntax()
        if self.state is PipelineState.SYNTAX_PASSED:
            self.semantic()
        return self.state

    def _refuse(self, stage: Stage) -> None:
        log.info("%s stage refused in state %s", stage.value, self.state.value)
        self.console.append(_GATE_MESSAGES[stage])
        return None

    def transcript(self) -> str:
        return "\n".join(self.console)
