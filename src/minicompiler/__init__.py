"""
Mini compilador: análisis léxico, sintáctico y semántico de un mini lenguaje tipo C.
"""

from .lexical import Lexer, LexicalError, Token, TokenKind, tokenize, tokenize_document
from .parsing import SyntaxChecker, SyntaxResult, check_syntax
from .semantic import SemanticChecker, analyze, check_semantics
from .pipeline import AnalysisSession, PipelineState, Stage, StageOrderError

__version__ = "1.0.0"

__all__ = [
    'Lexer',
    'LexicalError',
    'Token',
    'TokenKind',
    'tokenize',
    'tokenize_document',
    'SyntaxChecker',
    'SyntaxResult',
    'check_syntax',
    'SemanticChecker',
    'analyze',
    'check_semantics',
    'AnalysisSession',
    'PipelineState',
    'Stage',
    'StageOrderError',
]
