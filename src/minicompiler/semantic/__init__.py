"""
Módulo de análisis semántico.
Exporta el chequeo semántico, la tabla de símbolos y los diagnósticos.
"""

from .checker import SemanticChecker, analyze, check_semantics
from .symbol_table import SymbolTable, VariableSymbol
from .diagnostics import Diagnostic, Diagnostics

__all__ = [
    # Chequeo
    'SemanticChecker',
    'analyze',
    'check_semantics',

    # Tabla de símbolos
    'SymbolTable',
    'VariableSymbol',

    # Diagnósticos
    'Diagnostic',
    'Diagnostics',
]
