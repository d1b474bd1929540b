from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional, Set


@dataclass
class VariableSymbol:
    name: str
    type: str   # lexema de la palabra reservada que lo declaró ("int", "String", ...)
    line: int   # línea de la última declaración


class SymbolTable:
    """Espacio de nombres plano: nombre -> tipo declarado.

    Una redeclaración sobrescribe la entrada anterior (tipo y línea) sin
    reportar error. Se construye de nuevo en cada pasada semántica.
    """

    def __init__(self):
        self._symbols: Dict[str, VariableSymbol] = {}
        self._used: Set[str] = set()

    def declare(self, name: str, typ: str, line: int) -> VariableSymbol:
        sym = VariableSymbol(name=name, type=typ, line=line)
        self._symbols[name] = sym
        return sym

    def lookup(self, name: str) -> Optional[VariableSymbol]:
        return self._symbols.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self._symbols

    def __len__(self) -> int:
        return len(self._symbols)

    def mark_used(self, name: str) -> None:
        self._used.add(name)

    def is_used(self, name: str) -> bool:
        return name in self._used

    def unused(self) -> List[VariableSymbol]:
        return [s for n, s in self._symbols.items() if n not in self._used]

    # Filas planas para mostrar en la UI.
    def dump(self) -> list:
        return [
            {"name": s.name, "type": s.type, "line": s.line, "used": s.name in self._used}
            for s in self._symbols.values()
        ]
