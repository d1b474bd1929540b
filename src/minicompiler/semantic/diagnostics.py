from __future__ import annotations  # Permite anotaciones de tipo adelantadas.
from dataclasses import dataclass, asdict, field
from typing import Any, Dict, Iterator, List, Optional


# Hallazgo de una fase de análisis (sintáctica o semántica).
@dataclass
class Diagnostic:
    phase: str      # 'syntax' o 'semantic'
    code: str       # S001, E101, W001, ...
    message: str    # Texto ya formateado que se muestra al usuario.
    line: Optional[int] = None  # Línea asociada; None si el hallazgo es global (p. ej. llave sin cerrar).
    extra: Dict[str, Any] = field(default_factory=dict)

    # Útil para serializar hacia la UI.
    def to_dict(self) -> dict:
        return asdict(self)

    def __str__(self) -> str:
        return self.message


# Colección ordenada de diagnósticos: orden de detección y sin deduplicar.
class Diagnostics:
    def __init__(self):
        self._items: List[Diagnostic] = []

    def add(self, *, phase: str, code: str, message: str, line: Optional[int] = None, **extra):
        self._items.append(Diagnostic(phase=phase, code=code, message=message, line=line, extra=extra))

    # Anexa los diagnósticos de otra colección conservando su orden.
    def extend(self, ds: "Diagnostics"):
        self._items.extend(ds._items)

    def empty(self) -> bool:
        return not self._items

    def messages(self) -> List[str]:
        return [d.message for d in self._items]

    def items(self) -> List[Diagnostic]:
        return list(self._items)

    def to_list(self) -> List[dict]:
        return [d.to_dict() for d in self._items]

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)
