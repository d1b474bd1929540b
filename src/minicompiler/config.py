"""
Configuración leída del entorno y arranque del logging.

Variables reconocidas:
    MINICOMPILER_LOG_LEVEL    nivel de logging (DEBUG, INFO, WARNING...). Default WARNING.
    MINICOMPILER_ENCODING     codificación al leer archivos fuente. Default utf-8.
    MINICOMPILER_SAMPLES_DIR  carpeta de programas de ejemplo para la IDE.
    MINICOMPILER_IDE_ACE      1/0: usar el editor streamlit-ace si está instalado.
"""

from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[2]  # .../repo (layout src/)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_FALSY = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class Settings:
    log_level: str = "WARNING"
    encoding: str = "utf-8"
    samples_dir: Path = REPO_ROOT / "samples"
    use_ace: bool = True


def load_settings() -> Settings:
    env = os.environ
    return Settings(
        log_level=env.get("MINICOMPILER_LOG_LEVEL", "WARNING").upper(),
        encoding=env.get("MINICOMPILER_ENCODING", "utf-8"),
        samples_dir=Path(env.get("MINICOMPILER_SAMPLES_DIR", str(REPO_ROOT / "samples"))),
        use_ace=env.get("MINICOMPILER_IDE_ACE", "1").strip().lower() not in _FALSY,
    )


def configure_logging(level: str = "WARNING") -> logging.Logger:
    """Instala un único handler en el logger del paquete (idempotente)."""
    logger = logging.getLogger("minicompiler")
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
