# src/minicompiler/cli.py
import sys
from pathlib import Path

from .config import configure_logging, load_settings
from .pipeline import AnalysisSession, PipelineState

USAGE = "Uso: python -m minicompiler.cli <archivo> [--encoding ENC]"

# Códigos de salida
EXIT_OK = 0
EXIT_USAGE = 1
EXIT_LEXICAL = 2
EXIT_SYNTAX = 3


def read_source(path: str, encoding: str) -> str:
    """Lee el archivo fuente completo (ya decodificado)."""
    return Path(path).read_text(encoding=encoding)


def main(argv):
    """
    Ejecuta las tres fases sobre un archivo y devuelve el código de salida.

    ``argv`` incluye el nombre del programa en la posición 0, como ``sys.argv``.
    """
    settings = load_settings()
    configure_logging(settings.log_level)

    args = list(argv[1:])
    encoding = settings.encoding
    if "--encoding" in args:
        i = args.index("--encoding")
        if i + 1 >= len(args):
            print(USAGE, file=sys.stderr)
            return EXIT_USAGE
        encoding = args[i + 1]
        del args[i:i + 2]

    if len(args) != 1:
        print(USAGE, file=sys.stderr)
        return EXIT_USAGE

    file_path = args[0]
    try:
        source = read_source(file_path, encoding)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Could not read file: {e}", file=sys.stderr)
        return EXIT_USAGE

    session = AnalysisSession()
    session.load(source, name=Path(file_path).name)
    state = session.run_all()
    print(session.transcript())

    if session.lexical_outcome is None or session.lexical_outcome.no_code:
        return EXIT_USAGE  # no había código
    if state is PipelineState.NOT_STARTED:
        return EXIT_LEXICAL
    if state is PipelineState.LEX_PASSED:
        return EXIT_SYNTAX
    return EXIT_OK


def execute_cli():
    sys.exit(main(sys.argv))


if __name__ == "__main__":
    execute_cli()
