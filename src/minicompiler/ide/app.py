# app.py
from __future__ import annotations
import contextlib
import sys
from pathlib import Path
from typing import Any

import streamlit as st

# --- Rutas/paths base ---
# repo_root/
#   ├─ src/
#   │   └─ minicompiler/
#   │       ├─ ide/app.py (este archivo)
#   │       └─ lexical/, parsing/, semantic/ ...
#   └─ samples/

SRC_DIR = Path(__file__).resolve().parents[2]  # .../repo/src

# Permite `streamlit run src/minicompiler/ide/app.py` sin instalar el paquete
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from minicompiler.config import configure_logging, load_settings
from minicompiler.pipeline import AnalysisSession, PipelineState, Stage

try:
    from streamlit_ace import st_ace
    HAS_ACE = True
except ImportError:
    HAS_ACE = False

SETTINGS = load_settings()
USE_ACE = HAS_ACE and SETTINGS.use_ace
configure_logging(SETTINGS.log_level)

# ------------------ Estilos y theming ------------------
_DEF_CSS = """
<style>
  :root{
    --bg: #ffffff;
    --layer: #f5f7fa;
    --ink: #1a1d29;
    --brand: #2563eb;
  }
  .stApp{ background: var(--bg); color: var(--ink); }
  [data-testid="stSidebar"]{ background: var(--layer) !important; border-right: 1px solid #e5e7eb; }
  .block-container{ padding-top: 1rem; }
  .stButton>button{
    background: var(--layer); color: var(--ink); border: 1px solid #d1d5db;
    transition: transform .06s ease-in-out;
  }
  .stButton>button:hover{ background: var(--brand); color: #fff; transform: translateY(-1px); }
  [data-baseweb="tab"]{ background: #e5e7eb; color: var(--ink); border-radius: 6px; }
  [aria-selected="true"][data-baseweb="tab"]{ background: var(--brand); color: #fff; }
</style>
"""

NO_SAMPLE = "(ninguno)"

_STATE_LABELS = {
    PipelineState.NOT_STARTED: "⏳ Pendiente análisis léxico",
    PipelineState.LEX_PASSED: "🔤 Léxico OK",
    PipelineState.SYNTAX_PASSED: "🧩 Sintaxis OK",
}


def paint_header() -> None:
    st.markdown(
        """
        <div style="display:flex;align-items:center;gap:.75rem;border-bottom:1px solid #e5e7eb;padding:.6rem 1rem;">
          <div style="font-size:1.25rem">🧪</div>
          <div>
            <div style="color:#2563eb;font-weight:600;letter-spacing:.3px">Mini Compiler</div>
            <div style="color:#5a6270;font-size:.85rem">Léxico • Sintaxis • Semántica</div>
          </div>
        </div>
        """,
        unsafe_allow_html=True,
    )


# ------------------ Utilidades núcleo ------------------
@st.cache_data(show_spinner=False)
def discover_samples(root: str) -> dict[str, str]:
    """Escanea la carpeta de ejemplos y devuelve {nombre: contenido}."""
    out: dict[str, str] = {}
    base = Path(root)
    if not base.exists():
        return out
    for p in sorted(base.glob("*")):
        if p.is_file() and p.suffix.lower() in {".mc", ".c", ".txt"}:
            with contextlib.suppress(OSError, UnicodeDecodeError):
                out[p.name] = p.read_text(encoding=SETTINGS.encoding)
    return out


def _decode(b: bytes) -> str:
    for enc in (SETTINGS.encoding, "latin-1"):
        with contextlib.suppress(UnicodeDecodeError, LookupError):
            return b.decode(enc)
    return b.decode("utf-8", errors="replace")


def diagnostic_rows(session: AnalysisSession) -> list[dict[str, Any]]:
    """Aplana los hallazgos de las tres fases a filas tabulares."""
    rows: list[dict[str, Any]] = []
    lex = session.lexical_outcome
    if lex and lex.document:
        for r in lex.document.errors:
            rows.append({"Fase": "Léxico", "Línea": r.line, "Código": "L001", "Mensaje": r.error.message})
    if session.syntax_outcome:
        for d in session.syntax_outcome.result.diagnostics:
            rows.append({"Fase": "Sintaxis", "Línea": d.line, "Código": d.code, "Mensaje": d.message})
    if session.semantic_outcome:
        for d in session.semantic_outcome.errors:
            rows.append({"Fase": "Semántica", "Línea": d.get("line"), "Código": d.get("code", "-"),
                         "Mensaje": d.get("message", "")})
    return rows


def token_table(session: AnalysisSession) -> list[dict[str, int | str]]:
    lex = session.lexical_outcome
    if not lex or not lex.document:
        return []
    return [
        {"kind": t.kind.value, "lexeme": t.lexeme, "line": t.line, "column": t.column}
        for t in lex.document.tokens
    ]


# ------------------ Acciones (callbacks) ------------------
def _session() -> AnalysisSession:
    return st.session_state.session


def _sync_source() -> None:
    # el valor del editor llega antes que el callback del botón
    if not USE_ACE and "code_editor" in st.session_state:
        st.session_state.code = st.session_state.code_editor
    _session().set_source(st.session_state.code)


def _load_code(code: str) -> None:
    st.session_state.code = code
    st.session_state.code_editor = code
    st.session_state.ace_key += 1


def on_stage(stage: Stage) -> None:
    _sync_source()
    sess = _session()
    if stage is Stage.LEXICAL:
        sess.lexical()
    elif stage is Stage.SYNTAX:
        sess.syntax()
    else:
        sess.semantic()


def on_clear() -> None:
    _session().clear()
    _load_code("")
    st.session_state.sample_choice = NO_SAMPLE
    st.session_state.pop("_example_name", None)


# ------------------ Estado y configuración ------------------
DEFAULT_SNIPPET = (
    "int x = 5;\n"
    "String greeting = \"hello\";\n"
    "x = x + 1;\n"
)

st.set_page_config(
    page_title="Mini Compiler",
    page_icon="🧪",
    layout="wide",
    initial_sidebar_state="expanded",
)
st.markdown(_DEF_CSS, unsafe_allow_html=True)
paint_header()

st.session_state.setdefault("code", DEFAULT_SNIPPET)
st.session_state.setdefault("code_editor", st.session_state.code)
st.session_state.setdefault("ace_key", 0)
st.session_state.setdefault("session", AnalysisSession(st.session_state.code))

# ------------------ Sidebar ------------------
with st.sidebar:
    st.markdown("### 📁 Archivo")

    uploaded = st.file_uploader(
        "Abrir archivo",
        type=["mc", "txt", "c", "cpp", "java"],
        accept_multiple_files=False,
        key="uploader",
    )
    if uploaded is not None:
        sig = (uploaded.name, uploaded.size)
        if st.session_state.get("_uploaded_sig") != sig:
            st.session_state["_uploaded_sig"] = sig
            buf = _decode(uploaded.getvalue())
            _load_code(buf)
            _session().load(buf, name=uploaded.name)

    samples = discover_samples(str(SETTINGS.samples_dir))
    choice = st.selectbox("Ejemplos", [NO_SAMPLE] + sorted(samples.keys()), key="sample_choice")
    if choice != NO_SAMPLE and st.session_state.get("_example_name") != choice:
        st.session_state["_example_name"] = choice
        _load_code(samples[choice])
        _session().load(samples[choice], name=choice)

    st.markdown("---")
    with st.expander("⚙️ Preferencias", expanded=True):
        show_tokens = st.checkbox("Ver tokens", value=True)
        show_symbols = st.checkbox("Ver tabla de símbolos", value=True)

    st.markdown("---")
    st.caption(_STATE_LABELS[_session().state])

# ------------------ Editor ------------------
st.markdown("## 📝 Código")
if USE_ACE:
    code = st_ace(
        value=st.session_state.code,
        language="c_cpp",
        theme="chrome",
        height=320,
        key=f"ace_{st.session_state.ace_key}",
        show_gutter=True,
        wrap=False,
        tab_size=4,
        show_print_margin=False,
    )
    if code is not None:
        st.session_state.code = code
else:
    st.text_area("Código fuente", height=300, key="code_editor")
    st.session_state.code = st.session_state.code_editor

# Editar el código invalida tokens y fases ya aprobadas
_session().set_source(st.session_state.code)

# Acciones
sess = _session()
col1, col2, col3, col4, _ = st.columns([1, 1, 1, 1, 3])
col1.button("🔤 Léxico", key="btn_lexical", use_container_width=True,
            disabled=not sess.can_run(Stage.LEXICAL), on_click=on_stage, args=(Stage.LEXICAL,))
col2.button("🧩 Sintaxis", key="btn_syntax", use_container_width=True,
            disabled=not sess.can_run(Stage.SYNTAX), on_click=on_stage, args=(Stage.SYNTAX,))
col3.button("🔎 Semántica", key="btn_semantic", use_container_width=True,
            disabled=not sess.can_run(Stage.SEMANTIC), on_click=on_stage, args=(Stage.SEMANTIC,))
col4.button("🧹 Limpiar", key="btn_clear", use_container_width=True, on_click=on_clear)

# ------------------ Consola ------------------
st.markdown("## 🖥️ Resultado")
st.code(sess.transcript() or "// La salida aparecerá aquí...", language="text")

# ------------------ Resultados ------------------
tabs = st.tabs(["Diagnósticos", "Tokens", "Tabla de símbolos"])

with tabs[0]:
    rows = diagnostic_rows(sess)
    if rows:
        st.dataframe(rows, use_container_width=True, hide_index=True)
    elif sess.lexical_outcome is None:
        st.info("Ejecuta el análisis léxico para ver resultados.")
    else:
        st.success("✅ Sin errores reportados.")

with tabs[1]:
    table = token_table(sess)
    if not show_tokens:
        st.info("Activa \"Ver tokens\" en Preferencias para listarlos.")
    elif table:
        st.info(f"Total de tokens: {len(table)}")
        st.dataframe(table, use_container_width=True, hide_index=True)
    else:
        st.info("Analiza un programa para ver los tokens.")

with tabs[2]:
    sem = sess.semantic_outcome
    if not show_symbols:
        st.info("Activa \"Ver tabla de símbolos\" en Preferencias.")
    elif sem and sem.symbols:
        st.dataframe(sem.symbols, use_container_width=True, hide_index=True)
    else:
        st.info("No hay símbolos para mostrar.")
