"""Historial de cálculos persistido en un archivo de texto plano.

Cada línea del archivo es un registro ``<expresión>\\t<resultado>``.
La escritura reemplaza el archivo completo en cada cambio.
"""

from __future__ import annotations

import logging
import os
import sys
import tempfile
from dataclasses import dataclass
from pathlib import Path


MAX_HISTORY = 10
HISTORY_FILENAME = "calc_history.txt"
HISTORY_ENV_VAR = "CALC_HISTORY_FILE"


@dataclass(frozen=True)
class HistoryEntry:
    expression: str
    result: str

    def to_line(self) -> str:
        return f"{self.expression}\t{self.result}"

    @classmethod
    def from_line(cls, line: str) -> HistoryEntry | None:
        expression, sep, result = line.partition("\t")
        if not sep:
            return None
        return cls(expression, result)


def history_path() -> Path:
    """Ruta del historial: junto al programa en ejecución.

    Sin empaquetar, "el programa" es el script lanzado (sys.argv[0]).
    """
    override = os.environ.get(HISTORY_ENV_VAR)
    if override:
        return Path(override)
    if getattr(sys, "frozen", False):
        base = Path(sys.executable).resolve().parent
    else:
        base = _program_dir()
    return base / HISTORY_FILENAME


def _program_dir() -> Path:
    script = sys.argv[0] if sys.argv else ""
    if not script or script == "-c":
        return Path.cwd()
    return Path(script).resolve().parent


def load_history(path: Path) -> list[HistoryEntry]:
    """Lee el historial; nunca falla, a lo sumo devuelve una lista vacía."""
    try:
        contents = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logging.debug(f"No history file at {path}")
        return []
    except (OSError, UnicodeDecodeError) as exc:
        logging.warning(f"Could not read history from {path}: {exc}")
        return []

    entries = []
    for line in contents.splitlines():
        entry = HistoryEntry.from_line(line)
        if entry is not None:
            entries.append(entry)
    return entries


def save_history(path: Path, entries) -> bool:
    """Sobrescribe el archivo vía temporal + rename. Devuelve si tuvo éxito."""
    content = "\n".join(entry.to_line() for entry in entries)
    tmp_name = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
        )
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as handle:
            handle.write(content)
        os.replace(tmp_name, path)
        return True
    except OSError as exc:
        logging.warning(f"Could not save history to {path}: {exc}")
        if tmp_name is not None:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
        return False


class HistoryStore:
    """Registro acotado (FIFO) de entradas, con persistencia best-effort.

    Con ``path=None`` el historial vive solo en memoria.
    """

    def __init__(self, path: Path | str | None = None, capacity: int = MAX_HISTORY):
        if capacity < 1:
            raise ValueError("La capacidad debe ser al menos 1")
        self._path = Path(path) if path is not None else None
        self._capacity = capacity
        self._entries: list[HistoryEntry] = []

    @classmethod
    def open(cls, path: Path | str | None = None, capacity: int = MAX_HISTORY) -> HistoryStore:
        """Crea el almacén en ``path`` (o la ruta por defecto) y lo carga."""
        store = cls(path if path is not None else history_path(), capacity)
        store.load()
        return store

    @property
    def path(self) -> Path | None:
        return self._path

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def entries(self) -> tuple[HistoryEntry, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def load(self) -> tuple[HistoryEntry, ...]:
        if self._path is None:
            self._entries = []
        else:
            # Un archivo editado a mano puede traer más registros que la capacidad
            self._entries = load_history(self._path)[-self._capacity:]
        return self.entries

    def append(self, expression: str, result: str):
        self._entries.append(HistoryEntry(expression, result))
        while len(self._entries) > self._capacity:
            self._entries.pop(0)
        self._flush()

    def clear(self):
        self._entries.clear()
        self._flush()

    def _flush(self):
        if self._path is not None:
            save_history(self._path, self._entries)
