import pytest
import tempfile
from pathlib import Path

from calculator_engine import CalculatorEngine
from history_store import HistoryStore
from keymap import press_keys


@pytest.fixture
def temp_dir_fixture():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def history_file(temp_dir_fixture):
    return temp_dir_fixture / "calc_history.txt"


@pytest.fixture
def store(history_file):
    return HistoryStore.open(history_file)


@pytest.fixture
def engine():
    # Historial solo en memoria: las pruebas no tocan el disco
    return CalculatorEngine(history=HistoryStore())


@pytest.fixture
def press(engine):
    def _press(keys):
        press_keys(engine, keys)
        return engine
    return _press
