"""Punto de entrada de la calculadora."""

import logging
import os
import tkinter as tk

from calculator_engine import CalculatorEngine
from calculator_ui import CalculatorApp
from history_store import HistoryStore


LOG_LEVEL = os.environ.get("CALC_LOG_LEVEL", "WARNING")


def main():
    logging.basicConfig(
        level=LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(message)s",
    )
    engine = CalculatorEngine(history=HistoryStore.open())
    root = tk.Tk()
    CalculatorApp(root, engine=engine)
    root.mainloop()


if __name__ == "__main__":
    main()
