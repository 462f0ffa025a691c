"""
Motor de estado de la calculadora.

Este módulo provee la clase CalculatorEngine, una máquina de estados que
procesa la entrada tecla a tecla y evalúa estrictamente de izquierda a
derecha (sin precedencia ni paréntesis). No depende de ninguna biblioteca
gráfica: la interfaz solo invoca operaciones y lee el estado resultante.

Contrato de interfaz:
    - display: str          texto principal, numérico o "Error"
    - expression: str       traza de la operación pendiente o completada
    - history               entradas del historial (más antigua primero)
    - operaciones sin valor de retorno: enter_digit, enter_decimal_point,
      choose_operator, compute, clear, clear_entry, backspace,
      toggle_sign, percent, reciprocal, square, square_root,
      clear_history, toggle_history
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum

from history_store import HistoryStore


ERROR = "Error"
DIVIDE_BY_ZERO_MESSAGE = "Cannot divide by zero"
INVALID_INPUT_MESSAGE = "Invalid input"
OVERFLOW_MESSAGE = "Overflow"

FIXED_DECIMALS = 10
INTEGER_LIMIT = 1e15


class Operator(Enum):
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    def apply(self, a: float, b: float) -> float:
        """Aplica el operador.

        Raises:
            ZeroDivisionError: división entre exactamente cero.
        """
        if self is Operator.ADD:
            return a + b
        if self is Operator.SUBTRACT:
            return a - b
        if self is Operator.MULTIPLY:
            return a * b
        if b == 0.0:
            raise ZeroDivisionError(DIVIDE_BY_ZERO_MESSAGE)
        return a / b


_SYMBOLS = {
    Operator.ADD: "+",
    Operator.SUBTRACT: "-",
    Operator.MULTIPLY: "×",
    Operator.DIVIDE: "÷",
}


@dataclass(frozen=True)
class PendingOperation:
    """Primer operando y operador elegidos, aún sin aplicar."""

    operand: float
    operator: Operator


def format_number(value: float) -> str:
    """Formatea un resultado para la pantalla.

    Enteros (|n| < 1e15) sin decimales; el resto con 10 decimales fijos,
    sin ceros finales ni punto colgante. NaN e infinitos dan "Error".
    """
    if math.isnan(value) or math.isinf(value):
        return ERROR
    if value == math.floor(value) and abs(value) < INTEGER_LIMIT:
        return str(int(value))
    text = f"{value:.{FIXED_DECIMALS}f}"
    return text.rstrip("0").rstrip(".")


def parse_display(text: str) -> float | None:
    """Valor numérico de la pantalla, o None si no es un número finito."""
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


class CalculatorEngine:
    """Estado de la calculadora y operaciones de teclado."""

    def __init__(self, history: HistoryStore | None = None):
        self._history = history if history is not None else HistoryStore()
        self.show_history = False
        self._reset()

    # ── Estado observable ────────────────────────────────────────

    @property
    def history(self):
        return self._history.entries

    @property
    def pending(self) -> PendingOperation | None:
        return self._pending

    @property
    def first_operand(self) -> float | None:
        return self._pending.operand if self._pending is not None else None

    @property
    def pending_operator(self) -> Operator | None:
        return self._pending.operator if self._pending is not None else None

    @property
    def is_error(self) -> bool:
        return self.display == ERROR

    def _reset(self):
        self.display = "0"
        self.expression = ""
        self._pending: PendingOperation | None = None
        self.awaiting_second_operand = False
        self.just_completed = False

    # ── Entrada de números ───────────────────────────────────────

    def enter_digit(self, digit: str):
        if len(digit) != 1 or digit not in "0123456789":
            raise ValueError(f"Dígito inválido: {digit!r}")
        self._start_fresh_if_stale()
        if self.awaiting_second_operand:
            self.display = digit
            self.awaiting_second_operand = False
        elif self.display == "0":
            self.display = digit
        else:
            self.display += digit

    def enter_decimal_point(self):
        self._start_fresh_if_stale()
        if self.awaiting_second_operand:
            self.display = "0."
            self.awaiting_second_operand = False
        elif "." not in self.display:
            self.display += "."

    def _start_fresh_if_stale(self):
        if self.just_completed or self.is_error:
            self._reset()

    # ── Operaciones binarias ─────────────────────────────────────

    def choose_operator(self, op):
        op = Operator(op)
        if self.is_error:
            return
        if parse_display(self.display) is None:
            return

        if self._pending is not None and not self.awaiting_second_operand:
            self.compute()
            if self.is_error:
                return

        # Tras compute() la pantalla es el resultado ya formateado
        current = parse_display(self.display)
        if current is None:
            return
        self._pending = PendingOperation(current, op)
        self.expression = f"{format_number(current)} {op.symbol}"
        self.awaiting_second_operand = True
        self.just_completed = False

    def compute(self):
        if self._pending is None:
            return
        b = parse_display(self.display)
        if b is None:
            return

        a, op = self._pending.operand, self._pending.operator
        trace = f"{format_number(a)} {op.symbol} {format_number(b)}"
        try:
            result = format_number(op.apply(a, b))
        except ZeroDivisionError:
            self._fail(DIVIDE_BY_ZERO_MESSAGE)
            return
        if result == ERROR:
            self._fail(OVERFLOW_MESSAGE)
            return

        self._history.append(trace, result)
        self.display = result
        self.expression = f"{trace} ="
        self._pending = None
        self.awaiting_second_operand = False
        self.just_completed = True

    # ── Operaciones unarias ──────────────────────────────────────

    def reciprocal(self):
        value = parse_display(self.display)
        if value is None:
            return
        if value == 0.0:
            self._fail(DIVIDE_BY_ZERO_MESSAGE)
            return
        self._complete_unary(f"1/({format_number(value)})", 1.0 / value)

    def square(self):
        value = parse_display(self.display)
        if value is None:
            return
        self._complete_unary(f"sqr({format_number(value)})", value * value)

    def square_root(self):
        value = parse_display(self.display)
        if value is None:
            return
        if value < 0.0:
            self._fail(INVALID_INPUT_MESSAGE)
            return
        self._complete_unary(f"√({format_number(value)})", math.sqrt(value))

    def _complete_unary(self, trace: str, value: float):
        result = format_number(value)
        if result == ERROR:
            self._fail(OVERFLOW_MESSAGE)
            return
        self._history.append(trace, result)
        self.expression = trace
        self.display = result
        self.just_completed = True

    def _fail(self, message: str):
        logging.debug(f"Calculation error: {message}")
        self.display = ERROR
        self.expression = message
        self._pending = None
        self.awaiting_second_operand = False
        self.just_completed = True

    # ── Edición ──────────────────────────────────────────────────

    def clear(self):
        self._reset()

    def clear_entry(self):
        self.display = "0"

    def backspace(self):
        if self.is_error or self.just_completed:
            return
        remaining = self.display[:-1]
        self.display = remaining if remaining not in ("", "-") else "0"

    def toggle_sign(self):
        if self.is_error or self.display == "0":
            return
        if self.display.startswith("-"):
            self.display = self.display[1:]
        else:
            self.display = "-" + self.display

    def percent(self):
        value = parse_display(self.display)
        if value is None:
            return
        self.display = format_number(value / 100)

    # ── Historial ────────────────────────────────────────────────

    def clear_history(self):
        self._history.clear()

    def toggle_history(self):
        self.show_history = not self.show_history
