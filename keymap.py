"""Tabla de acciones del teclado de la calculadora.

Separada de la interfaz para poder conducir el motor sin tkinter
(pruebas, script de regresión).

Atajos de teclado: dígitos, "." o ",", + - * /, Enter o "=", Retroceso,
Supr (CE), Esc (C), "%", r (1/x), q (x²), s (√x), n (+/-), h (historial).
"""

from calculator_engine import CalculatorEngine


#  Cada fila es una lista de (texto, acción, tipo_color)
#  tipo_color: "num", "op", "func", "equals"

KEYPAD = [
    [("%",  "percent",     "op"), ("CE", "clear_entry", "op"),
     ("C",  "clear",       "op"), ("DEL", "backspace",  "op")],

    [("1/x", "reciprocal", "op"), ("x²", "square", "op"),
     ("√x", "square_root", "op"), ("÷", "op:/", "op")],

    [("7",  "digit:7",  "num"), ("8", "digit:8", "num"),
     ("9",  "digit:9",  "num"), ("×", "op:*", "op")],

    [("4",  "digit:4",  "num"), ("5", "digit:5", "num"),
     ("6",  "digit:6",  "num"), ("−", "op:-", "op")],

    [("1",  "digit:1",  "num"), ("2", "digit:2", "num"),
     ("3",  "digit:3",  "num"), ("+", "op:+", "op")],

    [("+/-", "toggle_sign", "op"), ("0", "digit:0", "num"),
     (".",  "decimal",  "num"), ("=", "equals", "equals")],
]

# Teclas con nombre (keysym de Tk) que no producen un carácter útil
KEYSYM_ACTIONS = {
    "Return": "equals",
    "KP_Enter": "equals",
    "BackSpace": "backspace",
    "Delete": "clear_entry",
    "Escape": "clear",
}

CHAR_ACTIONS = {
    **{d: f"digit:{d}" for d in "0123456789"},
    ".": "decimal",
    ",": "decimal",
    "+": "op:+",
    "-": "op:-",
    "*": "op:*",
    "/": "op:/",
    "=": "equals",
    "%": "percent",
    "\b": "backspace",
    "r": "reciprocal",
    "q": "square",
    "s": "square_root",
    "n": "toggle_sign",
    "h": "toggle_history",
}

_SIMPLE_ACTIONS = {
    "decimal": CalculatorEngine.enter_decimal_point,
    "equals": CalculatorEngine.compute,
    "clear": CalculatorEngine.clear,
    "clear_entry": CalculatorEngine.clear_entry,
    "backspace": CalculatorEngine.backspace,
    "toggle_sign": CalculatorEngine.toggle_sign,
    "percent": CalculatorEngine.percent,
    "reciprocal": CalculatorEngine.reciprocal,
    "square": CalculatorEngine.square,
    "square_root": CalculatorEngine.square_root,
    "clear_history": CalculatorEngine.clear_history,
    "toggle_history": CalculatorEngine.toggle_history,
}


def action_for_key(char: str, keysym: str = ""):
    """Acción para una pulsación de teclado, o None si no aplica."""
    if keysym in KEYSYM_ACTIONS:
        return KEYSYM_ACTIONS[keysym]
    return CHAR_ACTIONS.get(char)


def apply_action(engine: CalculatorEngine, action: str):
    """Ejecuta una acción de la tabla sobre el motor.

    Raises:
        ValueError: acción desconocida.
    """
    if action.startswith("digit:"):
        engine.enter_digit(action[6:])
    elif action.startswith("op:"):
        engine.choose_operator(action[3:])
    elif action in _SIMPLE_ACTIONS:
        _SIMPLE_ACTIONS[action](engine)
    else:
        raise ValueError(f"Acción desconocida: {action}")


def press_keys(engine: CalculatorEngine, keys: str):
    """Alimenta al motor una secuencia de caracteres de teclado ("12+3=")."""
    for char in keys:
        action = action_for_key(char)
        if action is None:
            raise ValueError(f"Tecla sin acción: {char!r}")
        apply_action(engine, action)
