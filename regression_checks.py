from calculator_engine import CalculatorEngine, format_number
from history_store import HistoryStore, MAX_HISTORY
from keymap import action_for_key, apply_action
import sys


def _walk(keys: str):
	"""Pulsa cada tecla y devuelve el motor y los estados (tecla, pantalla, expresión)."""
	engine = CalculatorEngine(history=HistoryStore())
	states = []

	for char in keys:
		action = action_for_key(char)
		if action is None:
			raise SystemExit(f"Unknown key: {char!r}")
		apply_action(engine, action)
		states.append((char, engine.display, engine.expression))

	return engine, states


def inspect_key_states(keys: str, *, show: int = 0) -> None:
	"""Imprime el estado del motor tras cada tecla de la secuencia."""
	engine, states = _walk(keys)

	print("Key inspection")
	print(f"keys:           {keys}")
	print(f"total states:   {len(states)}")

	limit = len(states) if show <= 0 else show
	print("states:")
	for i, (char, display, expression) in enumerate(states[:limit], start=1):
		print(f"  {i}. {char!r:5} display={display!r} expression={expression!r}")

	print(f"final display:  {engine.display}")
	print(f"history:        {len(engine.history)} entries")


def run_regressions() -> None:
	checks: list[tuple[str, bool]] = []
	expected_actual: list[tuple[str, str, str]] = []

	for keys, expected in (
		("2+3=", "5"),
		("10-3=", "7"),
		("4*5=", "20"),
		("20/4=", "5"),
		("2+3=*4=", "20"),
		("10+5=-3=", "12"),
		("2+3*4=", "20"),
		("1/0=", "Error"),
		("07", "7"),
		("1..5", "1.5"),
		("50%", "0.5"),
		("9s", "3"),
		("4r", "0.25"),
		("12q", "144"),
	):
		engine, _ = _walk(keys)
		expected_actual.append((keys, expected, engine.display))
		checks.append((f"{keys} gives {expected}", engine.display == expected))

	engine, _ = _walk("1/0=")
	checks.append((
		"divide by zero explains itself",
		engine.expression == "Cannot divide by zero",
	))
	checks.append(("divide by zero records no history", len(engine.history) == 0))

	engine, _ = _walk("0r5")
	checks.append(("digit after reciprocal error starts fresh", engine.display == "5"))

	engine, _ = _walk("2ns7")
	checks.append(("digit after square root error starts fresh", engine.display == "7"))

	engine, _ = _walk("12+3=")
	checks.append((
		"completed trace ends with equals",
		engine.expression == "12 + 3 =",
	))
	checks.append((
		"history keeps trace without equals",
		[(e.expression, e.result) for e in engine.history] == [("12 + 3", "15")],
	))

	engine, _ = _walk("".join(f"{i}+1=" for i in range(MAX_HISTORY + 1)))
	results = [e.result for e in engine.history]
	expected_results = [format_number(i + 1.0) for i in range(1, MAX_HISTORY + 1)]
	expected_actual.append((
		f"{MAX_HISTORY + 1} computations",
		" ".join(expected_results),
		" ".join(results),
	))
	checks.append((
		"history evicts the oldest entry",
		results == expected_results,
	))

	engine, _ = _walk("5\b")
	checks.append(("single-character backspace leaves 0", engine.display == "0"))

	engine, _ = _walk("5nn")
	checks.append(("sign toggle is its own inverse", engine.display == "5"))

	for value, expected in ((42.0, "42"), (-15.0, "-15"), (1000000.0, "1000000"),
			(1.5, "1.5"), (3.14, "3.14"), (float("inf"), "Error")):
		actual = format_number(value)
		expected_actual.append((f"format_number({value})", expected, actual))
		checks.append((f"format_number({value})", actual == expected))

	failed = [name for name, ok in checks if not ok]
	for name, ok in checks:
		print(f"{name}: {'OK' if ok else 'FAIL'}")

	print("\nExpected vs Actual:")
	for label, expected, actual in expected_actual:
		status = "OK" if expected == actual else "FAIL"
		print(f"- {label}: {status}")
		print(f"  expected: {expected}")
		print(f"  actual:   {actual}")

	if failed:
		print("\nFAILED CHECKS:")
		for name in failed:
			print(f"- {name}")
		raise SystemExit(1)

	print("\nAll regression checks passed.")


if __name__ == "__main__":
	# Uso rápido:
	#   python regression_checks.py
	#   python regression_checks.py --inspect "2+3=*4="
	#   python regression_checks.py --inspect "1/0=5" --show 3
	if "--inspect" in sys.argv:
		try:
			keys = sys.argv[sys.argv.index("--inspect") + 1]
		except (ValueError, IndexError):
			raise SystemExit("Missing key sequence after --inspect")

		def _read_int(flag: str, default: int) -> int:
			if flag not in sys.argv:
				return default
			idx = sys.argv.index(flag)
			try:
				return int(sys.argv[idx + 1])
			except (ValueError, IndexError):
				raise SystemExit(f"Invalid value for {flag}")

		inspect_key_states(keys, show=_read_int("--show", 0))
	else:
		run_regressions()
