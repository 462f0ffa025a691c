"""
Interfaz gráfica de la calculadora.

Usa tkinter. Cada botón o tecla se traduce a una acción de keymap y se
aplica al motor; después se vuelve a pintar todo el estado visible.
"""

import tkinter as tk
from tkinter import font as tkfont

from calculator_engine import CalculatorEngine
from keymap import KEYPAD, action_for_key, apply_action


CALC_WIDTH = 320
HISTORY_WIDTH = 230
WINDOW_HEIGHT = 500


# ═════════════════════════════════════════════════════════════════
#  Panel lateral de historial
# ═════════════════════════════════════════════════════════════════

class HistoryPanel:
    """Lista de cálculos recientes, el más nuevo arriba, con scroll vertical."""

    def __init__(self, parent, palette: dict, fonts: dict, on_clear, on_close):
        self._palette = palette
        self._fonts = fonts
        self.frame = tk.Frame(parent, bg=palette["bg"], width=HISTORY_WIDTH - 10,
                              padx=8, pady=8)
        self.frame.pack_propagate(False)

        header = tk.Frame(self.frame, bg=palette["bg"])
        header.pack(fill="x")
        tk.Label(
            header, text="History", font=fonts["title"],
            bg=palette["bg"], fg=palette["text"],
        ).pack(side="left")
        self.close_btn = tk.Button(
            header, text="<<", font=fonts["small"],
            bg=palette["bg"], fg=palette["muted"],
            activebackground=palette["op"], relief="flat", bd=0,
            cursor="hand2", command=on_close,
        )
        self.close_btn.pack(side="right")
        self.clear_btn = tk.Button(
            header, text="Clear", font=fonts["small"],
            bg=palette["op"], fg=palette["muted"],
            activebackground=palette["num"], relief="flat",
            cursor="hand2", command=on_clear,
        )

        tk.Frame(self.frame, bg=palette["divider"], height=1).pack(
            fill="x", pady=(4, 6))

        # ── Área desplazable: Canvas + Scrollbar con un Frame interior ──
        body = tk.Frame(self.frame, bg=palette["bg"])
        body.pack(fill="both", expand=True)

        self.canvas = tk.Canvas(body, bg=palette["bg"], bd=0,
                                highlightthickness=0)
        self.scrollbar = tk.Scrollbar(body, orient="vertical",
                                      command=self.canvas.yview)
        self.canvas.config(yscrollcommand=self.scrollbar.set)
        self.scrollbar.pack(side="right", fill="y")
        self.canvas.pack(side="left", fill="both", expand=True)

        self._list = tk.Frame(self.canvas, bg=palette["bg"])
        self._list_id = self.canvas.create_window((0, 0), window=self._list,
                                                  anchor="nw")
        self._list.bind("<Configure>", self._update_scrollregion)
        self.canvas.bind("<Configure>", self._fit_width)
        self._bind_wheel(self.canvas)

    def _update_scrollregion(self, _event=None):
        self.canvas.configure(scrollregion=self.canvas.bbox("all"))

    def _fit_width(self, event):
        self.canvas.itemconfigure(self._list_id, width=event.width)

    def _bind_wheel(self, widget):
        widget.bind("<MouseWheel>", self._on_mousewheel)
        widget.bind("<Button-4>", lambda _e: self.canvas.yview_scroll(-1, "units"))
        widget.bind("<Button-5>", lambda _e: self.canvas.yview_scroll(1, "units"))

    def _on_mousewheel(self, event):
        direction = -1 if event.delta > 0 else 1
        self.canvas.yview_scroll(direction, "units")

    def render(self, entries):
        for child in self._list.winfo_children():
            child.destroy()

        if not entries:
            self.clear_btn.pack_forget()
            tk.Label(
                self._list, text="No history yet", font=self._fonts["small"],
                bg=self._palette["bg"], fg=self._palette["muted"],
            ).pack(pady=30)
        else:
            self.clear_btn.pack(side="right", padx=(0, 4))
            for entry in reversed(entries):
                card = tk.Frame(self._list, bg=self._palette["card"], padx=8, pady=8)
                card.pack(fill="x", pady=(0, 2))
                expr_label = tk.Label(
                    card, text=entry.expression, font=self._fonts["small"],
                    bg=self._palette["card"], fg=self._palette["muted"], anchor="e",
                )
                expr_label.pack(fill="x")
                result_label = tk.Label(
                    card, text=f"= {entry.result}", font=self._fonts["entry"],
                    bg=self._palette["card"], fg=self._palette["text"], anchor="e",
                )
                result_label.pack(fill="x")
                for widget in (card, expr_label, result_label):
                    self._bind_wheel(widget)

        self._list.update_idletasks()
        self._update_scrollregion()
        self.canvas.yview_moveto(0.0)


# ═════════════════════════════════════════════════════════════════
#  Aplicación principal
# ═════════════════════════════════════════════════════════════════

class CalculatorApp:
    """Ventana principal de la calculadora."""

    # ── Paleta de colores ────────────────────────────────────────
    C = {
        "bg":        "#202020",
        "num":       "#3B3B3B",
        "num_fg":    "#FFFFFF",
        "op":        "#323232",
        "op_fg":     "#FFFFFF",
        "equals":    "#76B9ED",
        "equals_fg": "#202020",
        "text":      "#FFFFFF",
        "muted":     "#969696",
        "card":      "#282828",
        "divider":   "#373737",
    }

    # Tamaño de la fuente del resultado según su longitud
    DISPLAY_SIZES = ((8, 46), (12, 32))
    DISPLAY_MIN_SIZE = 24

    # ────────────────────────────────────────────────────────────

    def __init__(self, root: tk.Tk, engine=None):
        self.root = root
        self.root.title("Calculator")
        self.root.configure(bg=self.C["bg"])
        self.root.resizable(False, False)

        self.engine = engine if engine is not None else CalculatorEngine()

        self._init_fonts()
        self._create_layout()
        self._create_display()
        self._create_keypad()
        self._bind_keyboard()
        self._refresh()

    # ── Fuentes ──────────────────────────────────────────────────

    def _init_fonts(self):
        self._f_expr    = tkfont.Font(family="Segoe UI", size=14)
        self._f_result  = tkfont.Font(family="Segoe UI", size=46, weight="bold")
        self._f_btn     = tkfont.Font(family="Segoe UI", size=20)
        self._f_small   = tkfont.Font(family="Segoe UI", size=12)
        self._f_title   = tkfont.Font(family="Segoe UI", size=16, weight="bold")
        self._f_entry   = tkfont.Font(family="Segoe UI", size=16, weight="bold")

    # ── Disposición ──────────────────────────────────────────────

    def _create_layout(self):
        self.calc_frame = tk.Frame(self.root, bg=self.C["bg"], width=CALC_WIDTH,
                                   height=WINDOW_HEIGHT, padx=4, pady=4)
        self.calc_frame.pack(side="left", fill="both", expand=True)
        self.calc_frame.pack_propagate(False)

        self.history_panel = HistoryPanel(
            self.root, self.C,
            {"title": self._f_title, "small": self._f_small, "entry": self._f_entry},
            on_clear=lambda: self._on_key("clear_history"),
            on_close=lambda: self._on_key("toggle_history"),
        )

    # ── Pantalla ─────────────────────────────────────────────────

    def _create_display(self):
        frame = tk.Frame(self.calc_frame, bg=self.C["bg"])
        frame.pack(fill="x")

        self.history_btn = tk.Button(
            frame, text="History >>", font=self._f_small,
            bg=self.C["bg"], fg=self.C["muted"],
            activebackground=self.C["op"], relief="flat", bd=0,
            cursor="hand2", command=lambda: self._on_key("toggle_history"),
        )
        self.history_btn.pack(anchor="e")

        self.expr_var = tk.StringVar()
        tk.Label(
            frame, textvariable=self.expr_var, font=self._f_expr,
            bg=self.C["bg"], fg=self.C["muted"], anchor="e",
        ).pack(fill="x")

        self.display_var = tk.StringVar(value="0")
        tk.Label(
            frame, textvariable=self.display_var, font=self._f_result,
            bg=self.C["bg"], fg=self.C["text"], anchor="e",
        ).pack(fill="x", pady=(0, 8))

    # ── Teclado numérico / operadores ────────────────────────────

    def _create_keypad(self):
        frame = tk.Frame(self.calc_frame, bg=self.C["bg"])
        frame.pack(fill="both", expand=True)

        cols = max(len(row) for row in KEYPAD)
        for c in range(cols):
            frame.columnconfigure(c, weight=1, uniform="key")

        for r, row_def in enumerate(KEYPAD):
            for c, (text, action, kind) in enumerate(row_def):
                btn = tk.Button(
                    frame, text=text, font=self._f_btn,
                    bg=self.C[kind], fg=self.C[f"{kind}_fg"],
                    activebackground=self.C["num"], relief="flat",
                    command=lambda a=action: self._on_key(a),
                )
                btn.grid(row=r, column=c, sticky="nsew", padx=1, pady=1)
            frame.rowconfigure(r, weight=1)

    # ── Atajos de teclado ────────────────────────────────────────

    def _bind_keyboard(self):
        self.root.bind("<Key>", self._on_keypress)

    def _on_keypress(self, event):
        action = action_for_key(event.char, event.keysym)
        if action is not None:
            self._on_key(action)
            return "break"
        return None

    # ── Acciones ─────────────────────────────────────────────────

    def _on_key(self, action: str):
        apply_action(self.engine, action)
        self._refresh()

    def _refresh(self):
        engine = self.engine
        self.expr_var.set(engine.expression)
        self.display_var.set(engine.display)
        self._f_result.configure(size=self._display_size(engine.display))

        if engine.show_history:
            self.history_panel.frame.pack(side="right", fill="y")
            self.history_panel.render(engine.history)
            self.history_btn.config(text="History <<")
            width = CALC_WIDTH + HISTORY_WIDTH
        else:
            self.history_panel.frame.pack_forget()
            self.history_btn.config(text="History >>")
            width = CALC_WIDTH
        self.root.geometry(f"{width}x{WINDOW_HEIGHT}")

    @classmethod
    def _display_size(cls, text: str) -> int:
        for limit, size in cls.DISPLAY_SIZES:
            if len(text) <= limit:
                return size
        return cls.DISPLAY_MIN_SIZE
