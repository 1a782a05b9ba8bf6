"""
GUI for FlashCalc
Tkinter-based calculator widget with a clickable history list
"""
import tkinter as tk

import config
from calculator import Calculator
from host_context import HostContextNotifier, StandaloneSDK
from input_manager import InputManager

# Tk keysyms that differ from the browser key names InputManager expects
KEYSYM_NAMES = {
    "Return": "Enter",
    "KP_Enter": "Enter",
    "BackSpace": "Backspace",
    "Escape": "Escape",
}


class FlashCalcGUI:
    def __init__(self, root, store, sdk=None):
        self.root = root
        self.root.title(config.APP_NAME)
        self.root.geometry(f"{config.WINDOW_WIDTH}x{config.WINDOW_HEIGHT}")
        self.T = config.THEME
        self.root.configure(bg=self.T["bg"])

        # Initialize components
        self.calculator = Calculator(store)
        self.input_manager = InputManager(self.calculator)
        self.notifier = HostContextNotifier(sdk or StandaloneSDK())

        self.create_widgets()
        self.calculator.add_listener(self.on_calculator_change)
        self.context = self.notifier.start(after_render=self._initial_render)

        self.root.bind('<Key>', self.on_key_press)

    def create_widgets(self):
        T = self.T
        display = tk.Frame(self.root, bg=T["display_bg"])
        display.pack(side=tk.TOP, fill=tk.X, padx=8, pady=8)

        self.env_label = tk.Label(display, text=config.ENV_LABEL_WEB, font=config.LABEL_FONT,
                                  bg=T["display_bg"], fg=T["subtext"], anchor=tk.W)
        self.env_label.pack(fill=tk.X, padx=8)
        self.expr_display = tk.Label(display, text="0", font=config.EXPR_FONT,
                                     bg=T["display_bg"], fg=T["expr_fg"], anchor=tk.E)
        self.expr_display.pack(fill=tk.X, padx=8)
        self.result_display = tk.Label(display, text="0", font=config.RESULT_FONT,
                                       bg=T["display_bg"], fg=T["result_fg"], anchor=tk.E)
        self.result_display.pack(fill=tk.X, padx=8, pady=(0, 6))

        keypad = tk.Frame(self.root, bg=T["bg"])
        keypad.pack(side=tk.TOP, fill=tk.BOTH, expand=True, padx=8)
        for r, row in enumerate(config.KEYPAD):
            for c, (label, value, kind) in enumerate(row):
                btn = self._key_btn(keypad, label, value, kind)
                btn.grid(row=r, column=c, columnspan=4 if len(row) == 1 else 1,
                         sticky="nsew", padx=2, pady=2)
            keypad.rowconfigure(r, weight=1)
        for c in range(4):
            keypad.columnconfigure(c, weight=1)

        self.history_list = tk.Listbox(self.root, height=config.MAX_HISTORY_ITEMS,
                                       font=config.LABEL_FONT, bg=T["history_bg"],
                                       fg=T["history_fg"], relief=tk.FLAT,
                                       highlightthickness=0, activestyle="none")
        self.history_list.pack(side=tk.BOTTOM, fill=tk.X, padx=8, pady=8)
        self.history_list.bind("<<ListboxSelect>>", self.on_history_select)

    def _key_btn(self, parent, label, value, kind):
        T = self.T
        if kind == "eq":
            bg, fg = T["equals_bg"], T["equals_fg"]
        elif kind == "op":
            bg, fg = T["btn_bg"], T["operator_fg"]
        elif kind == "util":
            bg, fg = T["btn_bg"], T["util_fg"]
        else:
            bg, fg = T["btn_bg"], T["btn_fg"]
        return tk.Button(
            parent, text=label, font=config.BUTTON_FONT, bg=bg, fg=fg,
            activebackground=T["display_bg"], activeforeground=fg,
            relief=tk.FLAT, bd=0, cursor="hand2",
            command=lambda: self.input_manager.handle_key(value, kind),
        )

    def _initial_render(self, context):
        self.env_label.config(text=context.label)
        self.update_display()
        self.update_history()

    def on_calculator_change(self, event, calculator):
        if event == "history":
            self.update_history()
        else:
            self.update_display()

    def update_display(self):
        state = self.calculator.display_state()
        self.expr_display.config(text=state.expression_text)
        self.result_display.config(text=state.result_text)

    def update_history(self):
        self.history_list.delete(0, tk.END)
        for line in self.calculator.history_manager.format_history(self.calculator.history):
            self.history_list.insert(tk.END, line)

    def on_history_select(self, event=None):
        selection = self.history_list.curselection()
        if selection:
            self.calculator.select_history_index(selection[0])
            self.history_list.selection_clear(0, tk.END)

    def on_key_press(self, event):
        """Handle keyboard input"""
        key = KEYSYM_NAMES.get(event.keysym, event.char)
        if key:
            self.input_manager.handle_keydown(key)
        return "break"
