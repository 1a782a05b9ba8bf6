"""
Input Manager for FlashCalc
Maps virtual keypad presses and physical key events to calculator operations
"""
from typing import NamedTuple

DIGIT_KEYS = set("0123456789.")
OPERATOR_KEYS = set("+-*/")
COMMIT_KEYS = {"Enter", "="}
CLEAR_KEY = "C"
BACKSPACE_KEY = "⌫"


class KeyOutcome(NamedTuple):
    handled: bool
    prevent_default: bool = False


class InputManager:
    def __init__(self, calculator):
        self.calculator = calculator

    def handle_key(self, value, kind):
        """Dispatch a keypad button by its data-key value and data-kind"""
        if not value or not kind:
            return False
        if kind in ("num", "op"):
            self.calculator.append_token(value)
        elif kind == "eq":
            self.calculator.commit()
        elif kind == "util" and value == CLEAR_KEY:
            self.calculator.clear()
        elif kind == "util" and value == BACKSPACE_KEY:
            self.calculator.backspace()
        else:
            return False
        return True

    def handle_keydown(self, key):
        """Dispatch a physical keyboard key name (DOM ``KeyboardEvent.key`` style)"""
        if key in DIGIT_KEYS or key in OPERATOR_KEYS:
            self.calculator.append_token(key)
        elif key in COMMIT_KEYS:
            self.calculator.commit()
            return KeyOutcome(True, prevent_default=True)
        elif key == "Backspace":
            self.calculator.backspace()
        elif key == "Escape":
            self.calculator.clear()
        else:
            return KeyOutcome(False)
        return KeyOutcome(True)
