"""
Calculator Engine for FlashCalc
Owns the current expression and the calculation history
"""
import logging
import re
from dataclasses import dataclass

import config
from database import read_value, write_value
from evaluator import evaluate
from history_manager import HistoryEntry, HistoryManager

logger = logging.getLogger(__name__)

_REPLACES_ZERO = re.compile(r"[0-9.]")


@dataclass(frozen=True)
class DisplayState:
    expression_text: str
    result_text: str


class Calculator:
    """Expression-state manager.

    Every operation reads the in-memory state, mutates it, writes it through
    to the store and notifies listeners with ``"display"`` or ``"history"``.
    """

    def __init__(self, store, history_manager=None, expr_key=config.EXPR_KEY):
        self.store = store
        self.expr_key = expr_key
        self.history_manager = history_manager or HistoryManager(store)
        self.listeners = []
        self.expression = self._load_expression()
        self.history = self.history_manager.load()

    def _load_expression(self):
        stored = read_value(self.store, self.expr_key)
        if stored.ok and stored.value:
            return stored.value
        return config.DEFAULT_EXPRESSION

    def add_listener(self, callback):
        """Register callback(event, calculator), called after each re-render point"""
        self.listeners.append(callback)

    def _notify(self, event):
        for callback in self.listeners:
            callback(event, self)

    def set_expression(self, expression):
        """Replace the expression, persist it and re-render"""
        self.expression = expression or config.DEFAULT_EXPRESSION
        write_value(self.store, self.expr_key, self.expression)
        self._notify("display")
        return self.expression

    def get_expression(self):
        return self.expression or config.DEFAULT_EXPRESSION

    def append_token(self, token):
        """Add a digit, decimal point or operator to the expression"""
        if self.expression == "0" and _REPLACES_ZERO.search(token):
            return self.set_expression(token)
        return self.set_expression(self.expression + token)

    def clear(self):
        return self.set_expression(config.DEFAULT_EXPRESSION)

    def backspace(self):
        """Drop the last character; a single character falls back to "0"."""
        if len(self.expression) <= 1:
            return self.set_expression(config.DEFAULT_EXPRESSION)
        return self.set_expression(self.expression[:-1])

    def commit(self):
        """Evaluate the expression and record it in history.

        Returns False without touching state or storage when the
        expression has no valid result.
        """
        previous = self.expression
        result = evaluate(previous)
        if result == "":
            logger.debug("Commit ignored for %r", previous)
            return False

        self.set_expression(result)
        self.history = self.history_manager.push(self.history, HistoryEntry(previous, result))
        self.history_manager.save(self.history)
        self._notify("history")
        return True

    def select_history_entry(self, entry):
        """Load a past result into the expression"""
        if entry not in self.history:
            return False
        self.set_expression(entry.result)
        return True

    def select_history_index(self, index):
        if not 0 <= index < len(self.history):
            return False
        return self.select_history_entry(self.history[index])

    def display_state(self):
        expression = self.get_expression()
        result = evaluate(expression)
        return DisplayState(expression, result or "0")
