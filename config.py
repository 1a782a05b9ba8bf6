"""
FlashCalc Configuration Settings
"""
import os
import sys

# Application Settings
APP_NAME = "FlashCalc"
VERSION = "1.0.0"

# Display Settings (compact widget window)
WINDOW_WIDTH = 360
WINDOW_HEIGHT = 560
EXPR_FONT = ("Consolas", 14)
RESULT_FONT = ("Consolas", 28, "bold")
BUTTON_FONT = ("Segoe UI", 14)
LABEL_FONT = ("Segoe UI", 10)

# ── Palette ────────────────────────────────────────────────────────────────────
THEME = {
    "bg":           "#1E2530",
    "display_bg":   "#161C26",
    "expr_fg":      "#7C8DA0",
    "result_fg":    "#9ADDB0",   # LCD green-on-dark
    "btn_bg":       "#283040",
    "btn_fg":       "#BDD0E0",
    "operator_fg":  "#4DB888",
    "util_fg":      "#E55A4E",
    "equals_bg":    "#2D8A58",
    "equals_fg":    "#FFFFFF",
    "history_bg":   "#161C26",
    "history_fg":   "#BDD0E0",
    "subtext":      "#4E6070",
}

# Keypad layout: (label, data-key, kind) rows, mirrored by web/index.html
KEYPAD = [
    [("C", "C", "util"), ("⌫", "⌫", "util"), ("(", "(", "op"), (")", ")", "op")],
    [("7", "7", "num"), ("8", "8", "num"), ("9", "9", "num"), ("÷", "/", "op")],
    [("4", "4", "num"), ("5", "5", "num"), ("6", "6", "num"), ("×", "*", "op")],
    [("1", "1", "num"), ("2", "2", "num"), ("3", "3", "num"), ("−", "-", "op")],
    [("0", "0", "num"), (".", ".", "num"), ("%", "%", "op"), ("+", "+", "op")],
    [("=", "=", "eq")],
]

# Storage Settings
DB_PATH = os.environ.get(
    "FLASHCALC_DB_PATH", os.path.join(os.path.dirname(__file__), "flashcalc.db")
)
EXPR_KEY = "flashcalc-expr-v1"
HIST_KEY = "flashcalc-history-v1"
DEFAULT_EXPRESSION = "0"

# History Settings
MAX_HISTORY_ITEMS = 7

# Host (mini app) context
MINI_APP_HEADER = "X-Mini-App"
MINI_APP_QUERY_PARAM = "miniApp"
ENV_LABEL_MINI_APP = "mini app"
ENV_LABEL_WEB = "web"

# Web Portal settings
WEB_HOST = os.environ.get("FLASHCALC_HOST", "0.0.0.0")
WEB_PORT = int(os.environ.get("FLASHCALC_PORT", "8888"))

# Static web page: beside the modules in a checkout, under share/ once installed
_CHECKOUT_WEB_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "web")
_INSTALLED_WEB_DIR = os.path.join(sys.prefix, "share", "flashcalc", "web")
WEB_DIR = os.environ.get("FLASHCALC_WEB_DIR") or (
    _CHECKOUT_WEB_DIR if os.path.isdir(_CHECKOUT_WEB_DIR) else _INSTALLED_WEB_DIR
)

# Logging
LOG_LEVEL = os.environ.get("FLASHCALC_LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
