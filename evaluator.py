"""
Expression evaluation for FlashCalc
Sanitizes display text and evaluates it with an arithmetic-only grammar
"""
import ast
import math
import operator
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

GLYPHS = {
    "÷": "/",
    "×": "*",
    "−": "-",
    ",": ".",
}

_DISALLOWED = re.compile(r"[^0-9+\-*/%.() ]")
# "++" and "--" read as increment/decrement tokens, not as two signs
_ADJACENT_SIGNS = re.compile(r"\+\+|--")

BINARY_OPS = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.Mod: math.fmod,
}

UNARY_OPS = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
}


class EvaluationError(ValueError):
    """Raised for expressions outside the arithmetic grammar."""

    def __init__(self, kind, message=""):
        super().__init__(message or kind)
        self.kind = kind


@dataclass(frozen=True)
class Evaluation:
    ok: bool
    text: str = ""
    error: Optional[str] = None


def sanitize(text: str) -> str:
    """Map operator glyphs to ASCII and strip everything outside the whitelist."""
    for glyph, ascii_op in GLYPHS.items():
        text = text.replace(glyph, ascii_op)
    return _DISALLOWED.sub("", text)


def _eval_node(node: ast.AST) -> float:
    if isinstance(node, ast.BinOp) and type(node.op) in BINARY_OPS:
        left = _eval_node(node.left)
        right = _eval_node(node.right)
        if isinstance(node.op, (ast.Div, ast.Mod)) and right == 0:
            raise EvaluationError("division_by_zero")
        return BINARY_OPS[type(node.op)](left, right)
    if isinstance(node, ast.UnaryOp) and type(node.op) in UNARY_OPS:
        return UNARY_OPS[type(node.op)](_eval_node(node.operand))
    if isinstance(node, ast.Constant) and type(node.value) in (int, float):
        return float(node.value)
    raise EvaluationError("unsupported", type(node).__name__)


def format_number(value: float) -> str:
    """Canonical decimal text: shortest round-trip digits, exponent only
    below 1e-6 or from 1e21 upwards."""
    if value == 0:
        return "0"
    sign = "-" if value < 0 else ""
    digits_tuple, exponent = Decimal(repr(abs(value))).normalize().as_tuple()[1:]
    digits = "".join(str(d) for d in digits_tuple)
    k = len(digits)
    n = exponent + k  # position of the decimal point relative to the digits

    if k <= n <= 21:
        body = digits + "0" * (n - k)
    elif 0 < n <= 21:
        body = digits[:n] + "." + digits[n:]
    elif -6 < n <= 0:
        body = "0." + "0" * -n + digits
    else:
        e = n - 1
        mantissa = digits if k == 1 else digits[0] + "." + digits[1:]
        body = f"{mantissa}e{'+' if e >= 0 else '-'}{abs(e)}"
    return sign + body


def evaluate_expression(text: str) -> Evaluation:
    """Evaluate text, reporting the failure kind instead of raising."""
    safe = sanitize(text)
    if not safe.strip():
        return Evaluation(ok=False, error="blank")
    if _ADJACENT_SIGNS.search(safe):
        return Evaluation(ok=False, error="syntax")
    try:
        tree = ast.parse(safe.strip(), mode="eval")
        value = _eval_node(tree.body)
    except EvaluationError as e:
        return Evaluation(ok=False, error=e.kind)
    except (SyntaxError, ValueError):
        return Evaluation(ok=False, error="syntax")
    except (OverflowError, RecursionError, MemoryError):
        return Evaluation(ok=False, error="non_finite")
    if not math.isfinite(value):
        return Evaluation(ok=False, error="non_finite")
    return Evaluation(ok=True, text=format_number(value))


def evaluate(text: str) -> str:
    """Return the result text for text, or "" when there is no valid result."""
    return evaluate_expression(text).text
