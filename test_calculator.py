"""
Test the expression-state manager
"""
import json

import pytest

import config
from calculator import Calculator, DisplayState
from database import MemoryStore
from history_manager import HistoryEntry


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def calc(store):
    return Calculator(store)


def with_expression(store, expression):
    store.data[config.EXPR_KEY] = expression
    return Calculator(store)


def test_starts_at_zero_when_store_empty(calc):
    assert calc.expression == "0"
    assert calc.history == []


def test_empty_stored_expression_reads_as_zero(store):
    assert with_expression(store, "").expression == "0"


def test_restores_expression_and_history(store):
    store.data[config.EXPR_KEY] = "12+3"
    store.data[config.HIST_KEY] = '[{"expr":"1+1","result":"2"}]'
    calc = Calculator(store)
    assert calc.expression == "12+3"
    assert calc.history == [HistoryEntry("1+1", "2")]


def test_unreadable_store_falls_back_to_defaults():
    calc = Calculator(MemoryStore({config.EXPR_KEY: "5"}, fail_reads=True))
    assert calc.expression == "0"
    assert calc.history == []


@pytest.mark.parametrize("token", list("0123456789."))
def test_digit_replaces_initial_zero(calc, token):
    assert calc.append_token(token) == token


@pytest.mark.parametrize("token", ["+", "-", "*", "/", "%", "(", ")"])
def test_operator_appends_to_initial_zero(calc, token):
    assert calc.append_token(token) == "0" + token


def test_append_concatenates_and_persists(calc, store):
    for token in "12+3":
        calc.append_token(token)
    assert calc.expression == "12+3"
    assert store.data[config.EXPR_KEY] == "12+3"


def test_malformed_expression_accumulates(calc):
    for token in "2++":
        calc.append_token(token)
    assert calc.expression == "2++"


def test_clear_is_idempotent(store):
    calc = with_expression(store, "42+1")
    calc.clear()
    once = calc.expression
    calc.clear()
    assert once == calc.expression == "0"
    assert store.data[config.EXPR_KEY] == "0"


def test_backspace_drops_last_character(store):
    assert with_expression(store, "123").backspace() == "12"


@pytest.mark.parametrize("expression", ["7", "0", "+"])
def test_backspace_on_single_character_yields_zero(store, expression):
    assert with_expression(store, expression).backspace() == "0"


def test_commit_replaces_expression_and_records_history(store):
    calc = with_expression(store, "2+2")
    assert calc.commit() is True
    assert calc.expression == "4"
    assert calc.history[0] == HistoryEntry("2+2", "4")
    assert store.data[config.EXPR_KEY] == "4"
    assert json.loads(store.data[config.HIST_KEY]) == [{"expr": "2+2", "result": "4"}]


@pytest.mark.parametrize("expression", ["5/0", "2+", "((", "2--3", "2++3"])
def test_commit_without_result_is_noop(store, expression):
    calc = with_expression(store, expression)
    writes_before = store.writes
    events = []
    calc.add_listener(lambda event, c: events.append(event))

    assert calc.commit() is False
    assert calc.expression == expression
    assert calc.history == []
    assert store.writes == writes_before
    assert config.HIST_KEY not in store.data
    assert events == []


def test_history_keeps_seven_most_recent(calc):
    for i in range(1, 9):
        calc.clear()
        calc.append_token(str(i))
        calc.append_token("+0")
        assert calc.commit()

    assert len(calc.history) == config.MAX_HISTORY_ITEMS
    assert [e.expr for e in calc.history] == [f"{i}+0" for i in range(8, 1, -1)]
    assert HistoryEntry("1+0", "1") not in calc.history


def test_commit_survives_write_failures():
    store = MemoryStore({config.EXPR_KEY: "6*7"})
    calc = Calculator(store)
    store.fail_writes = True

    assert calc.commit() is True
    assert calc.expression == "42"
    assert calc.history == [HistoryEntry("6*7", "42")]
    assert store.data[config.EXPR_KEY] == "6*7"


def test_select_history_entry_uses_result(store):
    store.data[config.HIST_KEY] = '[{"expr":"4+5","result":"9"}]'
    calc = with_expression(store, "1+1")
    entry = calc.history[0]

    assert calc.select_history_entry(entry) is True
    assert calc.expression == "9"
    assert store.data[config.EXPR_KEY] == "9"
    assert calc.history == [entry]


def test_select_unknown_entry_is_noop(calc):
    assert calc.select_history_entry(HistoryEntry("1+2", "3")) is False
    assert calc.expression == "0"


def test_select_history_index(calc):
    calc.append_token("3*3")
    calc.commit()
    calc.clear()
    assert calc.select_history_index(0) is True
    assert calc.expression == "9"
    assert calc.select_history_index(1) is False
    assert calc.select_history_index(-1) is False


def test_display_state(store):
    assert with_expression(store, "2*3").display_state() == DisplayState("2*3", "6")
    assert with_expression(store, "2*").display_state() == DisplayState("2*", "0")


def test_listeners_receive_display_and_history_events(calc):
    events = []
    calc.add_listener(lambda event, c: events.append((event, c.expression)))

    calc.append_token("8")
    calc.append_token("/")
    calc.append_token("2")
    calc.commit()

    assert events == [
        ("display", "8"),
        ("display", "8/"),
        ("display", "8/2"),
        ("display", "4"),
        ("history", "4"),
    ]


def test_keypad_double_minus_does_not_commit(calc, store):
    for token in ["2", "-", "-", "3"]:
        calc.append_token(token)
    assert calc.expression == "2--3"
    assert calc.display_state().result_text == "0"
    assert calc.commit() is False
    assert calc.history == []
    assert config.HIST_KEY not in store.data
