"""Behavioural tests for the counterweight stack."""

import logging
import threading

import pytest

from cwstack.helpers import rule
from cwstack.result import Err, Ok
from cwstack.rules import CounterweightRule
from cwstack.stack import CounterweightStack, PopRejected, RejectReason


class Handle:
    def __deepcopy__(self, memo):
        raise TypeError("handles cannot be copied")


class Slotted:
    __slots__ = ("value",)

    def __init__(self, value):
        self.value = value

    def __eq__(self, other):
        return isinstance(other, Slotted) and self.value == other.value

    __hash__ = None


def keyword_stack() -> CounterweightStack[str]:
    return CounterweightStack(
        [
            CounterweightRule("begin", ["end", "end."]),
            CounterweightRule("if", ["then"]),
        ]
    )


class TestPushPeekSize:
    @pytest.mark.parametrize("items", [[], ["a"], ["a", "b", "c"], list(range(50))])
    def test_size_tracks_pushes_and_peek_is_last(self, items):
        s = CounterweightStack([])
        for item in items:
            s.push(item)
        assert s.size() == len(items)
        assert len(s) == len(items)
        assert s.is_empty() == (not items)
        assert s.peek() == (items[-1] if items else None)

    def test_peek_does_not_mutate(self):
        s = keyword_stack()
        s.push("begin")
        assert s.peek() == "begin"
        assert s.peek() == "begin"
        assert s.size() == 1

    def test_pushed_elements_are_stored_not_cloned(self):
        s = CounterweightStack([])
        item = {"k": 1}
        s.push(item)
        assert s.peek() is item


class TestPop:
    def test_pop_on_empty_is_absent(self):
        s = keyword_stack()
        assert s.pop("end") is None
        assert s.size() == 0

    @pytest.mark.parametrize("attempt", ["end", "then", "myVar", None, 0])
    def test_top_without_rule_never_pops(self, attempt):
        s = keyword_stack()
        s.push("begin")
        s.push("myVar")
        assert s.pop(attempt) is None
        assert s.size() == 2
        assert s.peek() == "myVar"

    def test_pop_requires_counterweight_of_the_top(self):
        s = keyword_stack()
        s.push("begin")
        s.push("if")
        assert s.pop("end") is None  # counterweight of begin, but if is on top
        assert s.size() == 2
        assert s.pop("then") == "if"
        assert s.size() == 1

    @pytest.mark.parametrize("closer", ["end", "end."])
    def test_any_listed_counterweight_pops(self, closer):
        s = keyword_stack()
        s.push("begin")
        assert s.pop(closer) == "begin"
        assert s.is_empty()

    def test_duplicate_matching_counterweights_pop_once(self):
        s = CounterweightStack([rule("x", "y", "y")])
        s.push("x")
        s.push("x")
        assert s.pop("y") == "x"
        assert s.size() == 1

    def test_shadowed_rule_is_ignored(self):
        s = CounterweightStack([rule("x", "a"), rule("x", "b")])
        s.push("x")
        assert s.pop("b") is None
        assert s.pop("a") == "x"

    def test_matching_is_by_value(self):
        s = CounterweightStack(
            [rule({"type": "KEYWORD", "value": "begin"}, {"type": "KEYWORD", "value": "end"})]
        )
        s.push({"type": "KEYWORD", "value": "begin"})
        assert s.pop({"type": "KEYWORD", "value": "end."}) is None
        assert s.pop({"type": "KEYWORD", "value": "end"}) == {
            "type": "KEYWORD",
            "value": "begin",
        }

    def test_numeric_types_do_not_match_each_other(self):
        s = CounterweightStack([rule(1, 0)])
        s.push(True)
        assert s.pop(0) is None
        s.push(1)
        assert s.pop(False) is None
        assert s.pop(0.0) is None
        assert s.pop(0) == 1

    def test_returns_the_pushed_object(self):
        s = CounterweightStack([rule({"v": 1}, "close")])
        item = {"v": 1}
        s.push(item)
        assert s.pop("close") is item


class TestTryPop:
    def test_ok_on_success(self):
        s = keyword_stack()
        s.push("if")
        assert s.try_pop("then") == Ok("if")
        assert s.is_empty()

    @pytest.mark.parametrize(
        "pushed, attempt, reason",
        [
            ([], "end", RejectReason.EMPTY),
            (["myVar"], "end", RejectReason.NO_RULE),
            (["begin"], "then", RejectReason.NOT_A_COUNTERWEIGHT),
        ],
    )
    def test_err_names_the_reason(self, pushed, attempt, reason):
        s = keyword_stack()
        for item in pushed:
            s.push(item)
        match s.try_pop(attempt):
            case Err(PopRejected() as rejected):
                assert rejected.reason is reason
                assert rejected.top == (pushed[-1] if pushed else None)
            case other:
                pytest.fail(f"expected Err, got {other!r}")
        assert s.size() == len(pushed)

    def test_rejections_are_logged_at_debug(self, caplog):
        s = keyword_stack()
        s.push("begin")
        with caplog.at_level(logging.DEBUG, logger="cwstack.stack"):
            s.pop("then")
        assert any("not_a_counterweight" in r.message for r in caplog.records)

    def test_none_element_is_distinguishable_with_try_pop(self):
        s = CounterweightStack([rule(None, "close")])
        s.push(None)
        assert s.try_pop("close") == Ok(None)
        assert s.is_empty()


class TestCanPop:
    def test_predicate_does_not_mutate(self):
        s = keyword_stack()
        assert not s.can_pop("end")
        s.push("begin")
        assert s.can_pop("end")
        assert s.can_pop("end.")
        assert not s.can_pop("then")
        assert s.size() == 1


class TestClear:
    def test_clear_empties_but_keeps_rules(self):
        s = keyword_stack()
        s.push("begin")
        s.push("myVar")
        s.clear()
        assert s.size() == 0
        assert s.is_empty()
        assert s.peek() is None
        assert s.pop("end") is None

        s.push("if")
        assert s.pop("then") == "if"

    def test_clear_on_empty_stack(self):
        s = keyword_stack()
        s.clear()
        assert s.is_empty()


class TestCompareTop:
    def test_false_when_empty(self):
        assert not keyword_stack().compare_top("begin")

    def test_deep_equality_with_top(self):
        s = CounterweightStack([])
        s.push({"type": "KEYWORD", "value": "if"})
        assert s.compare_top({"type": "KEYWORD", "value": "if"})
        assert not s.compare_top({"type": "KEYWORD", "value": "then"})

    def test_uses_injected_comparator(self):
        s = CounterweightStack([], eq=lambda a, b: a.lower() == b.lower())
        s.push("Begin")
        assert s.compare_top("BEGIN")


class TestIsolation:
    def test_mutating_rules_after_construction_has_no_effect(self):
        rules = [CounterweightRule("begin", ["end"])]
        s = CounterweightStack(rules)

        rules[0].counterweights.clear()
        rules[0].counterweights.append("fin")
        rules.append(CounterweightRule("if", ["then"]))

        s.push("if")
        assert s.pop("then") is None
        s.clear()
        s.push("begin")
        assert s.pop("fin") is None
        assert s.pop("end") == "begin"

    def test_uncopyable_rules_still_work(self, caplog):
        handle = Handle()
        with caplog.at_level(logging.WARNING, logger="cwstack.rules"):
            s = CounterweightStack([rule("guarded", handle)])
        assert caplog.records
        s.push("guarded")
        assert s.pop("other") is None
        assert s.pop(handle) == "guarded"

    def test_slotted_rule_objects_pop_by_reference_and_by_value(self):
        begin, end = Slotted("begin"), Slotted("end")
        s = CounterweightStack([rule(begin, end)])
        s.push(begin)
        assert s.pop(end) is begin
        s.push(Slotted("begin"))
        assert s.pop(Slotted("end")) == Slotted("begin")
        assert s.is_empty()

    def test_sentinels_keep_their_identity(self):
        opened, closed = object(), object()
        s = CounterweightStack([rule(opened, closed)])
        s.push(opened)
        assert s.pop(object()) is None
        assert s.pop(closed) is opened

    def test_lock_elements_are_shared_with_rules(self):
        lock = threading.Lock()
        s = CounterweightStack([rule(lock, "release")])
        s.push(lock)
        assert s.pop("release") is lock

    def test_instances_are_independent(self):
        a = keyword_stack()
        b = keyword_stack()
        a.push("begin")
        assert b.is_empty()


def test_begin_if_scenario() -> None:
    s = keyword_stack()
    s.push("begin")
    s.push("if")
    assert s.size() == 2
    assert s.peek() == "if"

    assert s.pop("begin") is None
    assert s.size() == 2

    assert s.pop("then") == "if"
    assert s.size() == 1
    assert s.peek() == "begin"

    assert s.pop("end") == "begin"
    assert s.size() == 0
    assert s.is_empty()


def test_element_without_rule_is_stuck_until_clear() -> None:
    s = keyword_stack()
    ident = {"type": "IDENTIFIER"}
    s.push(ident)
    for attempt in ["end", "then", ident, {"type": "IDENTIFIER"}, None]:
        assert s.pop(attempt) is None
    assert s.size() == 1
    s.clear()
    assert s.is_empty()


def test_repr() -> None:
    s = keyword_stack()
    s.push("begin")
    assert repr(s) == "CounterweightStack(size=1, top='begin', rules=2)"
