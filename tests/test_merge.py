import logging

from treenorm import Entity, array_of, normalize
from treenorm.errors import MergeConflict
from treenorm.merge import default_assign_entity, default_merge_into_entity


def _conflicts(caplog):
    return [r for r in caplog.records if r.name == "treenorm.merge" and r.levelno == logging.WARNING]


def test_merge_adds_missing_fields(caplog):
    stored = {"id": 1, "a": 1}
    default_merge_into_entity(stored, {"id": 1, "b": 2}, "things")
    assert stored == {"id": 1, "a": 1, "b": 2}
    assert _conflicts(caplog) == []


def test_merge_equal_values_is_quiet(caplog):
    stored = {"id": 1, "tags": ["a", "b"], "meta": {"x": 1}}
    default_merge_into_entity(stored, {"id": 1, "tags": ["a", "b"], "meta": {"x": 1}}, "things")
    assert stored == {"id": 1, "tags": ["a", "b"], "meta": {"x": 1}}
    assert _conflicts(caplog) == []


def test_merge_conflict_keeps_first_value(caplog):
    stored = {"id": 1, "a": 1}
    with caplog.at_level(logging.WARNING, logger="treenorm.merge"):
        default_merge_into_entity(stored, {"id": 1, "a": 2}, "things")

    assert stored["a"] == 1
    records = _conflicts(caplog)
    assert len(records) == 1
    conflict = records[0].conflict
    assert isinstance(conflict, MergeConflict)
    assert (conflict.entity_key, conflict.field, conflict.kept, conflict.discarded) == ("things", "a", 1, 2)
    assert "things" in records[0].getMessage()


def test_additive_merge_is_order_independent():
    things = array_of(Entity("things"))
    forward = normalize([{"id": 1, "a": 1}, {"id": 1, "b": 2}], things)
    backward = normalize([{"id": 1, "b": 2}, {"id": 1, "a": 1}], things)
    assert forward["entities"]["things"][1] == {"id": 1, "a": 1, "b": 2}
    assert backward["entities"]["things"][1] == {"id": 1, "a": 1, "b": 2}


def test_repeated_entity_conflict_through_normalize(caplog):
    with caplog.at_level(logging.WARNING, logger="treenorm.merge"):
        out = normalize([{"id": 1, "a": 1}, {"id": 1, "a": 2}], array_of(Entity("things")))
    assert out["entities"]["things"][1]["a"] == 1
    assert len(_conflicts(caplog)) == 1


def test_defaults_do_not_conflict(caplog):
    article = Entity("articles", defaults={"votes": 0})
    out = normalize({"id": 1, "votes": 5}, article)
    assert out["entities"]["articles"][1] == {"votes": 5, "id": 1}
    assert _conflicts(caplog) == []


def test_entity_merge_strategy_wins_over_option():
    calls = []

    def keep_last(existing, incoming, key):
        calls.append(key)
        existing.update(incoming)

    def never(existing, incoming, key):
        raise AssertionError("call-level strategy should not run")

    things = array_of(Entity("things", merge_strategy=keep_last))
    out = normalize([{"id": 1, "a": 1}, {"id": 1, "a": 2}], things, {"merge_into_entity": never})
    assert out["entities"]["things"][1]["a"] == 2
    assert calls == ["things"]


def test_default_assign_entity():
    out = {}
    default_assign_entity(out, "author", 7)
    assert out == {"author": 7}
