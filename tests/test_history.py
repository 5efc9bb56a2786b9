import pytest

from formbuilder.history import History
from formbuilder.models import FormField, Snapshot

from conftest import make_snapshot


def _titles(history):
    return [entry.title for entry in history.entries]


def test_initialize_holds_only_seed():
    seed = make_snapshot("Untitled")
    history = History(seed)
    assert len(history) == 1
    assert history.cursor == 0
    assert history.current() == seed
    assert not history.can_undo
    assert not history.can_redo


def test_max_size_must_be_positive():
    with pytest.raises(ValueError):
        History(make_snapshot("s0"), max_size=0)


def test_each_push_becomes_current():
    history = History(make_snapshot("s0"))
    for index in range(1, 6):
        snapshot = make_snapshot(f"s{index}")
        assert history.push(snapshot) is True
        assert history.current() == snapshot
        assert history.can_undo
        assert not history.can_redo
    assert history.cursor == 5


def test_boundary_undo_is_a_noop():
    history = History(make_snapshot("s0"))
    before = history.entries
    assert history.undo() is False
    assert history.entries == before
    assert history.cursor == 0
    assert not history.suppressing


def test_boundary_redo_is_a_noop():
    history = History(make_snapshot("s0"))
    history.push(make_snapshot("s1"))
    before = history.entries
    assert history.redo() is False
    assert history.entries == before
    assert history.cursor == 1
    assert not history.suppressing


def test_undo_redo_round_trip_keeps_content():
    s0, s1 = make_snapshot("s0"), make_snapshot("s1")
    history = History(s0)
    history.push(s1)
    reference = History(s0)
    reference.push(s1)

    history.undo()
    history.redo()

    assert history.current() == s1
    assert history.entries == reference.entries
    assert history.cursor == reference.cursor


def test_push_after_undo_is_swallowed_once():
    history = History(make_snapshot("s0"))
    history.push(make_snapshot("s1"))
    history.undo()
    assert history.suppressing

    # restoration echo from the editor
    assert history.push(make_snapshot("s0")) is False
    assert not history.suppressing
    assert _titles(history) == ["s0", "s1"]
    assert history.can_redo

    # the latch only absorbs one push
    assert history.push(make_snapshot("s2")) is True
    assert _titles(history) == ["s0", "s2"]


def test_new_push_discards_redo_branch():
    history = History(make_snapshot("s0"))
    history.push(make_snapshot("s1"))
    history.push(make_snapshot("s2"))
    history.undo()
    history.undo()
    # first push after undo is the restoration echo
    history.push(history.current())
    history.push(make_snapshot("s3"))

    assert _titles(history) == ["s0", "s3"]
    assert history.current().title == "s3"
    assert not history.can_redo


def test_branch_discard_keeps_prefix():
    history = History(make_snapshot("s0"))
    history.push(make_snapshot("s1"))
    history.push(make_snapshot("s2"))
    history.undo()
    history.push(history.current())
    history.undo()
    history.push(history.current())
    history.redo()
    history.push(history.current())
    history.push(make_snapshot("s3"))

    assert _titles(history) == ["s0", "s1", "s3"]
    assert history.cursor == 2


def test_bounded_growth_evicts_oldest():
    max_size = 10
    history = History(make_snapshot("seed"), max_size=max_size)
    pushed = [make_snapshot(f"s{index}") for index in range(max_size + 5)]
    for snapshot in pushed:
        history.push(snapshot)

    assert len(history) == max_size
    assert history.cursor == max_size - 1
    assert history.current() == pushed[-1]
    assert _titles(history) == [snapshot.title for snapshot in pushed[-max_size:]]


def test_eviction_with_size_one():
    history = History(make_snapshot("s0"), max_size=1)
    history.push(make_snapshot("s1"))
    assert len(history) == 1
    assert history.cursor == 0
    assert history.current().title == "s1"
    assert not history.can_undo


def test_pushed_snapshot_is_independent_of_caller(field_a):
    candidate = make_snapshot("Contact Us", [field_a])
    history = History(make_snapshot("Untitled"))
    history.push(candidate)

    candidate.title = "Changed"
    candidate.fields[0].label = "Changed"
    candidate.fields.append(FormField(id="field-b", type="email", label="Email"))

    current = history.current()
    assert current.title == "Contact Us"
    assert [item.label for item in current.fields] == ["Name"]


def test_current_returns_a_copy(field_a):
    history = History(make_snapshot("Contact Us", [field_a]))
    history.current().fields.clear()
    assert len(history.current().fields) == 1


def test_contact_form_scenario(field_a):
    history = History(Snapshot(title="Untitled"))
    history.push(Snapshot(title="Contact Us"))
    history.push(Snapshot(title="Contact Us", fields=[field_a]))

    assert history.can_undo
    assert not history.can_redo
    assert history.current().fields == [field_a]

    history.undo()
    assert history.current().title == "Contact Us"
    assert history.current().fields == []
    assert history.can_redo

    history.redo()
    assert history.current().fields == [field_a]
    assert not history.can_redo
