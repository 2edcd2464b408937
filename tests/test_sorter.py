"""Tests for PrioritySorter ordering rules."""

import pytest

from module_activation.errors import CyclicOrderingError
from module_activation.sorter import PrioritySorter


def test_alphabetical_baseline_without_metadata(make_metadata):
    """Test ids are sorted alphabetically when nothing else applies."""
    sorter = PrioritySorter(make_metadata())

    assert sorter.sort({"c", "a", "b"}) == ["a", "b", "c"]


def test_priority_then_constraint_example(make_metadata):
    """Test priority pass followed by an after constraint."""
    metadata = make_metadata(
        {
            "A": {"priority": 0},
            "B": {"priority": 0, "after": ["A"]},
            "C": {"priority": -10},
        }
    )

    assert PrioritySorter(metadata).sort(["C", "A", "B"]) == ["C", "A", "B"]


def test_lower_priority_first_when_unconstrained(make_metadata):
    """Test lower priority values are processed first."""
    metadata = make_metadata({"zeta": {"priority": 1}, "alpha": {"priority": 2}})

    assert PrioritySorter(metadata).sort(["alpha", "zeta"]) == ["zeta", "alpha"]


def test_neutral_priority_keeps_alphabetical_order(make_metadata):
    """Test explicit neutral priority does not disturb the baseline."""
    metadata = make_metadata({"b": {"priority": 0}, "early": {"priority": -1}})

    assert PrioritySorter(metadata).sort(["c", "b", "a", "early"]) == ["early", "a", "b", "c"]


def test_after_constraint_overrides_priority(make_metadata):
    """Test an after constraint wins over a conflicting priority."""
    metadata = make_metadata({"A": {"priority": 10}, "B": {"priority": -10, "after": ["A"]}})

    assert PrioritySorter(metadata).sort(["A", "B"]) == ["A", "B"]


def test_before_constraint_overrides_priority(make_metadata):
    """Test a before constraint wins over a conflicting priority."""
    metadata = make_metadata({"X": {"priority": 5, "before": ["Y"]}, "Y": {"priority": -5}})

    assert PrioritySorter(metadata).sort(["Y", "X"]) == ["X", "Y"]


def test_constraint_moves_only_what_it_must(make_metadata):
    """Test ready modules are emitted in priority order around a constraint."""
    metadata = make_metadata({"c": {"before": ["a"]}})

    assert PrioritySorter(metadata).sort(["a", "b", "c"]) == ["b", "c", "a"]


def test_before_all_and_after_all(make_metadata):
    """Test before_all modules lead and after_all modules trail."""
    metadata = make_metadata(
        {
            "a": {"after_all": True},
            "z": {"before_all": True},
            "y": {"before_all": True, "priority": 1},
        }
    )

    assert PrioritySorter(metadata).sort(["a", "m", "y", "z"]) == ["z", "y", "m", "a"]


def test_dangling_and_self_references_are_ignored(make_metadata):
    """Test constraints on absent ids and on the module itself are dropped."""
    metadata = make_metadata(
        {
            "a": {"after": ["missing", "a"]},
            "b": {"before": ["gone", "b"]},
        }
    )

    assert PrioritySorter(metadata).sort(["b", "a"]) == ["a", "b"]


def test_cycle_is_reported(make_metadata):
    """Test mutual before constraints fail with both ids named."""
    metadata = make_metadata({"X": {"before": ["Y"]}, "Y": {"before": ["X"]}})

    with pytest.raises(CyclicOrderingError) as exc_info:
        PrioritySorter(metadata).sort(["X", "Y"])

    assert exc_info.value.unresolved == ["X", "Y"]
    assert "X" in str(exc_info.value)
    assert "Y" in str(exc_info.value)


def test_cycle_reports_unplaced_modules_only(make_metadata):
    """Test modules placed before the cycle are not reported."""
    metadata = make_metadata(
        {
            "b": {"after": ["c"]},
            "c": {"after": ["b"]},
        }
    )

    with pytest.raises(CyclicOrderingError) as exc_info:
        PrioritySorter(metadata).sort(["a", "b", "c"])

    assert exc_info.value.unresolved == ["b", "c"]


def test_before_all_conflicting_with_explicit_constraint_is_a_cycle(make_metadata):
    """Test a module cannot both lead everything and follow a regular module."""
    metadata = make_metadata({"first": {"before_all": True, "after": ["other"]}})

    with pytest.raises(CyclicOrderingError):
        PrioritySorter(metadata).sort(["first", "other"])


def test_sort_is_deterministic(make_metadata):
    """Test repeated sorts of differently ordered input agree."""
    metadata = make_metadata(
        {
            "m3": {"priority": -1},
            "m5": {"after": ["m1"]},
            "m2": {"before": ["m4"]},
        }
    )
    sorter = PrioritySorter(metadata)
    ids = [f"m{i}" for i in range(1, 7)]

    first = sorter.sort(ids)
    assert sorter.sort(list(reversed(ids))) == first
    assert sorter.sort(set(ids)) == first
    assert first == ["m3", "m1", "m2", "m4", "m5", "m6"]


def test_duplicates_collapse(make_metadata):
    """Test duplicate ids appear once."""
    assert PrioritySorter(make_metadata()).sort(["b", "a", "b"]) == ["a", "b"]
