from __future__ import annotations

from arctic_sky.explorer.reconcile import diff_keyed


def test_diff_partitions_keys_three_ways() -> None:
    previous = {"Alpha|Jan": 1, "Alpha|Feb": 2, "Beta|Jan": 3}
    target = {"Beta|Jan": 30, "Alpha|Mar": 40, "Alpha|Jan": 10}

    diff = diff_keyed(previous, target)

    assert diff.entered == ("Alpha|Mar",)
    assert diff.retained == ("Beta|Jan", "Alpha|Jan")
    assert diff.exited == ("Alpha|Feb",)


def test_first_draw_enters_everything() -> None:
    diff = diff_keyed({}, {"a": 1, "b": 2})

    assert diff.entered == ("a", "b")
    assert diff.retained == ()
    assert diff.exited == ()


def test_clearing_exits_everything_in_previous_order() -> None:
    diff = diff_keyed({"b": 1, "a": 2}, {})
    assert diff.exited == ("b", "a")


def test_empty_diff() -> None:
    assert diff_keyed({}, {}).is_empty
    assert not diff_keyed({"a": 1}, {"a": 1}).is_empty
