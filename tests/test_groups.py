"""Tests for Groups."""

import pytest

import flatzip as fz

PAIRS: list[tuple[str, list[int]]] = [("a", [1, 2]), ("b", []), ("c", [3])]


def _materialize(groups: fz.Option[fz.Group[str, int]]) -> fz.Option[list[tuple[str, int]]]:
    return groups.map(list)


def test_pulls_convert_one_pair_each() -> None:
    """Test that each pull turns exactly one pair into a group."""
    groups = fz.Groups(PAIRS)
    assert _materialize(groups.next()) == fz.Some([("a", 1), ("a", 2)])
    assert _materialize(groups.next_back()) == fz.Some([("c", 3)])
    assert list(next(groups)) == []
    assert groups.next() == fz.NONE
    assert groups.next_back() == fz.NONE


def test_conversion_is_lazy() -> None:
    """Test that the outer iterable is only read on demand."""
    pulled: list[str] = []

    def _pairs():  # noqa: ANN202
        for key, values in PAIRS:
            pulled.append(key)
            yield key, values

    groups = fz.Groups(_pairs())
    assert pulled == []
    groups.next()
    assert pulled == ["a"]


def test_nth() -> None:
    """Test skipping groups from both ends."""
    groups = fz.Groups(PAIRS)
    assert _materialize(groups.nth(2)) == fz.Some([("c", 3)])
    assert fz.Groups(PAIRS).nth_back(2).map(list) == fz.Some([("a", 1), ("a", 2)])
    assert fz.Groups(PAIRS).nth(3) == fz.NONE


def test_fold_and_rfold() -> None:
    """Test that folds hand groups over in outer order."""

    def _collect(acc: list[list[tuple[str, int]]], group: fz.Group[str, int]) -> list[list[tuple[str, int]]]:
        return [*acc, list(group)]

    assert fz.Groups(PAIRS).fold([], _collect) == [[("a", 1), ("a", 2)], [], [("c", 3)]]
    assert fz.Groups(PAIRS).rfold([], _collect) == [[("c", 3)], [], [("a", 1), ("a", 2)]]


def test_fold_on_forward_only_source() -> None:
    """Test fold over a generator of pairs, and rfold failing on it."""
    groups = fz.Groups((k, v) for k, v in PAIRS)
    assert groups.fold(0, lambda acc, group: acc + group.count()) == 3
    with pytest.raises(fz.NotDoubleEndedError):
        fz.Groups((k, v) for k, v in PAIRS).rfold(0, lambda acc, _: acc)


def test_last_and_count() -> None:
    """Test last and count over the outer pairs."""
    assert fz.Groups(PAIRS).last().map(list) == fz.Some([("c", 3)])
    assert fz.Groups([]).last() == fz.NONE
    assert fz.Groups(PAIRS).count() == 3


def test_mapping_source() -> None:
    """Test that mappings are read as key/value pairs."""
    groups = fz.Groups({"x": "ab", "y": "c"})
    assert groups.length() == 2
    assert groups.size_hint() == (2, fz.Some(2))
    assert groups.next_back().map(list) == fz.Some([("y", "c")])
    assert groups.length() == 1


def test_fused_forwarding() -> None:
    """Test that fusing follows the outer iterator."""

    class _Bare:
        def __iter__(self) -> "_Bare":
            return self

        def __next__(self) -> tuple[str, list[int]]:
            raise StopIteration

    assert fz.Groups(PAIRS).is_fused()
    assert not fz.Groups(_Bare()).is_fused()


def test_clone_is_passed_to_groups() -> None:
    """Test that the clone function reaches every group."""
    calls: list[str] = []

    def _clone(key: str) -> str:
        calls.append(key)
        return key

    list(fz.Groups(PAIRS, _clone).next().unwrap())
    assert calls == ["a", "a"]
