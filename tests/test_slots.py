"""Tests for slot usage in flatzip classes."""

import flatzip as fz


def _check_slots(obj: object) -> bool:
    try:
        _x = obj.__dict__
        return False  # noqa: TRY300
    except AttributeError:
        return True


def test_slots() -> None:  # noqa: D103
    assert _check_slots(fz.flat_zip([]))
    assert _check_slots(fz.Group(0, []))
    assert _check_slots(fz.Groups([]))
    assert _check_slots(fz.Cursor([]))
    assert _check_slots(fz.Fuse(iter([])))
    assert _check_slots(fz.Cursor([]).rev())
    assert _check_slots(fz.Some(42))
    assert _check_slots(fz.NoneOption())
    assert _check_slots(fz.get_config())
