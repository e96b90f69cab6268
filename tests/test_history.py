import pytest

from pointerkeys.history import History


def test_empty_has_no_current():
    assert History().current() is None


def test_add_sets_current():
    h = History()
    h.add(3, 4)
    assert h.current() == (3, 4)


def test_prev_and_next():
    h = History()
    for p in [(1, 1), (2, 2), (3, 3)]:
        h.add(*p)
    h.prev()
    assert h.current() == (2, 2)
    h.prev()
    h.prev()
    assert h.current() == (1, 1)
    h.next()
    h.next()
    h.next()
    assert h.current() == (3, 3)


def test_add_after_prev_truncates_forward():
    h = History()
    h.add(1, 1)
    h.add(2, 2)
    h.prev()
    h.add(5, 5)
    h.next()
    assert h.current() == (5, 5)
    h.prev()
    assert h.current() == (1, 1)


def test_dedup():
    h = History()
    h.add(1, 1)
    h.add(1, 1)
    h.prev()
    assert h.current() == (1, 1)


def test_overflow_drops_oldest():
    h = History(size=3)
    for i in range(5):
        h.add(i, i)
    for _ in range(10):
        h.prev()
    oldest = h.current()
    assert oldest[0] > 0


def test_bad_size():
    with pytest.raises(ValueError):
        History(0)