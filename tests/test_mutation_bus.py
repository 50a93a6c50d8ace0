import pytest

from inkorg.document.mutation import TextMutationBus, TextRange


@pytest.mark.parametrize(
    "start,end,inserted,touched",
    [
        (10, 10, 3, True),   # insertion at the region start
        (19, 19, 1, True),   # insertion before the last character
        (20, 20, 1, False),  # insertion at the region end
        (5, 10, 0, False),   # deletion ending at the region start
        (5, 11, 0, True),
        (12, 15, 4, True),
        (19, 25, 2, True),
        (20, 25, 0, False),
        (0, 30, 0, True),
    ],
)
def test_touch_rule(start, end, inserted, touched):
    bus = TextMutationBus()
    seen = []
    sub = bus.subscribe(10, 20, seen.append)
    bus.publish(start, end, inserted)

    assert bool(seen) is touched
    assert sub.active is not touched
    assert (sub in bus.subscriptions) is not touched


def test_later_regions_shift():
    bus = TextMutationBus()
    sub = bus.subscribe(10, 20, lambda m: None)
    bus.publish(0, 2, 5)
    assert (sub.begin, sub.end) == (13, 23)
    bus.publish(9, 9, 1)
    assert (sub.begin, sub.end) == (14, 24)


def test_earlier_regions_stay():
    bus = TextMutationBus()
    sub = bus.subscribe(10, 20, lambda m: None)
    bus.publish(30, 30, 4)
    bus.publish(20, 25, 0)
    assert (sub.begin, sub.end) == (10, 20)


def test_callback_runs_after_unsubscription():
    bus = TextMutationBus()
    observed = []

    def cb(mutation):
        observed.append(sub in bus.subscriptions)

    sub = bus.subscribe(0, 5, cb)
    bus.publish(2, 3, 0)
    bus.publish(2, 3, 0)
    assert observed == [False]


def test_unsubscribe_and_clear():
    bus = TextMutationBus()
    a = bus.subscribe(0, 5, lambda m: pytest.fail("unsubscribed"))
    b = bus.subscribe(6, 9, lambda m: pytest.fail("cleared"))
    bus.unsubscribe(a)
    bus.unsubscribe(a)
    assert bus.subscriptions == [b]
    bus.clear()
    assert not b.active
    bus.publish(0, 9, 0)


def test_text_range_validation():
    with pytest.raises(ValueError):
        TextRange(5, 4)
    assert TextRange(3, 7).length == 4
