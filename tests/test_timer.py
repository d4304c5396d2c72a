import pytest

from blynkkit.timer import RUN_FOREVER, SimpleTimer


class FakeClock:
    def __init__(self):
        self.now = 0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def timer(clock):
    return SimpleTimer(max_timers=4, clock=clock)


def test_ids_are_assigned_in_order(timer):
    first = timer.setup_timer(100, lambda: None)
    second = timer.setup_timer(100, lambda: None)
    assert (first, second) == (0, 1)
    assert timer.num_timers() == 2


def test_fires_only_after_delay(timer, clock):
    calls = []
    timer.setup_timer(100, lambda: calls.append(clock.now))
    clock.now = 99
    timer.run()
    assert calls == []
    clock.now = 100
    timer.run()
    assert calls == [100]


def test_forever_timer_keeps_firing(timer, clock):
    calls = []
    timer.setup_timer(10, lambda: calls.append(1), RUN_FOREVER)
    for step in range(1, 6):
        clock.now = step * 10
        timer.run()
    assert len(calls) == 5
    assert timer.num_timers() == 1


def test_single_run_timer_is_deleted(timer, clock):
    calls = []
    timer.setup_timer(50, lambda: calls.append(1), 1)
    clock.now = 50
    timer.run()
    clock.now = 100
    timer.run()
    assert calls == [1]
    assert timer.num_timers() == 0


def test_limited_runs(timer, clock):
    calls = []
    timer.setup_timer(10, lambda: calls.append(1), 3)
    for step in range(1, 10):
        clock.now = step * 10
        timer.run()
    assert len(calls) == 3
    assert timer.num_timers() == 0


def test_missed_intervals_fire_once_and_stay_aligned(timer, clock):
    calls = []
    timer.setup_timer(100, lambda: calls.append(clock.now))
    clock.now = 350
    timer.run()
    assert calls == [350]
    clock.now = 399
    timer.run()
    assert calls == [350]
    clock.now = 400
    timer.run()
    assert calls == [350, 400]


def test_arguments_are_passed(timer, clock):
    received = []
    timer.setup_timer(5, lambda a, b: received.append((a, b)), RUN_FOREVER, "x", 7)
    clock.now = 5
    timer.run()
    assert received == [("x", 7)]


def test_full_raises(clock):
    small = SimpleTimer(max_timers=2, clock=clock)
    small.setup_timer(1, lambda: None)
    small.setup_timer(1, lambda: None)
    with pytest.raises(RuntimeError):
        small.setup_timer(1, lambda: None)


def test_non_callable_raises(timer):
    with pytest.raises(TypeError):
        timer.setup_timer(1, None)
    assert timer.num_timers() == 0


def test_invalid_max_timers():
    with pytest.raises(ValueError):
        SimpleTimer(max_timers=0)


def test_disable_and_toggle(timer, clock):
    calls = []
    tid = timer.setup_timer(10, lambda: calls.append(1))
    timer.disable(tid)
    assert timer.is_enabled(tid) is False
    clock.now = 10
    timer.run()
    assert calls == []
    timer.toggle(tid)
    assert timer.is_enabled(tid) is True
    clock.now = 20
    timer.run()
    assert calls == [1]


def test_out_of_range_ids_are_ignored(timer):
    assert timer.is_enabled(99) is False
    assert timer.change_interval(99, 10) is False
    timer.delete_timer(99)
    timer.enable(-1)
    assert timer.is_enabled(-1) is False


def test_change_interval(timer, clock):
    calls = []
    tid = timer.setup_timer(100, lambda: calls.append(clock.now))
    assert timer.change_interval(1, 10) is False
    clock.now = 50
    assert timer.change_interval(tid, 20) is True
    clock.now = 69
    timer.run()
    assert calls == []
    clock.now = 70
    timer.run()
    assert calls == [70]


def test_execute_now(timer, clock):
    calls = []
    tid = timer.setup_timer(1000, lambda: calls.append(1))
    clock.now = 5
    timer.execute_now(tid)
    timer.run()
    assert calls == [1]


def test_restart_postpones(timer, clock):
    calls = []
    tid = timer.setup_timer(100, lambda: calls.append(clock.now))
    clock.now = 90
    timer.restart_timer(tid)
    clock.now = 100
    timer.run()
    assert calls == []
    clock.now = 190
    timer.run()
    assert calls == [190]


def test_deleted_slot_is_reused(timer):
    timer.setup_timer(1, lambda: None)
    second = timer.setup_timer(1, lambda: None)
    timer.delete_timer(0)
    assert timer.num_timers() == 1
    assert timer.setup_timer(1, lambda: None) == 0
    timer.delete_timer(second)
    timer.delete_timer(second)
    assert timer.num_timers() == 1


def test_disable_all_and_enable_all(timer, clock):
    calls = []
    a = timer.setup_timer(10, lambda: calls.append("a"))
    b = timer.setup_timer(10, lambda: calls.append("b"))
    timer.disable_all()
    assert not timer.is_enabled(a) and not timer.is_enabled(b)
    clock.now = 10
    timer.run()
    assert calls == []
    timer.enable_all()
    clock.now = 20
    timer.run()
    assert sorted(calls) == ["a", "b"]


def test_callback_deleting_later_timer_prevents_its_call(timer, clock):
    calls = []
    timer.setup_timer(10, lambda: timer.delete_timer(1))
    timer.setup_timer(10, lambda: calls.append("second"))
    clock.now = 10
    timer.run()
    assert calls == []
    assert timer.num_timers() == 1