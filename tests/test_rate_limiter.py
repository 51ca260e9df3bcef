from starship_shop.utils.rate_limiter import MinIntervalGate


class Clock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def test_gate_rejects_while_in_flight():
    gate = MinIntervalGate("test", 0, clock=Clock())
    assert gate.begin() is True
    assert gate.allow() is False
    gate.complete()
    assert gate.allow() is True


def test_gate_enforces_interval_after_completion():
    clock = Clock()
    gate = MinIntervalGate("test", 300, clock=clock)
    assert gate.begin()
    clock.now = 1.0
    gate.complete()

    clock.now = 1.25
    assert gate.begin() is False
    assert gate.in_flight is False

    clock.now = 1.5
    assert gate.begin() is True


def test_reset_and_stats():
    gate = MinIntervalGate("test", 300, clock=Clock())
    gate.begin()
    gate.complete()
    assert gate.get_stats()["last_completed_at"] == 0.0
    gate.reset()
    assert gate.get_stats()["last_completed_at"] is None
    assert gate.allow() is True
