import logging

import pytest

from mvc_bnb.clock import DEG_LB, MAX_DEG, PHASES, Clock, NullClock, timed_step


def test_clock_accumulates():
    clock = Clock()
    for _ in range(3):
        with clock.phase(DEG_LB):
            pass
    assert clock.counts[DEG_LB] == 3
    assert clock.get_subroutine_duration(DEG_LB) >= 0.0
    assert clock.get_subroutine_duration("unused") == 0.0
    assert set(clock.snapshot()) == set(PHASES)


def test_clock_records_on_error():
    clock = Clock()
    with pytest.raises(KeyError):
        with clock.phase(MAX_DEG):
            raise KeyError("boom")
    assert clock.counts[MAX_DEG] == 1


def test_clock_reset():
    clock = Clock()
    with clock.phase(DEG_LB):
        pass
    clock.reset()
    assert clock.snapshot() == {name: 0.0 for name in PHASES}


def test_null_clock():
    clock = NullClock()
    with clock.phase(DEG_LB):
        pass
    assert clock.snapshot() == {}
    assert clock.get_subroutine_duration(DEG_LB) == 0.0


def test_timed_step_logs(caplog):
    @timed_step("demo")
    def work(x):
        return x * 2

    with caplog.at_level(logging.INFO, logger="mvc_bnb.clock"):
        assert work(4) == 8
    assert "[demo] took" in caplog.text
