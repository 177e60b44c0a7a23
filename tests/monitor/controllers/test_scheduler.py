"""
Scheduler Tests

Tests for the background check loop:
- One cycle writes state and notifies
- Callback handling
- Interruptible interval wait
- Config changes picked up on the next cycle
- Exceptions inside a cycle do not stop the loop

To run:
    pytest tests/monitor/controllers/test_scheduler.py -v
"""

import threading
import time

import pytest

from monitor.constants import SchedulerState
from monitor.controllers.scheduler import Scheduler
from monitor.implementations.mock_wan_probe import MockWanProbe
from monitor.models.monitor_config import MonitorConfig
from monitor.models.monitor_state import MonitorState, WanProbeResult


class FlakyWanProbe(MockWanProbe):
    """WAN probe whose first call raises"""

    def __init__(self):
        super().__init__()
        self.raised = False

    def probe(self, servers, timeout_ms):
        if not self.raised:
            self.raised = True
            raise RuntimeError("probe exploded")
        return super().probe(servers, timeout_ms)


@pytest.fixture
def lock():
    return threading.Condition()


@pytest.fixture
def config():
    return MonitorConfig(check_interval_sec=1, lan_interface="lo")


@pytest.fixture
def state():
    return MonitorState()


@pytest.fixture
def make_scheduler(lock, config, state, mock_wan, mock_lan):
    """Build schedulers on shared fixtures; all are stopped after the test"""
    created = []

    def _make(**kwargs):
        kwargs.setdefault("wan_probe", mock_wan)
        kwargs.setdefault("lan_probe", mock_lan)
        scheduler = Scheduler(lock, config, state, **kwargs)
        created.append(scheduler)
        return scheduler

    yield _make

    for scheduler in created:
        scheduler.stop(timeout=5.0)


# =============================================================================
# SINGLE CYCLE TESTS
# =============================================================================


@pytest.mark.unit
def test_run_cycle_writes_state(make_scheduler, config, state, mock_wan, mock_lan):
    scheduler = make_scheduler(clock=lambda: 1700000000.0)

    snapshot = scheduler.run_cycle(config.snapshot())

    assert state.wan_up is True
    assert state.lan_up is True
    assert state.last_check_time == 1700000000.0
    assert state.cycles == 1
    assert snapshot == state
    assert snapshot is not state
    assert mock_lan.queried == ["lo"]
    assert mock_wan.calls[0][1] == config.timeout_ms


@pytest.mark.unit
def test_run_cycle_records_wan_failure(make_scheduler, config, state, mock_wan):
    mock_wan.set_reachable(False)
    scheduler = make_scheduler()

    scheduler.run_cycle(config.snapshot())

    assert state.wan_up is False
    assert state.lan_up is True
    assert state.last_error_code != 0


@pytest.mark.unit
def test_run_cycle_calls_on_update(make_scheduler, config, callback_tracker):
    scheduler = make_scheduler(on_update=callback_tracker.track)

    scheduler.run_cycle(config.snapshot())

    assert callback_tracker.get_call_count() == 1
    (published,) = callback_tracker.get_last_call()["args"]
    assert isinstance(published, MonitorState)
    assert published.cycles == 1


@pytest.mark.unit
def test_callback_error_is_contained(make_scheduler, config, state):
    def broken(_state):
        raise ValueError("callback bug")

    scheduler = make_scheduler(on_update=broken)

    scheduler.run_cycle(config.snapshot())

    assert state.cycles == 1


# =============================================================================
# THREAD LIFECYCLE TESTS
# =============================================================================


@pytest.mark.unit_integration
def test_start_runs_first_cycle_immediately(make_scheduler, mock_wan):
    scheduler = make_scheduler()

    scheduler.start()

    assert scheduler.state == SchedulerState.RUNNING
    assert mock_wan.wait_for_calls(1, timeout=2.0)


@pytest.mark.unit_integration
def test_stop_interrupts_interval_wait(make_scheduler, config, mock_wan):
    config.set_check_interval_sec(60)
    scheduler = make_scheduler()
    scheduler.start()
    assert mock_wan.wait_for_calls(1, timeout=2.0)

    start = time.monotonic()
    stopped = scheduler.stop(timeout=5.0)

    assert stopped is True
    assert time.monotonic() - start < 2.0
    assert scheduler.state == SchedulerState.STOPPED
    assert scheduler.is_running() is False
    assert mock_wan.call_count == 1


@pytest.mark.unit_integration
def test_stop_times_out_during_slow_probe(make_scheduler, mock_wan):
    mock_wan.set_delay(1.0)
    scheduler = make_scheduler()
    scheduler.start()
    time.sleep(0.1)

    assert scheduler.stop(timeout=0.1) is False
    # The in-flight probe finishes, then the loop exits
    assert scheduler.stop(timeout=5.0) is True


@pytest.mark.unit
def test_cannot_start_twice(make_scheduler):
    scheduler = make_scheduler()
    scheduler.start()

    with pytest.raises(RuntimeError):
        scheduler.start()


@pytest.mark.unit_integration
def test_stop_requested_before_first_cycle_skips_probing(make_scheduler, mock_wan):
    scheduler = make_scheduler()
    scheduler.request_stop()

    scheduler.start()

    assert scheduler.stop(timeout=2.0) is True
    assert mock_wan.call_count == 0
    assert scheduler.state == SchedulerState.STOPPED


@pytest.mark.unit
def test_stop_before_start(make_scheduler):
    scheduler = make_scheduler()

    assert scheduler.stop(timeout=1.0) is True
    assert scheduler.state == SchedulerState.STOPPED


@pytest.mark.slow
@pytest.mark.unit_integration
def test_config_change_applies_next_cycle(make_scheduler, lock, config, mock_wan):
    scheduler = make_scheduler()
    scheduler.start()
    assert mock_wan.wait_for_calls(1, timeout=2.0)

    with lock:
        config.set_timeout_ms(321)

    assert mock_wan.wait_for_calls(2, timeout=5.0)
    assert mock_wan.calls[0][1] == 1000
    assert mock_wan.calls[1][1] == 321


@pytest.mark.slow
@pytest.mark.unit_integration
def test_cycle_exception_does_not_stop_loop(make_scheduler, state, lock):
    flaky = FlakyWanProbe()
    scheduler = make_scheduler(wan_probe=flaky)
    scheduler.start()

    with lock:
        reached = lock.wait_for(lambda: state.cycles >= 1, timeout=5.0)

    assert reached is True
    assert flaky.raised is True
    assert scheduler.is_running() is True


@pytest.mark.unit_integration
def test_queued_results_flow_into_state(make_scheduler, state, lock, mock_wan):
    mock_wan.queue_results(WanProbeResult(False))
    scheduler = make_scheduler()
    scheduler.start()

    with lock:
        lock.wait_for(lambda: state.cycles >= 1, timeout=2.0)
        assert state.wan_up is False
