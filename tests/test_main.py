import signal
import threading

from agent import main as agent_main
from agent.core import AgentState
from agent.main import run_forever


class ScriptedRunner:
    """Records cycles and sets the stop event after a fixed number of them."""

    def __init__(self, make_config, stop_event, cycles_before_stop):
        self.config = make_config(interval_minutes=1)
        self.states = []
        self._stop_event = stop_event
        self._cycles_before_stop = cycles_before_stop

    def run_once(self, state):
        self.states.append(state)
        if len(self.states) >= self._cycles_before_stop:
            self._stop_event.set()
        return AgentState(last_ip=f"192.0.2.{len(self.states)}")


class InstantEvent(threading.Event):
    """An Event whose timed waits return immediately."""

    def wait(self, timeout=None):
        return self.is_set()


def test_first_cycle_runs_even_if_already_stopping(make_config, caplog):
    stop_event = threading.Event()
    stop_event.set()
    runner = ScriptedRunner(make_config, stop_event, cycles_before_stop=99)

    final = run_forever(runner, stop_event)

    assert runner.states == [AgentState()]
    assert final.last_ip == "192.0.2.1"


def test_state_is_threaded_through_cycles(make_config, caplog):
    caplog.set_level("INFO")
    stop_event = InstantEvent()
    runner = ScriptedRunner(make_config, stop_event, cycles_before_stop=3)

    final = run_forever(runner, stop_event)

    assert runner.states == [
        AgentState(),
        AgentState(last_ip="192.0.2.1"),
        AgentState(last_ip="192.0.2.2"),
    ]
    assert final.last_ip == "192.0.2.3"
    assert "Shutting down gracefully..." in caplog.text


def test_main_stops_on_sigterm_and_exits_cleanly(make_config, monkeypatch, caplog):
    caplog.set_level("INFO")
    handlers = {}
    runners = []

    class SignalingRunner:
        def __init__(self, config):
            self.config = config
            self.cycles = 0
            self.closed = False
            runners.append(self)

        def run_once(self, state):
            self.cycles += 1
            handlers[signal.SIGTERM](signal.SIGTERM, None)
            return state

        def close(self):
            self.closed = True

    monkeypatch.setattr(agent_main, "load_env_file", lambda: False)
    monkeypatch.setattr(agent_main, "load_config", make_config)
    monkeypatch.setattr(agent_main, "DDNSRunner", SignalingRunner)
    monkeypatch.setattr(
        agent_main.signal, "signal", lambda signum, handler: handlers.__setitem__(signum, handler)
    )

    assert agent_main.main() == 0

    assert set(handlers) == {signal.SIGINT, signal.SIGTERM}
    (runner,) = runners
    assert runner.cycles == 1
    assert runner.closed
    assert "Received SIGTERM; stopping agent." in caplog.text
    assert "Shutting down gracefully..." in caplog.text
