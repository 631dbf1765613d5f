from gi.repository import GLib

from packet_lens.state.debounce import Debouncer


def _run_loop(ms: int) -> None:
    loop = GLib.MainLoop()
    GLib.timeout_add(ms, loop.quit)
    loop.run()


def test_burst_of_pushes_delivers_only_last_value() -> None:
    delivered: list[str] = []
    debouncer: Debouncer[str] = Debouncer(200, delivered.append)

    for text in ("p", "pr", "pro", "prot", "protocol:tcp"):
        debouncer.push(text)
        _run_loop(15)
    assert delivered == []

    _run_loop(350)
    assert delivered == ["protocol:tcp"]
    assert not debouncer.is_pending


def test_push_restarts_the_quiet_period() -> None:
    delivered: list[str] = []
    debouncer: Debouncer[str] = Debouncer(150, delivered.append)

    debouncer.push("a")
    _run_loop(90)
    debouncer.push("b")
    _run_loop(90)
    assert delivered == []

    _run_loop(200)
    assert delivered == ["b"]


def test_cancel_drops_pending_value() -> None:
    delivered: list[str] = []
    debouncer: Debouncer[str] = Debouncer(50, delivered.append)
    debouncer.push("x")
    debouncer.cancel()
    _run_loop(120)
    assert delivered == []
    assert not debouncer.is_pending


def test_flush_delivers_immediately() -> None:
    delivered: list[str] = []
    debouncer: Debouncer[str] = Debouncer(10_000, delivered.append)
    debouncer.push("now")
    debouncer.flush()
    assert delivered == ["now"]
    debouncer.flush()
    assert delivered == ["now"]
