import io
import threading

from hydra_launcher.claude_process_helpers.output_buffer import OutputBuffer, pump_lines, start_reader_thread


class TestOutputBuffer:
    def test_drain_returns_lines_in_order_and_clears(self):
        buffer = OutputBuffer()
        buffer.append("a")
        buffer.append("b")

        assert buffer.drain() == ["a", "b"]
        assert buffer.drain() == []

    def test_concurrent_appends_are_each_delivered_once(self):
        buffer = OutputBuffer()
        drained: list[str] = []

        def producer(prefix: str) -> None:
            for i in range(500):
                buffer.append(f"{prefix}{i}")

        threads = [threading.Thread(target=producer, args=(p,)) for p in ("x", "y")]
        for thread in threads:
            thread.start()
        while any(t.is_alive() for t in threads):
            drained.extend(buffer.drain())
        drained.extend(buffer.drain())

        assert len(drained) == 1000
        assert len(set(drained)) == 1000
        assert [line for line in drained if line.startswith("x")] == [f"x{i}" for i in range(500)]


class TestPumpLines:
    def test_strips_terminators_and_closes_stream(self):
        stream = io.StringIO("one\r\ntwo\nthree")
        lines: list[str] = []

        pump_lines(stream, lines.append, label="test")

        assert lines == ["one", "two", "three"]
        assert stream.closed

    def test_closed_stream_stops_quietly(self):
        stream = io.StringIO("ignored\n")
        stream.close()
        lines: list[str] = []

        pump_lines(stream, lines.append, label="test")

        assert lines == []

    def test_reader_thread_is_daemon(self):
        lines: list[str] = []
        thread = start_reader_thread(io.StringIO("x\n"), lines.append, label="reader-test")
        thread.join(2.0)

        assert thread.daemon
        assert thread.name == "reader-test"
        assert lines == ["x"]
