import threading

from session_tracker.adapters.dispatch import InlineDispatcher, ThreadPoolDispatcher


def failing_write(*args):
    raise ConnectionError("backend unavailable")


class TestInlineDispatcher:
    def test_runs_immediately(self):
        calls = []
        InlineDispatcher().submit(calls.append, "x")
        assert calls == ["x"]

    def test_failure_is_logged_not_raised(self, caplog):
        InlineDispatcher().submit(failing_write, "sess-1")

        assert "Persistence call failing_write failed" in caplog.text


class TestThreadPoolDispatcher:
    def test_single_worker_preserves_submission_order(self):
        dispatcher = ThreadPoolDispatcher()
        seen = []
        for i in range(50):
            dispatcher.submit(seen.append, i)
        dispatcher.shutdown()

        assert seen == list(range(50))

    def test_submit_does_not_wait(self):
        dispatcher = ThreadPoolDispatcher()
        release = threading.Event()
        done = []

        def slow_write():
            release.wait(timeout=2.0)
            done.append(True)

        dispatcher.submit(slow_write)
        assert done == []

        release.set()
        dispatcher.shutdown()
        assert done == [True]

    def test_failure_is_logged(self, caplog):
        dispatcher = ThreadPoolDispatcher()
        dispatcher.submit(failing_write)
        dispatcher.shutdown()

        assert "failing_write failed" in caplog.text

    def test_closed_dispatcher_drops_calls(self, caplog):
        dispatcher = ThreadPoolDispatcher()
        dispatcher.shutdown()
        calls = []

        dispatcher.submit(calls.append, 1)

        assert calls == []
        assert "Dispatcher closed" in caplog.text

    def test_executor_shut_down_under_submit_drops_call(self, caplog):
        dispatcher = ThreadPoolDispatcher()
        # Executor closed by a concurrent shutdown() before _closed was set.
        dispatcher._executor.shutdown()
        calls = []

        dispatcher.submit(calls.append, 1)

        assert calls == []
        assert "Dispatcher shut down; dropping" in caplog.text
