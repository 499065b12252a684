"""Tests for bakery.i18n.tasks module."""

# pylint: disable=protected-access

import asyncio
import threading

import pytest

from bakery.i18n.tasks import TaskRunner


@pytest.fixture
def runner():
    runner = TaskRunner(name="test-tasks")
    yield runner
    runner.close()


class TestTaskRunnerWithoutLoop:
    """Tests for spawning from synchronous code."""

    def test_spawn_runs_on_background_thread(self, runner):
        seen = []

        async def work():
            seen.append(threading.current_thread().name)

        assert runner.spawn(work()) is True
        assert runner.wait(timeout=5) is True
        assert seen == ["test-tasks"]

    def test_background_loop_is_reused(self, runner):
        async def noop():
            return None

        runner.spawn(noop())
        first = runner._loop
        runner.spawn(noop())
        assert runner._loop is first
        assert runner.wait(timeout=5) is True

    def test_wait_without_work(self, runner):
        assert runner.wait(timeout=0) is True

    def test_wait_times_out(self, runner):
        release = threading.Event()

        async def blocked():
            while not release.is_set():
                await asyncio.sleep(0.01)

        runner.spawn(blocked())
        assert runner.wait(timeout=0.05) is False
        release.set()
        assert runner.wait(timeout=5) is True

    def test_failures_count_as_finished(self, runner):
        async def boom():
            raise RuntimeError("boom")

        runner.spawn(boom())
        assert runner.wait(timeout=5) is True

    def test_spawn_after_close_is_refused(self):
        runner = TaskRunner()
        runner.close()
        ran = []

        async def work():
            ran.append(True)

        coro = work()
        assert runner.spawn(coro) is False
        assert coro.cr_frame is None
        assert ran == []

    def test_close_is_idempotent(self, runner):
        async def noop():
            return None

        runner.spawn(noop())
        runner.wait(timeout=5)
        runner.close()
        runner.close()
        assert runner._thread is None


class TestTaskRunnerWithLoop:
    """Tests for spawning from inside a running event loop."""

    @pytest.mark.asyncio
    async def test_spawn_uses_running_loop(self, runner):
        seen = []

        async def work():
            seen.append(asyncio.get_running_loop())

        runner.spawn(work())
        assert runner.pending_count == 1
        await runner.drain()
        assert seen == [asyncio.get_running_loop()]
        assert runner._thread is None

    @pytest.mark.asyncio
    async def test_drain_waits_for_work_spawned_meanwhile(self, runner):
        order = []

        async def child():
            order.append("child")

        async def parent():
            await asyncio.sleep(0)
            runner.spawn(child())
            order.append("parent")

        runner.spawn(parent())
        await runner.drain()
        assert order == ["parent", "child"]
        assert runner.pending_count == 0

    @pytest.mark.asyncio
    async def test_drain_without_work(self, runner):
        await runner.drain()
        assert runner.pending_count == 0

    @pytest.mark.asyncio
    async def test_drain_swallows_task_errors(self, runner):
        async def boom():
            raise RuntimeError("boom")

        runner.spawn(boom())
        await runner.drain()
        assert runner.pending_count == 0
