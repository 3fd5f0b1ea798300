import asyncio

from vocabbox.services import Debouncer


class TestDebouncer:
    async def test_runs_after_delay(self):
        calls = []

        async def callback(token, value):
            calls.append((token, value))

        debouncer = Debouncer(30)
        token = debouncer.schedule(callback, "apple")

        await asyncio.sleep(0.005)
        assert calls == []
        assert debouncer.pending

        await asyncio.sleep(0.1)
        assert calls == [(token, "apple")]
        assert not debouncer.pending

    async def test_reschedule_supersedes(self):
        calls = []

        async def callback(token, value):
            calls.append(value)

        debouncer = Debouncer(30)
        for value in ("a", "ab", "abc"):
            debouncer.schedule(callback, value)
            await asyncio.sleep(0.005)

        await asyncio.sleep(0.1)
        assert calls == ["abc"]

    async def test_cancel_drops_pending(self):
        calls = []

        async def callback(token):
            calls.append(token)

        debouncer = Debouncer(20)
        token = debouncer.schedule(callback)
        debouncer.cancel()

        await asyncio.sleep(0.08)
        assert calls == []
        assert not debouncer.is_current(token)

    async def test_in_flight_callback_is_cancelled(self):
        finished = []

        async def slow(token):
            await asyncio.sleep(0.2)
            finished.append(token)

        debouncer = Debouncer(10)
        debouncer.schedule(slow)
        await asyncio.sleep(0.05)

        debouncer.cancel()
        await asyncio.sleep(0.25)
        assert finished == []

    async def test_tokens_increase(self):
        async def noop(token):
            pass

        debouncer = Debouncer(10)
        first = debouncer.schedule(noop)
        second = debouncer.schedule(noop)

        assert second > first
        assert debouncer.is_current(second)
        assert not debouncer.is_current(first)
        debouncer.cancel()

    async def test_callback_error_is_logged_not_raised(self, caplog):
        async def broken(token):
            raise ValueError("boom")

        debouncer = Debouncer(5)
        debouncer.schedule(broken)
        await asyncio.sleep(0.05)

        assert "Debounced callback failed" in caplog.text
        assert not debouncer.pending
