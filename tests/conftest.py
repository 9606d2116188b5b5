import asyncio

import pytest

async def settle() -> None:
    for _ in range(5):
        await asyncio.sleep(0)

class ManualSleeper:
    '''
    Stands in for `asyncio.sleep`; a sleep ends only when `advance()` says so.
    '''
    def __init__(self) -> None:
        self.waiters: list[asyncio.Future] = []
        self.requested: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.requested.append(seconds)
        fut = asyncio.get_running_loop().create_future()
        self.waiters.append(fut)
        await fut

    @property
    def sleeping(self) -> int:
        return sum(1 for w in self.waiters if not w.done())

    async def advance(self, ticks: int = 1) -> None:
        for _ in range(ticks):
            await settle()
            self.waiters = [w for w in self.waiters if not w.done()]
            assert self.waiters, 'nothing is sleeping'
            self.waiters.pop(0).set_result(None)
        await settle()

class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

@pytest.fixture
def sleeper() -> ManualSleeper:
    return ManualSleeper()

@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
