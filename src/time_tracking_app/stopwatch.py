from __future__ import annotations

import asyncio
import logging
import time
import typing as tp

from pydantic import BaseModel, ConfigDict, Field

from .shared import MS_PER_SECOND, SavedRecord

log = logging.getLogger(__name__)

Sleeper = tp.Callable[[float], tp.Awaitable[None]]
Listener = tp.Callable[['TimerState'], None]

class TimerState(BaseModel):
    is_running: bool = False
    elapsed_ms: int = Field(default=0, ge=0)
    comment: str = ''

    model_config = ConfigDict(
        frozen=True,
    )

    def snapshot(self) -> SavedRecord:
        return SavedRecord(
            comment=self.comment,
            elapsed_ms=self.elapsed_ms,
        )

class Stopwatch:
    '''
    Owns a `TimerState` and the task that ticks it.
    Every Running period gets its own generation; a tick from any other
    generation is dropped.
    '''

    def __init__(
        self, /,
        tick_seconds: float = 1.0,
        correct_drift: bool = False,
        sleep: Sleeper = asyncio.sleep,
        clock: tp.Callable[[], float] = time.monotonic,
    ) -> None:
        '''
        `correct_drift`: aim each wait at a deadline on `clock` instead of
        waiting a fixed `tick_seconds`, so late wake-ups are caught up.
        '''
        if tick_seconds <= 0.0:
            raise ValueError(f'tick_seconds must be positive, got {tick_seconds}')
        self.tick_seconds = tick_seconds
        self.correct_drift = correct_drift
        self.sleep = sleep
        self.clock = clock

        self.state = TimerState()
        self.generation = 0
        self.tickTask: asyncio.Task | None = None
        self.__listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> tp.Callable[[], None]:
        self.__listeners.append(listener)
        def unsubscribe() -> None:
            if listener in self.__listeners:
                self.__listeners.remove(listener)
        return unsubscribe

    def __set(self, **changes: tp.Any) -> None:
        self.state = TimerState(**(self.state.model_dump() | changes))
        for listener in tuple(self.__listeners):
            listener(self.state)

    def __cancelTick(self) -> None:
        self.generation += 1
        if self.tickTask is not None:
            self.tickTask.cancel()
            self.tickTask = None

    def toggle(self) -> None:
        if self.state.is_running:
            self.pause()
        else:
            self.start()

    def start(self) -> None:
        if self.state.is_running:
            return
        self.__cancelTick()
        log.debug('start at %d ms (generation %d)', self.state.elapsed_ms, self.generation)
        self.__set(is_running=True)
        self.tickTask = asyncio.create_task(self.tickLoop(self.generation))

    def pause(self) -> None:
        self.__cancelTick()
        if self.state.is_running:
            log.debug('pause at %d ms', self.state.elapsed_ms)
            self.__set(is_running=False)

    def reset(self) -> None:
        self.__cancelTick()
        log.debug('reset')
        self.__set(is_running=False, elapsed_ms=0)

    def setComment(self, comment: str) -> None:
        if comment != self.state.comment:
            self.__set(comment=comment)

    def save(self) -> SavedRecord:
        self.pause()
        record = self.state.snapshot()
        log.info('saved %d ms, comment %r', record.elapsed_ms, record.comment)
        return record

    def teardown(self) -> None:
        self.__cancelTick()
        self.__listeners.clear()

    def tick(self, generation: int) -> bool:
        '''
        Returns whether the caller's Running period is still current.
        '''
        if generation != self.generation or not self.state.is_running:
            return False
        self.__set(elapsed_ms=self.state.elapsed_ms + MS_PER_SECOND)
        return True

    async def tickLoop(self, generation: int) -> None:
        birthline = self.clock()
        try:
            while self.tick(generation):
                birthline += self.tick_seconds
                if self.correct_drift:
                    dt = birthline - self.clock()
                else:
                    dt = self.tick_seconds
                if dt > 0.0:
                    await self.sleep(dt)
        except asyncio.CancelledError:
            return
