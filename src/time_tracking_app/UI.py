import asyncio
import logging
import time
import typing as tp

from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import Screen
from textual.widgets import (
    Button, ContentSwitcher, Digits, Footer, Header, Input, Static,
)

from .shared import Bundle, SavedRecord, formatTime, titled
from .stopwatch import Sleeper, Stopwatch, TimerState

log = logging.getLogger(__name__)

class StopwatchScreen(Screen[Bundle | None]):
    AUTO_FOCUS = None
    BINDINGS = [
        Binding("s", "toggle", "Start/Pause."),
        Binding("r", "reset", "Reset."),
        Binding("ctrl+s", "save", "Save."),
        Binding("c", "focus_comment", "Comment."),
        Binding("escape", "back", "Back."),
    ]

    def __init__(self, stopwatch: Stopwatch, *args, **kw) -> None:
        super().__init__(*args, **kw)

        self.stopwatch = stopwatch
        self.unsubscribe: tp.Callable[[], None] | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=False)
        with Vertical(id="stopwatch-pane"):
            yield Digits(formatTime(0), id="elapsed-display")
            with Horizontal(id="stopwatch-controls"):
                yield Button("Start", id="toggle-btn", variant="success")
                yield Button("Reset", id="reset-btn")
                yield Button("Save", id="save-btn", variant="primary")
            yield Input(placeholder="Comment", id="comment-input")
        yield Footer(compact=True)

    def on_mount(self) -> None:
        self.unsubscribe = self.stopwatch.subscribe(self.myUpdate)
        self.myUpdate(self.stopwatch.state)

    def on_unmount(self) -> None:
        self.leave()

    def leave(self) -> None:
        if self.unsubscribe is not None:
            self.unsubscribe()
            self.unsubscribe = None
        self.stopwatch.teardown()

    def myUpdate(self, state: TimerState) -> None:
        display: Digits = self.query_one('#elapsed-display', Digits)
        display.update(formatTime(state.elapsed_ms))
        bToggle: Button = self.query_one('#toggle-btn', Button)
        bToggle.label = 'Pause' if state.is_running else 'Start'
        bToggle.variant = 'warning' if state.is_running else 'success'

    @on(Button.Pressed, '#toggle-btn')
    def action_toggle(self) -> None:
        self.stopwatch.toggle()

    @on(Button.Pressed, '#reset-btn')
    def action_reset(self) -> None:
        self.stopwatch.reset()

    @on(Input.Changed, '#comment-input')
    def onCommentChanged(self, event: Input.Changed) -> None:
        self.stopwatch.setComment(event.value)

    def action_focus_comment(self) -> None:
        self.query_one('#comment-input', Input).focus()

    @on(Input.Submitted, '#comment-input')
    def focus_save(self) -> None:
        self.query_one('#save-btn', Button).focus()

    @on(Button.Pressed, '#save-btn')
    def action_save(self) -> None:
        record = self.stopwatch.save()
        self.leave()
        self.dismiss(record.toBundle())

    def action_back(self) -> None:
        self.leave()
        self.dismiss(None)

class ListScreen(Screen[None]):
    BINDINGS = [
        Binding("n", "new_stopwatch", "New stopwatch."),
        Binding("q", "quit", "Quit."),
    ]

    def __init__(
        self, newStopwatch: tp.Callable[[], Stopwatch], *args, **kw,
    ) -> None:
        super().__init__(*args, **kw)

        self.newStopwatch = newStopwatch
        self.record: SavedRecord | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=False)
        yield Button("New Stopwatch Timer", id="new-stopwatch-btn", variant="primary")
        with ContentSwitcher(id="list-switcher", initial="list-empty"):
            yield Static('', id="list-empty")
            with VerticalScroll(id="list-area"):
                with titled(Vertical(id="record-card"), 'Saved', skip_bottom=False):
                    yield Digits(formatTime(0), id="record-time")
                    yield Static('', id="record-comment", markup=False)
        yield Footer(compact=True)

    def on_mount(self) -> None:
        self.myUpdate()

    @on(Button.Pressed, '#new-stopwatch-btn')
    def action_new_stopwatch(self) -> None:
        self.app.push_screen(
            StopwatchScreen(self.newStopwatch()), callback=self.receive,
        )

    def action_quit(self) -> None:
        self.app.exit()

    def receive(self, bundle: Bundle | None) -> None:
        if bundle is None:
            log.info('returned without a record')
            return
        # Malformed bundles raise on purpose.
        self.record = SavedRecord.fromBundle(bundle)
        log.info('received %r', self.record)
        self.myUpdate()

    def myUpdate(self) -> None:
        switcher: ContentSwitcher = self.query_one('#list-switcher', ContentSwitcher)
        switcher.current = (
            'list-empty' if self.record is None else
            'list-area'
        )
        if self.record is None:
            return
        sTime: Digits = self.query_one('#record-time', Digits)
        sTime.update(formatTime(self.record.elapsed_ms))
        sComment: Static = self.query_one('#record-comment', Static)
        sComment.update(self.record.comment)

class TimeTrackingApp(App):
    CSS_PATH = "styles.tcss"

    def __init__(
        self,
        tick_seconds: float = 1.0,
        correct_drift: bool = False,
        title: str = 'Time Tracking',
        sleep: Sleeper = asyncio.sleep,
        clock: tp.Callable[[], float] = time.monotonic,
    ) -> None:
        '''
        `correct_drift`: keep ticks on a monotonic-clock schedule.
        Off by default, i.e. a fixed wait between ticks, which drifts.
        `sleep` and `clock` are for tests.
        '''
        super().__init__()

        self.tick_seconds = tick_seconds
        self.correct_drift = correct_drift
        self.sleep = sleep
        self.clock = clock

        self.title = title

    def newStopwatch(self) -> Stopwatch:
        return Stopwatch(
            tick_seconds=self.tick_seconds,
            correct_drift=self.correct_drift,
            sleep=self.sleep,
            clock=self.clock,
        )

    def get_default_screen(self) -> Screen:
        return ListScreen(self.newStopwatch, id="list-screen")
