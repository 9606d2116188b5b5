from .UI import TimeTrackingApp
from .shared import MalformedPayload, SavedRecord, formatTime
from .stopwatch import Stopwatch, TimerState

__all__ = [
    "TimeTrackingApp", "MalformedPayload", "SavedRecord", "formatTime",
    "Stopwatch", "TimerState",
]
