from __future__ import annotations

import typing as tp

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from textual.widget import Widget

MS_PER_SECOND = 1000

Bundle = tuple[str, str]    # (comment, elapsed_ms as decimal string)

class MalformedPayload(ValueError):
    '''
    A navigation bundle broke the two-field contract.
    Only `SavedRecord.toBundle()` produces bundles, so this is a bug,
    not bad user input.
    '''

def formatTime(elapsed_ms: int) -> str:
    total_seconds = elapsed_ms // MS_PER_SECOND
    minutes, seconds = divmod(total_seconds, 60)
    return f'{minutes:02d}:{seconds:02d}'

class SavedRecord(BaseModel):
    comment: str
    elapsed_ms: int = Field(ge=0)

    model_config = ConfigDict(
        frozen=True,
    )

    def toBundle(self) -> Bundle:
        return (self.comment, str(self.elapsed_ms))

    @classmethod
    def fromBundle(cls, bundle: tp.Any) -> SavedRecord:
        if not isinstance(bundle, (tuple, list)) or len(bundle) != 2:
            raise MalformedPayload(f'Expected (comment, elapsed_ms), got {bundle!r}')
        comment, elapsed = bundle
        if not isinstance(comment, str):
            raise MalformedPayload(f'Comment must be str, got {comment!r}')
        if not isinstance(elapsed, str) or not elapsed.isdecimal():
            raise MalformedPayload(f'Elapsed time must be a decimal string, got {elapsed!r}')
        try:
            return cls(comment=comment, elapsed_ms=int(elapsed))
        except ValidationError as e:
            raise MalformedPayload(str(e)) from e

def titled(
    w: Widget, /, title: str, skip_bottom: bool = True,
    style = ('round', '#999'), padding = (0, 1),
):
    w.styles.border = style
    if skip_bottom:
        w.styles.border_bottom = None
    w.border_title = title
    w.styles.padding = padding
    return w
