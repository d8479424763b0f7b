# linkops/models.py
# Dataclasses shared by the extraction, resolution and rewriting steps

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Callable, List, Optional


class Stage(enum.Enum):
    """Stages reported to a progress callback during one conversion."""
    PREPARING = "preparing"
    RESOLVING = "resolving"
    COMPOSING = "composing"
    DONE = "done"


# progress(stage, percent, message)
ProgressCallback = Callable[[Stage, int, str], None]


class ProgressReporter:
    """Forward progress to an optional callback, never letting the percentage go down."""

    def __init__(self, callback: Optional[ProgressCallback] = None) -> None:
        self.callback = callback
        self.percent = 0

    def __call__(self, stage: Stage, percent: int, message: str = "") -> None:
        self.percent = max(self.percent, min(int(percent), 100))
        if self.callback is not None:
            self.callback(stage, self.percent, message)


def normalize_key(inner: str) -> str:
    """Return the lookup key for the text between ``[[`` and ``]]``."""
    key = inner
    if "|" in key:
        key = key.split("|", 1)[0]
    return key.strip()


@dataclass(frozen=True)
class BracketSpan:
    """A ``[[...]]`` span found in the source text."""
    start: int
    end: int
    inner: str

    @property
    def key(self) -> str:
        return normalize_key(self.inner)


@dataclass
class ResolutionEntry:
    """Resolution state of one reference key."""
    source_title: str
    wikibase_item: Optional[str] = None
    target_title: Optional[str] = None
    bracket_form: str = ""
    plain_form: str = ""
    error: Optional[str] = None

    @property
    def resolved(self) -> bool:
        return self.target_title is not None

    @classmethod
    def fallback(
        cls,
        source_title: str,
        wikibase_item: Optional[str] = None,
        error: Optional[str] = None,
    ) -> "ResolutionEntry":
        """Entry that rewrites to the source title unchanged."""
        return cls(
            source_title=source_title,
            wikibase_item=wikibase_item,
            bracket_form=f"[[{source_title}]]",
            plain_form=source_title,
            error=error,
        )

    def to_dict(self) -> dict:
        return {
            "source_title": self.source_title,
            "wikibase_item": self.wikibase_item,
            "target_title": self.target_title,
            "bracket_form": self.bracket_form,
            "plain_form": self.plain_form,
            "error": self.error,
        }


@dataclass
class ConversionResult:
    """Output of one conversion pass."""
    text: str
    entries: List[ResolutionEntry] = field(default_factory=list)

    @property
    def resolved_count(self) -> int:
        return sum(1 for entry in self.entries if entry.resolved)

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "entries": [entry.to_dict() for entry in self.entries],
            "resolved": self.resolved_count,
            "total": len(self.entries),
        }
