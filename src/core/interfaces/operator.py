"""Contract of the interactive operator surface.

The core asks questions through this Protocol; the CLI answers them with rich
prompts and tests answer them with scripted fakes.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from core.domain.models import RetryReport


class Operator(Protocol):
    def choose(self, prompt: str, options: Sequence[str]) -> int:
        """Single-select menu. Returns the index of the chosen option."""

        ...

    def choose_many(self, prompt: str, options: Sequence[str]) -> list[int]:
        """Multi-select checklist, every option pre-checked.

        Returns the chosen indices in selection order.
        """

        ...

    def ask_timestamp(self, prompt: str) -> datetime | None:
        """Ask for a timestamp until it parses. Empty input means no bound."""

        ...

    def notify(self, message: str) -> None:
        ...

    def retry_started(self, total: int) -> None:
        ...

    def retry_progress(self, position: int, total: int, name: str) -> None:
        ...

    def retry_finished(self, report: RetryReport) -> None:
        ...
