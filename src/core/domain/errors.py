"""Error taxonomy shared by the core, adapters and CLI."""

from __future__ import annotations


class PawError(Exception):
    """Base error for the remediation tool."""


class TransportError(PawError):
    """A call to the remote workflow service failed.

    Covers network, auth, not-found, throttling and malformed-request errors.
    The SDK exception stays available as `__cause__`.
    """

    def __init__(self, operation: str, message: str) -> None:
        super().__init__(message)
        self.operation = operation
        self.message = message

    def __str__(self) -> str:
        return f"{self.operation}: {self.message}"


class DateParseError(PawError, ValueError):
    """Operator supplied date text does not match the expected format."""

    def __init__(self, text: str, expected: str) -> None:
        super().__init__(f"{text!r} does not match {expected!r}")
        self.text = text
        self.expected = expected


class MissingPayloadError(PawError):
    """A described execution carries no input payload and cannot be replayed."""

    def __init__(self, execution_id: str) -> None:
        super().__init__(f"execution {execution_id} has no input payload to retry with")
        self.execution_id = execution_id


class MachineNotFoundError(PawError):
    """No listed state machine matches the name requested by the operator."""

    def __init__(self, name: str, available: list[str]) -> None:
        choices = ", ".join(available) or "none"
        super().__init__(f"state machine {name!r} not found (available: {choices})")
        self.name = name
        self.available = available
