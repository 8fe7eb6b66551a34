"""Value objects describing registrations, publications and executions."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CallerLocation(BaseModel):
    """Source position of whoever called into the bus."""

    model_config = ConfigDict(frozen=True)

    filename: str
    lineno: int
    function: str

    def __str__(self) -> str:
        return f"{self.filename}:{self.lineno} in {self.function}"


class Registration(BaseModel):
    """A registered event name and where it was registered from."""

    model_config = ConfigDict(frozen=True)

    event_name: str
    caller_location: CallerLocation | str


class PublicationContext(BaseModel):
    """Shared by every execution triggered by a single publish call.

    Subscriptions receive it as their second argument when they take one.
    """

    model_config = ConfigDict(frozen=True)

    caller_location: CallerLocation | str
    time: datetime = Field(default_factory=_utcnow)

    def serialized(self) -> dict[str, str]:
        """Plain-string version, suitable for handing over to job queues."""
        return {
            "caller_location": str(self.caller_location),
            "time": self.time.isoformat(),
        }


class Benchmark(BaseModel):
    """Elapsed wall-clock (``real``) and CPU (``cpu``) seconds."""

    model_config = ConfigDict(frozen=True)

    real: float
    cpu: float


class Execution(BaseModel):
    """One subscription's callback run during a publication."""

    model_config = ConfigDict(frozen=True)

    subscription: Any
    result: Any = None
    benchmark: Benchmark
    execution_time: datetime = Field(default_factory=_utcnow)


class Publication(BaseModel):
    """Returned by ``Bus.publish``: the event plus the executions it caused."""

    model_config = ConfigDict(frozen=True)

    event: Any
    executions: tuple[Execution, ...] = ()
    context: PublicationContext
