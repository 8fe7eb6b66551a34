"""Subscriptions: a matcher, a callback and an id."""

from __future__ import annotations

import inspect
import time
from typing import Any, Callable

from inbus.domain.errors import InvalidSubscriptionIdError
from inbus.domain.models import Benchmark, Execution, PublicationContext

Matcher = Callable[[Any], bool]


class SingleEventMatcher:
    """Matches events whose name equals the subscribed one."""

    __slots__ = ("event_name",)

    def __init__(self, event_name: str) -> None:
        self.event_name = event_name

    def __call__(self, candidate: Any) -> bool:
        return candidate.event_name() == self.event_name

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SingleEventMatcher):
            return NotImplemented
        return self.event_name == other.event_name

    def __hash__(self) -> int:
        return hash((SingleEventMatcher, self.event_name))

    def __repr__(self) -> str:
        return f"SingleEventMatcher({self.event_name!r})"


def _match_all(candidate: Any) -> bool:
    return True


ALL_EVENTS_MATCHER: Matcher = _match_all


def takes_context(callback: Callable) -> bool:
    """Whether *callback* can be called with ``(event, context)``.

    Decided once from the signature.  Callables whose signature can't be
    inspected are called with the event only.
    """
    try:
        signature = inspect.signature(callback)
    except (TypeError, ValueError):
        return False

    positional = 0
    for param in signature.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return True
        if param.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            positional += 1
    return positional >= 2


def is_valid_subscription_id(id: object) -> bool:
    return isinstance(id, str) and id != ""


class Subscription:
    """A callback subscribed to a bus.

    Returned by ``Bus.subscribe`` and friends.  Besides inspecting it, you'll
    mostly use it as a handle for ``Bus.unsubscribe`` or
    ``Bus.performing_only``.
    """

    def __init__(self, matcher: Matcher, callback: Callable, id: str) -> None:
        if not is_valid_subscription_id(id):
            raise InvalidSubscriptionIdError(id)
        if not callable(callback):
            raise TypeError(f"Subscription callback must be callable, got {callback!r}")
        self._matcher = matcher
        self._callback = callback
        self._id = id
        self._takes_context = takes_context(callback)

    @property
    def id(self) -> str:
        return self._id

    @property
    def matcher(self) -> Matcher:
        return self._matcher

    @property
    def callback(self) -> Callable:
        return self._callback

    @property
    def event_name(self) -> str | None:
        """Subscribed event name, for single-event subscriptions."""
        if isinstance(self._matcher, SingleEventMatcher):
            return self._matcher.event_name
        return None

    def matches(self, candidate: Any) -> bool:
        return bool(self._matcher(candidate))

    def invoke(self, event: Any, context: PublicationContext) -> Execution:
        """Run the callback and wrap the outcome into an Execution.

        Exceptions raised by the callback propagate to the caller.
        """
        started_real = time.perf_counter()
        started_cpu = time.process_time()
        if self._takes_context:
            result = self._callback(event, context)
        else:
            result = self._callback(event)
        benchmark = Benchmark(
            real=time.perf_counter() - started_real,
            cpu=time.process_time() - started_cpu,
        )
        return Execution(subscription=self, result=result, benchmark=benchmark)

    def subscriptions(self) -> list[Subscription]:
        return [self]

    def __repr__(self) -> str:
        return f"<Subscription id={self._id!r} matcher={self._matcher!r}>"
