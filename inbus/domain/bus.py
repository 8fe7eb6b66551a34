"""Synchronous in-process event bus."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Callable, Iterable, Iterator

from inbus.config import DEFAULT_CONFIG, Config
from inbus.domain.errors import DuplicateSubscriptionIdError, UnknownSubscriptionError
from inbus.domain.events import Nameable, to_event
from inbus.domain.models import (
    CallerLocation,
    Publication,
    PublicationContext,
    Registration,
)
from inbus.domain.subscription import (
    ALL_EVENTS_MATCHER,
    Matcher,
    SingleEventMatcher,
    Subscription,
)
from inbus.repos.memory import Registry
from inbus.services.locations import caller_location as _caller_location

logger = logging.getLogger(__name__)


class Bus:
    """Publish/subscribe bus for in-process events.

    Event names must be registered before they're published or subscribed
    to, which catches typos and naming collisions early::

        bus = Bus()
        bus.register("order_created")
        bus.subscribe("order_created", lambda event: send_receipt(event["id"]))
        bus.publish("order_created", id=42)

    Subscriptions are run synchronously, in the order they were added.  An
    exception raised by a subscription propagates out of ``publish`` and the
    remaining subscriptions are not run.

    The bus holds no lock.  When it's shared between threads, serialize
    access to it externally.
    """

    def __init__(
        self,
        subscriptions: Iterable[Subscription] | None = None,
        registry: Registry | None = None,
        config: Config | None = None,
        caller_location_start: int = 1,
    ) -> None:
        self._subscriptions: list[Subscription] = []
        for subscription in subscriptions or []:
            if self.subscription(subscription.id) is not None:
                raise DuplicateSubscriptionIdError(subscription.id)
            self._subscriptions.append(subscription)
        # Lists saved by enclosing performing_only blocks, outermost first.
        self._outer: list[list[Subscription]] = []
        self._registry = registry if registry is not None else Registry()
        self._config = config or DEFAULT_CONFIG
        self._caller_location_start = caller_location_start

    @property
    def registry(self) -> Registry:
        return self._registry

    @property
    def subscriptions(self) -> tuple[Subscription, ...]:
        return tuple(self._subscriptions)

    @property
    def config(self) -> Config:
        return self._config

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(
        self,
        event_name: str,
        caller_location: CallerLocation | str | None = None,
    ) -> Registration:
        """Register *event_name* so it can be published and subscribed to.

        *caller_location* defaults to the caller of this method and shows up
        in the error raised on a duplicate registration.
        """
        if caller_location is None:
            caller_location = _caller_location(self._caller_location_start)
        return self._registry.register(event_name, caller_location=caller_location)

    def unregister(self, event_name: str) -> None:
        """Remove *event_name* and every subscription bound to it by name."""
        self._registry.unregister(event_name)
        for subscriptions in (*self._outer, self._subscriptions):
            subscriptions[:] = [s for s in subscriptions if s.event_name != event_name]

    # ------------------------------------------------------------------
    # Subscription management
    # ------------------------------------------------------------------

    def subscribe_with_matcher(
        self,
        matcher: Matcher,
        callback: Callable | None = None,
        id: str | None = None,
    ) -> Any:
        """Subscribe *callback* to every event for which *matcher* is true.

        Without a callback it works as a decorator: the decorated function is
        subscribed and returned unchanged.
        """
        if callback is None:

            def decorator(func: Callable) -> Callable:
                self.subscribe_with_matcher(matcher, func, id=id)
                return func

            return decorator

        if id is None:
            id = self._config.id_generator()
        if self.subscription(id) is not None:
            raise DuplicateSubscriptionIdError(id)

        subscription = Subscription(matcher=matcher, callback=callback, id=id)
        self._subscriptions.append(subscription)
        logger.debug("Subscribed %r", subscription)
        return subscription

    def subscribe(
        self,
        event_name: str,
        callback: Callable | None = None,
        id: str | None = None,
    ) -> Any:
        """Subscribe *callback* to the event named *event_name*."""
        self._registry.check_event_name(event_name)
        return self.subscribe_with_matcher(
            SingleEventMatcher(event_name), callback, id=id
        )

    def subscribe_to_all(
        self,
        callback: Callable | None = None,
        id: str | None = None,
    ) -> Any:
        """Subscribe *callback* to every published event."""
        return self.subscribe_with_matcher(ALL_EVENTS_MATCHER, callback, id=id)

    def unsubscribe(self, subscription: Subscription) -> bool:
        """Remove *subscription*; return whether it was active.

        Inside ``performing_only`` it is also dropped from the lists restored
        when the blocks exit.
        """
        for saved in self._outer:
            saved[:] = [s for s in saved if s is not subscription]
        for index, active in enumerate(self._subscriptions):
            if active is subscription:
                del self._subscriptions[index]
                logger.debug("Unsubscribed %r", subscription)
                return True
        return False

    def subscription(self, id: str) -> Subscription | None:
        for subscription in self._subscriptions:
            if subscription.id == id:
                return subscription
        return None

    # ------------------------------------------------------------------
    # Publication
    # ------------------------------------------------------------------

    def publish(
        self,
        event: Any,
        /,
        caller_location: CallerLocation | str | None = None,
        **payload: Any,
    ) -> Publication:
        """Run every subscription matching *event*.

        *event* is either an event name, in which case an
        ``UnstructuredEvent`` is built from it and *payload*, or an object
        exposing ``event_name()``.
        """
        event = to_event(event, payload)
        if not isinstance(event, Nameable):
            raise TypeError(f"{event!r} can't be published: it has no event_name()")
        self._registry.check_event_name(event.event_name())

        if caller_location is None:
            caller_location = _caller_location(self._caller_location_start)
        context = PublicationContext(caller_location=caller_location)

        matching = [s for s in self._subscriptions if s.matches(event)]
        logger.debug(
            "Publishing %s to %d subscription(s)", event.event_name(), len(matching)
        )
        executions = [subscription.invoke(event, context) for subscription in matching]
        return Publication(event=event, executions=tuple(executions), context=context)

    # ------------------------------------------------------------------
    # Scoping
    # ------------------------------------------------------------------

    @contextmanager
    def performing_only(self, *subscriptions: Subscription) -> Iterator[Bus]:
        """Only run *subscriptions* within the ``with`` block.

        The full list of subscriptions is restored when the block exits,
        whether or not it raised.  Subscriptions added inside the block are
        dropped on restore.
        """
        for subscription in subscriptions:
            if not any(active is subscription for active in self._subscriptions):
                raise UnknownSubscriptionError(subscription)

        previous = self._subscriptions
        self._subscriptions = [
            s for s in previous if any(s is kept for kept in subscriptions)
        ]
        self._outer.append(previous)
        try:
            yield self
        finally:
            self._outer.pop()
            self._subscriptions = previous

    def performing_nothing(self) -> Any:
        """Don't run any subscription within the ``with`` block."""
        return self.performing_only()

    def with_subscriptions(self, subscriptions: Iterable[Subscription]) -> Bus:
        """Return a bus sharing this registry but running only *subscriptions*."""
        return type(self)(
            subscriptions=subscriptions,
            registry=self._registry,
            config=self._config,
            caller_location_start=self._caller_location_start,
        )

    def clear(self) -> Bus:
        """Drop every registration and subscription, e.g. on code reload."""
        self._registry = Registry()
        for saved in self._outer:
            saved.clear()
        self._subscriptions = []
        logger.debug("Cleared bus")
        return self
