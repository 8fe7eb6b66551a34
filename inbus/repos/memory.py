"""In-memory registry of known event names."""

from __future__ import annotations

import logging
import re

from inbus.domain.errors import (
    AlreadyRegisteredEventError,
    InvalidEventNameError,
    UnknownEventError,
)
from inbus.domain.models import CallerLocation, Registration
from inbus.services.locations import caller_location as _caller_location
from inbus.services.suggestions import did_you_mean

logger = logging.getLogger(__name__)

_EVENT_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_.:\-]*")


def is_valid_event_name(event_name: object) -> bool:
    return isinstance(event_name, str) and _EVENT_NAME.fullmatch(event_name) is not None


class Registry:
    """Dict-backed store of Registration instances, keyed by event name.

    Insertion order is preserved, so ``event_names()`` lists names in the
    order they were registered.  Not thread-safe: serialize access externally
    when a bus is shared between threads.
    """

    def __init__(self, registrations: list[Registration] | None = None) -> None:
        self._store: dict[str, Registration] = {}
        for registration in registrations or []:
            self._store[registration.event_name] = registration

    def register(
        self,
        event_name: str,
        caller_location: CallerLocation | str | None = None,
    ) -> Registration:
        """Add *event_name* to the registry and return its Registration.

        *caller_location* defaults to the caller of this method.
        """
        if not is_valid_event_name(event_name):
            raise InvalidEventNameError(event_name)

        existing = self._store.get(event_name)
        if existing is not None:
            raise AlreadyRegisteredEventError(event_name, existing)

        if caller_location is None:
            caller_location = _caller_location(1)
        registration = Registration(event_name=event_name, caller_location=caller_location)
        self._store[event_name] = registration
        logger.debug("Registered event %s at %s", event_name, caller_location)
        return registration

    def unregister(self, event_name: str) -> None:
        self.check_event_name(event_name)
        del self._store[event_name]
        logger.debug("Unregistered event %s", event_name)

    def registration(self, event_name: str) -> Registration | None:
        if not isinstance(event_name, str):
            return None
        return self._store.get(event_name)

    def registered(self, event_name: str) -> bool:
        return self.registration(event_name) is not None

    def registrations(self) -> list[Registration]:
        return list(self._store.values())

    def event_names(self) -> list[str]:
        return list(self._store)

    def check_event_name(self, event_name: str) -> None:
        """Raise ``UnknownEventError`` unless *event_name* is registered.

        Use ``registered`` for the predicate version.
        """
        if self.registered(event_name):
            return
        known = self.event_names()
        raise UnknownEventError(
            event_name,
            known_events=known,
            suggestion=did_you_mean(event_name, known),
        )
