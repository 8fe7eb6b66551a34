"""Domain errors raised by the registry and the bus."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from inbus.domain.models import Registration


class InbusError(Exception):
    """Base class for every error raised by inbus itself."""


class InvalidEventNameError(InbusError, ValueError):
    def __init__(self, event_name: Any) -> None:
        self.event_name = event_name
        super().__init__(
            f"Invalid event name {event_name!r}. Event names must be non-empty "
            "strings starting with a letter or underscore."
        )


class AlreadyRegisteredEventError(InbusError):
    """Raised when registering a name twice.

    The message points at the location of the first registration.
    """

    def __init__(self, event_name: str, registration: Registration) -> None:
        self.event_name = event_name
        self.registration = registration
        super().__init__(
            f"Can't register '{event_name}' event as it's already registered.\n\n"
            f"The registration happened at:\n\n{registration.caller_location}"
        )


class UnknownEventError(InbusError, LookupError):
    """Raised when an unregistered name is used."""

    def __init__(
        self,
        event_name: Any,
        known_events: list[str],
        suggestion: str | None = None,
    ) -> None:
        self.event_name = event_name
        self.known_events = list(known_events)
        self.suggestion = suggestion

        message = f"'{event_name}' event is not registered."
        if suggestion is not None:
            message += f"\nDid you mean?  {suggestion}"
        if self.known_events:
            listing = ", ".join(f"'{name}'" for name in self.known_events)
            message += f"\n\nAll known events:\n\n  {listing}"
        else:
            message += "\n\nNo events have been registered yet."
        super().__init__(message)


class InvalidSubscriptionIdError(InbusError, ValueError):
    def __init__(self, id: Any) -> None:
        self.id = id
        super().__init__(
            f"Invalid subscription id {id!r}. Ids must be non-empty strings."
        )


class DuplicateSubscriptionIdError(InbusError):
    def __init__(self, id: str) -> None:
        self.id = id
        super().__init__(f"A subscription with id '{id}' already exists in the bus.")


class UnknownSubscriptionError(InbusError, LookupError):
    def __init__(self, subscription: Any) -> None:
        self.subscription = subscription
        super().__init__(
            f"{subscription!r} is not an active subscription of this bus."
        )
