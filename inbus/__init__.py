"""In-process publish/subscribe event bus."""

from inbus.config import DEFAULT_CONFIG, Config
from inbus.domain.bus import Bus
from inbus.domain.errors import (
    AlreadyRegisteredEventError,
    DuplicateSubscriptionIdError,
    InbusError,
    InvalidEventNameError,
    InvalidSubscriptionIdError,
    UnknownEventError,
    UnknownSubscriptionError,
)
from inbus.domain.events import Event, Nameable, UnstructuredEvent
from inbus.domain.models import (
    Benchmark,
    CallerLocation,
    Execution,
    Publication,
    PublicationContext,
    Registration,
)
from inbus.domain.subscription import ALL_EVENTS_MATCHER, SingleEventMatcher, Subscription
from inbus.repos.memory import Registry

__all__ = [
    "ALL_EVENTS_MATCHER",
    "AlreadyRegisteredEventError",
    "Benchmark",
    "Bus",
    "CallerLocation",
    "Config",
    "DEFAULT_CONFIG",
    "DuplicateSubscriptionIdError",
    "Event",
    "Execution",
    "InbusError",
    "InvalidEventNameError",
    "InvalidSubscriptionIdError",
    "Nameable",
    "Publication",
    "PublicationContext",
    "Registration",
    "Registry",
    "SingleEventMatcher",
    "Subscription",
    "UnknownEventError",
    "UnknownSubscriptionError",
    "UnstructuredEvent",
]
