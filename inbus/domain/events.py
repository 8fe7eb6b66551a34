"""Event types accepted by ``Bus.publish``."""

from __future__ import annotations

from typing import Any, ClassVar, Protocol, runtime_checkable

from pydantic import BaseModel, Field

from inbus.config import DEFAULT_CONFIG, Config


@runtime_checkable
class Nameable(Protocol):
    """Anything that can be published: it only needs to expose its name."""

    def event_name(self) -> str: ...


class Event(BaseModel):
    """Base class for structured events.

    The name is derived from the class name through the configured name
    builder, so ``OrderCreated(...)`` is published as ``order_created``::

        class OrderCreated(Event):
            order_id: str

        bus.register(OrderCreated.event_name())
        bus.publish(OrderCreated(order_id="42"))

    Set ``inbus_config`` on a subclass to use a different name builder.
    """

    inbus_config: ClassVar[Config] = DEFAULT_CONFIG

    @classmethod
    def event_name(cls) -> str:
        return cls.inbus_config.name_builder(cls)


class UnstructuredEvent(BaseModel):
    """Event built on the fly from a name and the payload given to publish."""

    name: str
    payload: dict[Any, Any] = Field(default_factory=dict)

    def event_name(self) -> str:
        return self.name

    def __getitem__(self, key: Any) -> Any:
        return self.payload[key]


def to_event(value: Any, payload: dict[Any, Any] | None = None) -> Any:
    """Wrap a bare name into an UnstructuredEvent; return anything else as-is."""
    if isinstance(value, str):
        return UnstructuredEvent(name=value, payload=payload or {})
    return value
