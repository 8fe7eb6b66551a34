"""Configuration for name derivation and subscription id generation."""

from __future__ import annotations

import re
import uuid
from typing import Callable

from pydantic import BaseModel, ConfigDict

_CAMEL_BOUNDARY = re.compile(r"([A-Za-z])([A-Z])")


def default_name_builder(cls: type) -> str:
    """Derive an event name from a class.

    ``FooBar -> foo_bar``, ``FBar -> f_bar``, ``Outer.Inner -> outer_inner``.
    """
    name = _CAMEL_BOUNDARY.sub(r"\1_\2", cls.__qualname__)
    return name.replace(".", "_").lower()


def default_id_generator() -> str:
    return str(uuid.uuid4())


class Config(BaseModel):
    """Strategies shared by buses and structured events.

    Pass an instance to ``Bus(config=...)`` or set it as ``inbus_config`` on
    an ``Event`` subclass.  ``DEFAULT_CONFIG`` is used when nothing is given.
    """

    model_config = ConfigDict(frozen=True)

    name_builder: Callable[[type], str] = default_name_builder
    id_generator: Callable[[], str] = default_id_generator


DEFAULT_CONFIG = Config()
