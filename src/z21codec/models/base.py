"""Base model and shared Pydantic configuration for z21codec value types."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Z21Model(BaseModel):
    """Base class for every z21codec value type.

    Decoded telegrams are snapshots of station state. Models are frozen so a
    decoded value can be handed to several subscribers or threads without one
    of them changing what the others see; build a new value with
    ``model_copy(update=...)`` instead.

    Example:
        >>> from z21codec.models import LocoAddress, LocoInfo
        >>> info = LocoInfo(address=LocoAddress(3), speed_step=10)
        >>> faster = info.model_copy(update={"speed_step": 20})
    """

    model_config = ConfigDict(
        # Immutable and hashable
        frozen=True,
        # Forbid extra fields not defined in schema
        extra="forbid",
        # Enums stay enums (not their values) after validation
        use_enum_values=False,
    )
