"""Raw order book tick as published by a tick source."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, model_validator


class RawLevel(BaseModel):
    """A single (price, quantity) pair as received on the wire.

    Accepts either ``{"price": p, "quantity": q}`` or a ``[p, q]`` pair;
    numeric strings are coerced.
    """

    price: float = Field(gt=0, allow_inf_nan=False)
    quantity: float = Field(ge=0, allow_inf_nan=False)

    @model_validator(mode="before")
    @classmethod
    def _from_pair(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            if len(value) != 2:
                raise ValueError(f"level pair must have 2 elements, got {len(value)}")
            return {"price": value[0], "quantity": value[1]}
        return value


class RawTick(BaseModel):
    """Side-keyed price levels from one source at one point in time."""

    source: str | None = None
    symbol: str | None = None
    timestamp: datetime | None = None
    bids: list[RawLevel] = []
    asks: list[RawLevel] = []
