import math

from pydantic import BaseModel, field_validator
from typing import Any, Literal


def _is_number(v: Any) -> bool:
    # JSON true/false arrive as bool, which is an int subclass
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        return False
    # NaN/Infinity get through json.loads but cannot be serialized back out
    try:
        return math.isfinite(v)
    except OverflowError:
        # int too large to convert to float
        return False


class ReadingIn(BaseModel):
    """Body of POST /api/readings, as sent by the sensor device."""

    temp: float
    humidity: float
    soil: int

    @field_validator("temp", "humidity", mode="before")
    @classmethod
    def _real_number(cls, v: Any) -> float:
        if not _is_number(v):
            raise ValueError("must be a number")
        return float(v)

    @field_validator("soil", mode="before")
    @classmethod
    def _integer_valued(cls, v: Any) -> int:
        if not _is_number(v):
            raise ValueError("must be a number")
        if isinstance(v, float):
            if not v.is_integer():
                raise ValueError("must be integer-valued")
            return int(v)
        return v


class ActuatorIn(BaseModel):
    """Body of POST /api/actuator: desired state for one actuator."""

    name: Literal["pump", "fan"]
    state: int

    @field_validator("state", mode="before")
    @classmethod
    def _zero_or_one(cls, v: Any) -> int:
        # exact integers only: true, 1.0 and "1" are all rejected
        if type(v) is not int or v not in (0, 1):
            raise ValueError("state must be 0 or 1")
        return v


def validate_reading(data) -> ReadingIn:
    return ReadingIn.model_validate(data)


def validate_actuator(data) -> ActuatorIn:
    return ActuatorIn.model_validate(data)
