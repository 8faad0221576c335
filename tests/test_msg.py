import pytest
from pydantic import ValidationError

import MSG


def test_reading_accepts_ints_for_real_fields():
    r = MSG.validate_reading({"temp": 21, "humidity": 55, "soil": 1900})
    assert r.temp == 21.0 and isinstance(r.temp, float)
    assert r.humidity == 55.0


def test_reading_accepts_integer_valued_float_soil():
    r = MSG.validate_reading({"temp": 21.5, "humidity": 55.0, "soil": 3.0})
    assert r.soil == 3
    assert isinstance(r.soil, int)


def test_reading_ignores_extra_keys():
    r = MSG.validate_reading({"temp": 21.5, "humidity": 55.0, "soil": 3, "device": "esp32"})
    assert r.model_dump() == {"temp": 21.5, "humidity": 55.0, "soil": 3}


@pytest.mark.parametrize("bad", [float("nan"), float("inf"), 10 ** 400, "21.5", False, None])
def test_reading_rejects_non_numbers(bad):
    with pytest.raises(ValidationError):
        MSG.validate_reading({"temp": bad, "humidity": 55.0, "soil": 3})


def test_actuator_accepts_exact_zero_and_one():
    assert MSG.validate_actuator({"name": "fan", "state": 0}).state == 0
    assert MSG.validate_actuator({"name": "pump", "state": 1}).state == 1


@pytest.mark.parametrize("state", [True, False, 1.0, 0.0, "0", -1, 2, None])
def test_actuator_rejects_non_strict_state(state):
    with pytest.raises(ValidationError):
        MSG.validate_actuator({"name": "pump", "state": state})


def test_actuator_rejects_unknown_name():
    with pytest.raises(ValidationError):
        MSG.validate_actuator({"name": "heater", "state": 1})
