#This program creates plausible greenhouse sensor readings for software testing,
#in the same shape the device POSTs to /api/readings.

import random

SOIL_ADC_MAX = 4095  # 12-bit ADC on the ESP32


class MockSensorGenerator:
    """Generates greenhouse readings using normal distributions."""

    def __init__(self, seed=None):
        self._rng = random.Random(seed)

        # Means and standard deviations around typical greenhouse conditions
        self.sensor_params = {
            "temp": {"mean": 24.0, "stddev": 1.5},      # Celsius
            "humidity": {"mean": 60.0, "stddev": 7.0},  # Relative humidity %
            "soil": {"mean": 2100, "stddev": 300},      # Raw ADC, higher is drier
        }

    def _clamp(self, value, min_val, max_val):
        return max(min_val, min(max_val, value))

    def _sample(self, key):
        p = self.sensor_params[key]
        return self._rng.gauss(p["mean"], p["stddev"])

    def generate(self):
        #Generate one reading.
        return {
            "temp": round(self._sample("temp"), 2),
            "humidity": round(self._clamp(self._sample("humidity"), 0.0, 100.0), 2),
            "soil": int(self._clamp(round(self._sample("soil")), 0, SOIL_ADC_MAX)),
        }
