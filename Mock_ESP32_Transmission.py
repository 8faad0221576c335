#The Mock ESP32 Transmission script simulates the greenhouse device.
#Each cycle it POSTs a generated reading to /api/readings and then polls
#/api/commands for the desired pump/fan states, like the firmware does.

# Mock_ESP32_Transmission.py
import time
import json
import logging
import argparse
import urllib.request
import urllib.error
from typing import Optional

from Mock_Sensor_Generation import MockSensorGenerator
from Config import Config, configure_logging
import MSG

logger = logging.getLogger(__name__)


def post_json(url: str, payload: dict, timeout_s: float = 3.0) -> tuple[int, str]:
    # Post a JSON payload to a URL
    # Returns (status_code, response_body_text),
    # or (0, error_message) on network error.
    data = json.dumps(payload).encode("utf-8")
    req = urllib.request.Request(
        url=url,
        data=data,
        headers={"Content-Type": "application/json"},
        method="POST",
    )
    return _send(req, timeout_s)


def get_json(url: str, timeout_s: float = 3.0) -> tuple[int, str]:
    req = urllib.request.Request(url=url, method="GET")
    return _send(req, timeout_s)


def _send(req: urllib.request.Request, timeout_s: float) -> tuple[int, str]:
    try:
        with urllib.request.urlopen(req, timeout=timeout_s) as resp:
            body = resp.read().decode("utf-8", errors="replace")
            return resp.getcode(), body
    except urllib.error.HTTPError as e:
        body = e.read().decode("utf-8", errors="replace")
        return e.code, body
    except urllib.error.URLError as e:
        return 0, str(e)


def next_backoff(backoff_s: float, max_backoff_s: float = 8.0) -> float:
    return min(max_backoff_s, backoff_s * 2.0)


def run_cycle(base_url: str, gen: MockSensorGenerator, timeout_s: float = 3.0) -> bool:
    """Send one reading and poll commands. Returns True if both calls succeeded."""
    reading = gen.generate()

    # Validate against the server's schema before sending
    try:
        MSG.validate_reading(reading)
    except ValueError as e:
        logger.warning("[VALIDATION-ERR] reading=%s err=%s", reading, e)
        return False

    status, body = post_json(base_url + "/api/readings", reading, timeout_s=timeout_s)
    if status != 200:
        # status==0 means likely network/server unreachable
        logger.error("[ERR] POST readings status=%s detail=%s", status, body)
        return False
    logger.info("[OK] temp=%s humidity=%s soil=%s -> %s", reading["temp"], reading["humidity"], reading["soil"], body)

    status, body = get_json(base_url + "/api/commands", timeout_s=timeout_s)
    if status != 200:
        logger.error("[ERR] GET commands status=%s detail=%s", status, body)
        return False
    try:
        commands = json.loads(body)
    except ValueError:
        commands = None
    if not isinstance(commands, dict):
        logger.error("[ERR] GET commands returned unexpected body: %s", body)
        return False
    logger.info("[CMD] pump=%s fan=%s", commands.get("pump"), commands.get("fan"))
    return True


def run(base_url: str, period_s: float = 5.0, max_cycles: Optional[int] = None) -> None:
    """Send readings every period_s seconds, backing off while the server is down.

    Runs forever unless max_cycles is given.
    """
    base_url = base_url.rstrip("/")
    backoff_s = 0.5  # retry backoff if server is down
    gen = MockSensorGenerator()

    logger.info("[ESP32] Sending to: %s  Period: %ss", base_url, period_s)

    cycles = 0
    while max_cycles is None or cycles < max_cycles:
        cycles += 1
        if run_cycle(base_url, gen):
            backoff_s = 0.5  # reset backoff on success
            time.sleep(period_s)
        else:
            time.sleep(backoff_s)
            backoff_s = next_backoff(backoff_s)


def main():
    parser = argparse.ArgumentParser(description="Simulate the greenhouse device")
    parser.add_argument("--url", default=f"http://127.0.0.1:{Config.PORT}", help="server base URL")
    parser.add_argument("--period", type=float, default=5.0, help="seconds between readings")
    args = parser.parse_args()

    configure_logging()
    run(args.url, args.period)


if __name__ == "__main__":
    main()
