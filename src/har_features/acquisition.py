import logging
import threading
from typing import Callable, Dict, List, Optional

import requests

from har_features.constants import (
    PHYPHOX_ERROR_BACKOFF_S,
    PHYPHOX_POLL_INTERVAL_S,
    PHYPHOX_REQUEST_TIMEOUT_S,
    PHYPHOX_SENSORS,
)
from har_features.preprocessing import RawSample

LOGGER = logging.getLogger(__name__)


def build_query_url(base_url: str, sensors: List[str] = PHYPHOX_SENSORS) -> str:
    """e.g. http://192.168.0.36:8080 -> http://192.168.0.36:8080/get?accX&accY&..."""
    return base_url.rstrip("/") + "/get?" + "&".join(sensors)


def parse_latest_values(data_json: dict, sensors: List[str]) -> Dict[str, float]:
    """
    Latest value of every requested buffer in a phyphox /get response.

    Raises KeyError, IndexError or ValueError on an unexpected payload.
    """
    # Buffers live either under "buffer" or at the top level
    container = data_json.get("buffer", None)
    sensor_root = container if isinstance(container, dict) else data_json
    if not isinstance(sensor_root, dict):
        raise ValueError(f"Unexpected JSON format: {data_json}")

    values = {}
    for sensor in sensors:
        if sensor not in sensor_root:
            raise KeyError(
                f"Sensor '{sensor}' not found in response. "
                f"Available keys: {list(sensor_root.keys())}"
            )
        sensor_obj = sensor_root[sensor]
        buffer_vals = sensor_obj.get("buffer", None) if isinstance(sensor_obj, dict) else sensor_obj
        if not isinstance(buffer_vals, (list, tuple)) or len(buffer_vals) == 0:
            raise IndexError(f"No numeric data found for sensor '{sensor}'")
        if buffer_vals[-1] is None:
            raise ValueError(f"Sensor '{sensor}' has no value yet")
        values[sensor] = float(buffer_vals[-1])
    return values


def values_to_sample(values: Dict[str, float]) -> RawSample:
    # missing gyroscope buffers (accelerometer-only experiments) read as 0
    return RawSample(
        values["accX"], values["accY"], values["accZ"],
        values.get("gyroX", 0.0), values.get("gyroY", 0.0), values.get("gyroZ", 0.0),
    )


class PhyphoxPoller(threading.Thread):
    """
    Background thread that polls a phyphox /get endpoint and delivers each
    reading as a RawSample through `callback`.

    Errors are logged and passed to `on_error` (if given) as a message,
    followed by a back-off before the next attempt.
    """

    def __init__(
        self,
        base_url: str,
        callback: Callable[[RawSample], None],
        sensors: List[str] = PHYPHOX_SENSORS,
        on_error: Optional[Callable[[str], None]] = None,
        poll_interval_s: float = PHYPHOX_POLL_INTERVAL_S,
        error_backoff_s: float = PHYPHOX_ERROR_BACKOFF_S,
        session: Optional[requests.Session] = None,
    ):
        super().__init__(name="phyphox-poller")
        self.query_url = build_query_url(base_url, sensors)
        self.sensors = list(sensors)
        self.callback = callback
        self.on_error = on_error
        self.poll_interval_s = poll_interval_s
        self.error_backoff_s = error_backoff_s
        self.session = session or requests.Session()
        self.stop_event = threading.Event()
        self.daemon = True  # do not block program exit

    def poll_once(self) -> RawSample:
        resp = self.session.get(self.query_url, timeout=PHYPHOX_REQUEST_TIMEOUT_S)
        resp.raise_for_status()
        return values_to_sample(parse_latest_values(resp.json(), self.sensors))

    def _report(self, message: str) -> None:
        LOGGER.warning(message)
        if self.on_error is not None:
            self.on_error(message)

    def run(self):
        LOGGER.info("Polling phyphox at %s", self.query_url)

        while not self.stop_event.is_set():
            try:
                sample = self.poll_once()
            except requests.RequestException as e:
                # Networking problems: timeout, connection refused, etc.
                self._report(
                    f"Request to phyphox failed: {e}. Check that phone and PC are "
                    "on the same network, remote access is enabled, and the URL is correct."
                )
                self.stop_event.wait(self.error_backoff_s)
                continue
            except (KeyError, IndexError, ValueError, TypeError) as e:
                # Problems with data format or missing buffers
                self._report(
                    f"Data format error: {e}. Make sure phyphox provides all "
                    f"these buffers: {self.sensors}"
                )
                self.stop_event.wait(self.error_backoff_s)
                continue

            self.callback(sample)
            self.stop_event.wait(self.poll_interval_s)

        LOGGER.info("Stopped phyphox polling")

    def stop(self):
        """Signal the thread to stop on the next loop."""
        self.stop_event.set()
