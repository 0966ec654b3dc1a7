"""
Runs the provider's activity at the slots of its Activity in a background thread.
"""

from datetime import datetime
import logging
import threading
import time

import pytz

from .errors import SolarprognoseError

logger = logging.getLogger("__main__")


class ActivityScheduler:
    """
    Executes one activity tick per slot. A failed tick is logged, remembered in
    last_error and produces no data; the next slot is the retry.

    With a MemoryLogHandler as history, get_status() and get_activity_history()
    report what the ticks logged.
    """

    def __init__(self, provider, activity, time_zone=pytz.utc, clock=None, history=None):
        self.provider = provider
        self.activity = activity
        self.time_zone = time_zone
        self.clock = clock if clock is not None else (lambda: datetime.now(self.time_zone))
        self.history = history
        self.variables = {}
        self.last_error = {
            "error": None,
            "timestamp": None,
            "message": None,
        }
        self._update_thread = None
        self._stop_event = threading.Event()

    def run_activity(self):
        """
        Runs one tick.

        Returns:
            dict: the extracted variables, or None if the tick failed.
        """
        variables = {}
        try:
            self.provider.do_activity_work(variables, self._stop_event)
        except SolarprognoseError as e:
            logger.error("[Scheduler] activity failed (%s): %s", type(e).__name__, e)
            self._record_error(type(e).__name__, str(e))
            return None
        self.last_error["error"] = None
        self.variables = variables
        return variables

    def run_if_active(self):
        """
        Runs one tick if the clock lies within the activity window.

        Returns:
            dict: the extracted variables, or None if the tick failed or was skipped.
        """
        now = self.clock()
        if not self.activity.is_active(now):
            logger.debug("[Scheduler] %s outside of %s - skipped", now, self.activity)
            return None
        return self.run_activity()

    def get_status(self, alert_limit=10):
        """
        Returns the last error, the number of forecast hours held and, with a
        history, the most recent alerts and the buffer usage.
        """
        status = {
            "last_error": dict(self.last_error),
            "hours_available": sum(
                1
                for key, value in self.variables.items()
                if key.startswith("timestamp_") and value is not None
            ),
            "alerts": [],
            "buffer": None,
        }
        if self.history is not None:
            status["alerts"] = self.history.get_alerts(limit=alert_limit)
            status["buffer"] = self.history.get_buffer_stats()
        return status

    def get_activity_history(self, level_filter=None, limit=None, since=None):
        if self.history is None:
            return []
        return self.history.get_logs(level_filter=level_filter, limit=limit, since=since)

    def start(self):
        """
        Starts the background thread running the activity.
        """
        if self._update_thread is None or not self._update_thread.is_alive():
            self._stop_event.clear()
            self._update_thread = threading.Thread(
                target=self.__run_loop, daemon=True
            )
            self._update_thread.start()
            logger.info("[Scheduler] Update service started - %s", self.activity)

    def shutdown(self):
        """
        Stops the background thread.
        """
        self._stop_event.set()
        if self._update_thread and self._update_thread.is_alive():
            self._update_thread.join()
            logger.info("[Scheduler] Update service stopped.")

    def seconds_until_next_run(self):
        now = self.clock()
        return max(0.0, (self.activity.next_run(now) - now).total_seconds())

    def _record_error(self, error, message):
        self.last_error.update(
            {
                "error": error,
                "timestamp": self.clock().isoformat(),
                "message": message,
            }
        )

    def __run_loop(self):
        while not self._stop_event.is_set():
            try:
                sleep_interval = self.seconds_until_next_run()
                logger.debug("[Scheduler] next activity in %.0f s", sleep_interval)
                # sleep in 1-second chunks to allow immediate shutdown
                while sleep_interval > 0:
                    if self._stop_event.is_set():
                        return
                    time.sleep(min(1, sleep_interval))
                    sleep_interval -= 1
                if self._stop_event.is_set():
                    return
                self.run_if_active()
            except Exception as e:  # pylint: disable=broad-exception-caught
                logger.error("[Scheduler] Error during activity: %s", e)
                self._record_error(type(e).__name__, str(e))
                # Continue the loop even if the tick fails
