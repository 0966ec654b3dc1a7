"""
In-memory logging handler that keeps the activity history of the plugin, plus a
formatter that renders timestamps in the configured time zone.
"""

import logging
import collections
from datetime import datetime
from threading import RLock

ALERT_LEVELS = ("WARNING", "ERROR", "CRITICAL")


class TimezoneFormatter(logging.Formatter):
    """
    A custom logging formatter that formats log timestamps according to a specified timezone.
    """

    def __init__(self, fmt=None, datefmt=None, tz=None):
        super().__init__(fmt, datefmt)
        self.tz = tz

    def formatTime(self, record, datefmt=None):
        record_time = datetime.fromtimestamp(record.created, self.tz)
        return record_time.strftime(datefmt or self.default_time_format)


class MemoryLogHandler(logging.Handler):
    """
    Stores log records in bounded memory buffers.
    Failed activity ticks are logged at ERROR level and therefore land in the
    separate alert buffer as well, which is what the host shows as activity history.
    """

    def __init__(self, max_records=1000, max_alerts=200):
        super().__init__()
        self.max_records = max_records
        self.max_alerts = max_alerts
        self.records = collections.deque(maxlen=max_records)
        self.alert_records = collections.deque(maxlen=max_alerts)
        self.lock = RLock()
        self._shutdown = False

    def emit(self, record):
        if self._shutdown:
            return
        try:
            tz = getattr(self.formatter, "tz", None) if self.formatter else None
            entry = {
                "timestamp": datetime.fromtimestamp(record.created, tz).isoformat(),
                "level": record.levelname,
                "message": record.getMessage(),
                "module": record.name,
                "funcName": record.funcName,
                "lineno": record.lineno,
            }
        except (TypeError, ValueError):
            self.handleError(record)
            return
        with self.lock:
            self.records.append(entry)
            if record.levelname in ALERT_LEVELS:
                self.alert_records.append(entry)

    def get_logs(self, level_filter=None, limit=None, since=None):
        """Retrieve logs with optional filtering from main buffer"""
        with self.lock:
            logs = list(self.records)
        if level_filter:
            logs = [log for log in logs if log["level"] == level_filter.upper()]
        return self._apply_since_and_limit(logs, since, limit)

    def get_alerts(self, levels=None, limit=None, since=None):
        """Get WARNING and above entries from the dedicated alert buffer"""
        with self.lock:
            alerts = list(self.alert_records)
        if levels:
            wanted = {level.upper() for level in levels}
            alerts = [alert for alert in alerts if alert["level"] in wanted]
        return self._apply_since_and_limit(alerts, since, limit)

    def get_buffer_stats(self):
        """Get statistics about buffer usage"""
        with self.lock:
            return {
                "main_buffer": {
                    "current_size": len(self.records),
                    "max_size": self.max_records,
                    "usage_percent": round(
                        (len(self.records) / self.max_records) * 100, 1
                    ),
                },
                "alert_buffer": {
                    "current_size": len(self.alert_records),
                    "max_size": self.max_alerts,
                    "usage_percent": round(
                        (len(self.alert_records) / self.max_alerts) * 100, 1
                    ),
                },
                "alert_levels": list(ALERT_LEVELS),
            }

    def shutdown(self):
        """
        Stops accepting new log entries and clears the buffers.
        """
        with self.lock:
            self._shutdown = True
            self.records.clear()
            self.alert_records.clear()

    def close(self):
        self.shutdown()
        super().close()

    @staticmethod
    def _apply_since_and_limit(entries, since, limit):
        if since:
            since_dt = datetime.fromisoformat(since.replace("Z", "+00:00"))
            entries = [
                entry
                for entry in entries
                if _comparable(datetime.fromisoformat(entry["timestamp"]), since_dt)
                >= since_dt
            ]
        if limit and limit > 0:
            entries = entries[-limit:]
        return entries


def _comparable(value, reference):
    # naive and aware datetimes cannot be compared
    if (value.tzinfo is None) != (reference.tzinfo is None):
        if value.tzinfo is None:
            return value.astimezone(reference.tzinfo)
        return value.replace(tzinfo=None)
    return value
