"""
The polling window of the provider: between start and end (local time) the
activity runs every interval, starting at start.
"""

from datetime import datetime, time, timedelta


class Activity:
    """
    Daily polling window. Slots are start, start + interval, ... up to and
    including end.
    """

    def __init__(self, start_time, end_time, interval=timedelta(hours=1)):
        if interval <= timedelta(0):
            raise ValueError("interval must be positive")
        if end_time < start_time:
            raise ValueError("end_time must not be before start_time")
        self.start_time = start_time
        self.end_time = end_time
        self.interval = interval

    @classmethod
    def from_config(cls, section):
        """
        Creates an Activity from a config section with 'start', 'end' (HH:MM)
        and 'interval_hours'.
        """
        return cls(
            time.fromisoformat(str(section.get("start", "02:00"))),
            time.fromisoformat(str(section.get("end", "21:00"))),
            timedelta(hours=float(section.get("interval_hours", 1))),
        )

    def _slots(self, day, tzinfo):
        start = datetime.combine(day, self.start_time)
        end = datetime.combine(day, self.end_time)
        slot = start
        while slot <= end:
            yield _localize(slot, tzinfo)
            slot += self.interval

    def is_active(self, now):
        """True if now lies within the daily window."""
        return self.start_time <= now.time().replace(tzinfo=None) <= self.end_time

    def next_run(self, now):
        """Returns the first slot strictly after now, in now's time zone."""
        for day_offset in (0, 1):
            day = (now + timedelta(days=day_offset)).date()
            for slot in self._slots(day, now.tzinfo):
                if slot > now:
                    return slot
        # unreachable: the window of the next day has at least its start slot
        raise RuntimeError("no activity slot found")

    def __repr__(self):
        return (
            f"Activity({self.start_time.isoformat()}-{self.end_time.isoformat()}, "
            f"every {self.interval})"
        )


def _localize(naive, tzinfo):
    if tzinfo is None:
        return naive
    # pytz zones need localize() to pick the right offset
    if hasattr(tzinfo, "localize"):
        return tzinfo.localize(naive)
    return naive.replace(tzinfo=tzinfo)
