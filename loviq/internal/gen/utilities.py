from datetime import datetime
from zoneinfo import ZoneInfo

from loviq.config import config


class DateTz(datetime):
    @classmethod
    def local(cls, datetime: datetime | None = None, tz: str = config.local_timezone) -> 'DateTz':
        if datetime:
            return cls(
                datetime.year,
                datetime.month,
                datetime.day,
                datetime.hour,
                datetime.minute,
                datetime.second,
                datetime.microsecond,
                tzinfo=ZoneInfo(tz),
            )
        else:
            return cls.now(ZoneInfo(tz))
