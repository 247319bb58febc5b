from datetime import datetime, timedelta, timezone

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def ts_to_datetime(ts: str) -> datetime:
    """
    Convert a Slack timestamp ("1700000000.123456") into a timezone-aware UTC datetime.

    The seconds and fraction are parsed as integers so no precision is lost
    to floating point.
    """
    seconds, _, fraction = ts.partition(".")
    micros = int(fraction[:6].ljust(6, "0")) if fraction else 0
    return EPOCH + timedelta(seconds=int(seconds), microseconds=micros)
