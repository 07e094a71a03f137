"""The service clock. Timestamps are stored as naive UTC datetimes in DateTime columns."""
from datetime import datetime
from datetime import timezone


def utcnow():
    """The current UTC time without tzinfo."""
    return datetime.now( timezone.utc ).replace( tzinfo=None )
