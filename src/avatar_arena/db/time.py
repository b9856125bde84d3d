"""Clock helpers shared by models and the demo store."""

from datetime import UTC, datetime


def utcnow() -> datetime:
    """Timezone-aware current time, used for every ``created_at`` column."""
    return datetime.now(UTC)


def epoch_millis(moment: datetime | None = None) -> int:
    """Milliseconds since the epoch; demo vote ids are built from this."""
    return int((moment or utcnow()).timestamp() * 1000)
