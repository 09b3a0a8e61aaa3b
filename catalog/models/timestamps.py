from datetime import datetime

import pytz

from catalog.extensions import db


def get_utc_time():
    return datetime.now(pytz.utc)


def isoformat(value):
    return value.isoformat() if value else None


class TimestampMixin:
    created_at = db.Column(db.DateTime(timezone=True), default=get_utc_time, nullable=False)
    updated_at = db.Column(
        db.DateTime(timezone=True),
        default=get_utc_time,
        onupdate=get_utc_time,
        nullable=False
    )

    def _timestamps(self):
        return {
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }
