"""
Common Pydantic Schemas
"""

import re
from datetime import datetime, timezone
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, StrictStr

_RFC3339_RE = re.compile(
    r"^(\d{4}-\d{2}-\d{2}[Tt]\d{2}:\d{2}:\d{2})(?:\.(\d+))?([Zz]|[+-]\d{2}:\d{2})$"
)


def parse_rfc3339(value: str) -> datetime:
    """Parse an RFC3339 timestamp such as ``1994-09-23T00:00:00Z``"""
    match = _RFC3339_RE.match(value)
    if not match:
        raise ValueError(f"{value!r} is not an RFC3339 timestamp")

    date_time, fraction, offset = match.groups()
    if offset in ("Z", "z"):
        offset = "+00:00"
    # fromisoformat only understands up to microseconds
    micros = ((fraction or "") + "000000")[:6]

    return datetime.fromisoformat(f"{date_time.upper()}.{micros}{offset}")


def validate_rfc3339(value: Any) -> datetime:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
    if not isinstance(value, str):
        raise ValueError("must be an RFC3339 timestamp string")
    return parse_rfc3339(value)


RFC3339Datetime = Annotated[datetime, BeforeValidator(validate_rfc3339)]
NonEmptyStr = Annotated[StrictStr, Field(min_length=1)]


class ErrorResponse(BaseModel):
    """Error response body"""
    detail: str


class TimestampMixin(BaseModel):
    """Timestamp fields mixin"""
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
