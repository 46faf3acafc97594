from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from schemas.product import as_utc


class LogResponse(BaseModel):
    id: int
    action: str
    resource: str
    status: str
    ts: Optional[datetime] = None
    meta: Optional[Any] = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator("ts")
    @classmethod
    def _utc(cls, value):
        return as_utc(value)
