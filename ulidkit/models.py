from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class IdentifierInfo(BaseModel):
    """Decoded view of an identifier."""
    kind: str
    canonical: str
    alternate: str
    timestamp: int
    timestamp_utc: Optional[datetime] = None
    random: int
    hex: str
