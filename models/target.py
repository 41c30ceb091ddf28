from __future__ import annotations

import json
import re
from datetime import UTC, datetime
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from models.errors import ConfigurationError
from parsers.regex_extractor import compile_price_regex


def _utcnow() -> datetime:
    return datetime.now(UTC)


class RoomTarget(BaseModel):
    name: str = "Unnamed room"
    room_hint: Optional[str] = None
    price_regex: re.Pattern
    threshold: Optional[float] = None

    @field_validator("price_regex", mode="before")
    @classmethod
    def _compile(cls, value):
        return compile_price_regex(value)

    def extraction_config(self) -> dict:
        """The mapping extract_price expects."""
        return {"price_regex": self.price_regex, "room_hint": self.room_hint}


class MonitorTarget(BaseModel):
    id: str = "unknown"
    url: str
    date: Optional[str] = None
    price_regex: Optional[re.Pattern] = None
    active: bool = True
    rooms: list[RoomTarget] = Field(default_factory=list)

    @field_validator("price_regex", mode="before")
    @classmethod
    def _compile(cls, value):
        if value is None or value == "":
            return None
        return compile_price_regex(value)


class CheckResult(BaseModel):
    """Outcome of checking one target (or one room of a target)."""

    target_id: str
    room_name: Optional[str] = None
    url: str
    checked_at: datetime = Field(default_factory=_utcnow)
    raw: Optional[str] = None
    value: Optional[float] = None
    currency: Optional[str] = None
    threshold: Optional[float] = None
    error: Optional[str] = None

    @property
    def below_threshold(self) -> bool:
        return (
            self.value is not None
            and self.threshold is not None
            and self.value <= self.threshold
        )


def load_targets(path: str | Path) -> list[MonitorTarget]:
    """Read monitor targets from a JSON file."""
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"Missing config file: {path}")

    try:
        decoded = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise ConfigurationError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(decoded, list):
        raise ConfigurationError(f"Invalid JSON in {path}: expected a list of targets")

    try:
        return [MonitorTarget.model_validate(entry) for entry in decoded]
    except ValidationError as e:
        raise ConfigurationError(f"Invalid target in {path}: {e}") from e
