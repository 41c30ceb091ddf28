from __future__ import annotations

import re
from typing import Any, Optional

from lxml import etree
from pydantic import BaseModel, Field, field_validator

from models.enums import PriceKind, PriceQualifier


class PriceMatch(BaseModel):
    """One textual occurrence of a price inside a block of text."""

    model_config = {"frozen": True}

    raw: str
    value: float
    currency: Optional[str] = None
    currency_symbol: Optional[str] = None  # token as written, e.g. "€" or "eur"
    amount: str = ""  # numeral run without the currency token
    offset: int
    length: int


class ClassifiedPrice(PriceMatch):
    kind: PriceKind = PriceKind.UNCLASSIFIED
    qualifier: PriceQualifier = PriceQualifier.NONE


class PriceResult(BaseModel):
    """Normalized price handed to storage and alerting."""

    model_config = {"frozen": True}

    raw: str
    value: float
    currency: Optional[str] = None


class JsonCandidate(BaseModel):
    model_config = {"frozen": True}

    path: str
    value: float
    currency: Optional[str] = None
    key: str


class ApiRoom(BaseModel):
    model_config = {"frozen": True}

    name: str = ""
    total: Optional[float] = None
    night: Optional[float] = None
    currency: Optional[str] = None
    blocked: bool = False


class CapturedResponse(BaseModel):
    """A JSON response captured by the headless-render collaborator."""

    model_config = {"frozen": True}

    url: str = ""
    status: int = 0
    body: Any = None


class MarkupSelectors(BaseModel):
    model_config = {"frozen": True}

    css: list[str] = Field(default_factory=list)
    structural: list[str] = Field(default_factory=list)

    @field_validator("structural")
    @classmethod
    def _compile_structural(cls, value: list[str]) -> list[str]:
        for expression in value:
            try:
                etree.XPath(expression)
            except etree.XPathSyntaxError as e:
                raise ValueError(f"Invalid structural selector {expression!r}: {e}") from e
        return value


class HostStrategy(BaseModel):
    """Per-site bundle of markup selectors and fallback regexes.

    ``host_patterns`` containing the sentinel ``"default"`` marks the terminal
    fallback strategy.
    """

    model_config = {"frozen": True}

    name: str
    host_patterns: list[str]
    markup_selectors: MarkupSelectors = Field(default_factory=MarkupSelectors)
    fallback_regexes: list[re.Pattern] = Field(default_factory=list)

    @property
    def is_default(self) -> bool:
        return "default" in self.host_patterns

    def matches_host(self, host: str) -> bool:
        """Exact host match or subdomain of one of the patterns."""
        for pattern in self.host_patterns:
            if pattern == "default":
                continue
            pattern = pattern.lower()
            if host == pattern or host.endswith("." + pattern):
                return True
        return False
