from enum import Enum


class PriceKind(str, Enum):
    TOTAL = "total"
    PER_NIGHT = "per_night"
    PER_PERSON = "per_person"
    UNCLASSIFIED = "unclassified"


class PriceQualifier(str, Enum):
    NONE = "none"
    FROM = "from"


class FetchState(str, Enum):
    OK = "ok"
    BLOCKED = "blocked"
    HTTP_ERROR = "http_error"
    EMPTY = "empty"
    ERROR = "error"
