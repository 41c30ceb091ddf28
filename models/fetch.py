from typing import Optional

from pydantic import BaseModel

from models.enums import FetchState


class FetchResult(BaseModel):
    url: str
    state: FetchState
    status: int = 0
    body: Optional[str] = None
    error: Optional[str] = None
    content_type: str = ""
    elapsed: float = 0.0
    effective_url: str = ""

    @property
    def ok(self) -> bool:
        return self.state == FetchState.OK
