from __future__ import annotations

from pydantic import BaseModel, Field

from atvscan.const import DEFAULT_TIMEOUT, Protocol


class ScanOptions(BaseModel):
    """What to look for during one scan.

    ``identifier`` is matched after aggregation. ``protocol`` and ``hosts``
    restrict the queries that are sent.
    """

    model_config = {"extra": "forbid"}

    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    identifier: str | None = None
    protocol: Protocol | None = None
    hosts: list[str] = Field(default_factory=list)
