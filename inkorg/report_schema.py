from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class LinkEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    scheme: str
    path: str
    begin: int
    end: int
    bracketed: bool = False
    description: Optional[str] = None
    resolved: str
    exists: bool


class LinksReport(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    document: str
    scheme: Optional[str] = None
    links: List[LinkEntry] = Field(default_factory=list)
    total: int = 0


__all__ = ["LinkEntry", "LinksReport"]
