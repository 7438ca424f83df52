from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class InitResult(BaseModel):
    status: Literal["created", "exists", "schema_failed"]
    database_url: str
    error: Optional[str] = None


class SeedResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    rows_affected: int = Field(ge=0)
    last_insert_rowid: Optional[int] = None


class BootstrapReport(BaseModel):
    init: InitResult
    seed: SeedResult
