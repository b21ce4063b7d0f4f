from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class SessionContext(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    login: str = Field(..., min_length=1)
    role: Literal["admin", "support"]
    access_token: str = Field(..., min_length=1)
