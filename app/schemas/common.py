"""
Shared base models for flow requests and model outputs
"""
from typing import Literal
from pydantic import BaseModel, ConfigDict


class RequestModel(BaseModel):
    """Validated user input. Immutable once built; accepts wire aliases or field names."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class OutputModel(BaseModel):
    """Declared shape of a model reply. Checked strictly, never used to rewrite the reply."""
    model_config = ConfigDict(strict=True, populate_by_name=True)


class ErrorRecord(BaseModel):
    """Tagged failure returned by result-convention flows"""
    error: Literal[True] = True
    message: str
