"""Data models for solution verification."""

from typing import List, Optional, Literal
from pydantic import BaseModel, Field


ValidationMode = Literal["exact", "dictionary"]


class ValidationError(BaseModel):
    """A single validation error."""
    code: str
    message: str
    word: Optional[str] = None
    line: Optional[int] = None
    target_id: Optional[str] = None


class ValidationResult(BaseModel):
    """Result of checking a board against a solution strategy."""
    valid: bool
    mode: Optional[ValidationMode] = None
    errors: List[ValidationError] = Field(default_factory=list)
    warnings: List[ValidationError] = Field(default_factory=list)
    rows: List[str] = Field(default_factory=list)
    grid: Optional[str] = None
