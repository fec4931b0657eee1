"""Structured security.txt document and the presentable entries built from it."""

from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class SecurityTxtDocument(BaseModel):
    model_config = ConfigDict(frozen=True)

    contact: List[str] = Field(default_factory=list)
    expires: Optional[Union[datetime, str]] = None
    encryption: Optional[List[str]] = None
    acknowledgments: Optional[List[str]] = None
    preferred_languages: Optional[List[str]] = None
    canonical: Optional[str] = None
    policy: Optional[List[str]] = None
    hiring: Optional[List[str]] = None


class ParsedEntry(BaseModel):
    """One renderable line: a plain value, or a link with its resolved label."""

    label: str
    value: Optional[Union[datetime, str]] = None
    link: Optional[str] = None
