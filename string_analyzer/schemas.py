from pydantic import BaseModel, ConfigDict, Field, StrictStr
from typing import Any, Dict, Optional, List
from datetime import datetime


class StringCreate(BaseModel):
    value: StrictStr = Field(..., description="String to analyze")


class StringProperties(BaseModel):
    model_config = ConfigDict(frozen=True)

    length: int
    is_palindrome: bool
    unique_characters: int
    word_count: int
    sha256_hash: str
    character_frequency_map: Dict[str, int]


class StringRecord(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: str
    value: str
    properties: StringProperties
    created_at: datetime


class FilterSet(BaseModel):
    """Validated filters; a filter left as None is not applied"""

    is_palindrome: Optional[bool] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    word_count: Optional[int] = None
    contains_character: Optional[str] = None

    def applied(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class StringListResponse(BaseModel):
    data: List[StringRecord]
    count: int
    filters_applied: Dict[str, Any] = Field(default_factory=dict)


class InterpretedQuery(BaseModel):
    original: str
    parsed_filters: Dict[str, Any]


class NaturalLanguageResponse(BaseModel):
    data: List[StringRecord]
    count: int
    interpreted_query: InterpretedQuery
