"""
Request body model for the lookup endpoint.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, ValidationInfo, field_validator


class LookupRequest(BaseModel):
    """Either a free-text ``query`` or a ``bggIds`` batch."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    query: Optional[str] = Field(default=None, description="Game name to search for")
    bgg_ids: Optional[List[StrictInt]] = Field(default=None, alias="bggIds",
                                               description="BoardGameGeek ids to fetch")

    @field_validator("query", mode="before")
    @classmethod
    def non_text_query_is_absent(cls, v: Any) -> Any:
        # A non-string query counts as no query at all, so bggIds can still apply
        return v if isinstance(v, str) else None

    @field_validator("bgg_ids", mode="before")
    @classmethod
    def whole_floats_are_ids(cls, v: Any, info: ValidationInfo) -> Any:
        # A query wins over ids, so ids sent alongside one are not checked
        if info.data.get("query") or not isinstance(v, list):
            return None
        return [int(item) if isinstance(item, float) and item.is_integer() else item for item in v]

    @property
    def is_search(self) -> bool:
        return bool(self.query)
