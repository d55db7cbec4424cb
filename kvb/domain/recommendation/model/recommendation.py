from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel


class RecommendationName(StrEnum):
    """Advisory checks run after key reads. Values are stable client identifiers."""

    USE_SMALLER_KEYS = "useSmallerKeys"
    BIG_SETS = "bigSets"
    BIG_STRINGS = "bigStrings"
    COMPRESSION_FOR_LIST = "compressionForList"
    SEARCH_JSON = "searchJSON"
    FUNCTIONS_WITH_STREAMS = "functionsWithStreams"


class Recommendation(BaseModel):
    """A triggered recommendation for one database."""

    database_id: str
    name: RecommendationName
    created_at: datetime
