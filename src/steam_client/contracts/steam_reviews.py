"""
Data contracts for Steam Reviews API responses.
"""

from pydantic import BaseModel, ConfigDict, Field


class ReviewStats(BaseModel):
    """
    Review summary for a game.

    Mirrors the ``query_summary`` object of /appreviews/{appid}.
    """

    model_config = ConfigDict(frozen=True)

    review_score: int = Field(default=0, ge=0, le=9, description="Review score (0-9 scale)")
    review_score_desc: str = Field(
        default="", description="Review score description (e.g., 'Very Positive')"
    )
    total_positive: int = Field(default=0, ge=0, description="Total positive reviews")
    total_negative: int = Field(default=0, ge=0, description="Total negative reviews")
    total_reviews: int = Field(default=0, ge=0, description="Total review count")

    @property
    def positive_ratio(self) -> float | None:
        """Calculate positive review ratio."""
        if self.total_reviews == 0:
            return None
        return self.total_positive / self.total_reviews
