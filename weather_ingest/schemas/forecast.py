from __future__ import annotations

from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ForecastQuery(BaseModel):
    location: str
    start_date: str
    end_date: str

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"location": "Paris", "start_date": "2024-01-01", "end_date": "2024-01-07"}
            ]
        }
    }


class DailyForecast(BaseModel):
    """One day of the provider's timeline payload.

    The provider leaves `precip` null (or out) on dry days, so missing numbers
    decode as 0.0.
    """

    model_config = ConfigDict(populate_by_name=True)

    date: str = Field(default="", alias="datetime")
    temperature: float = Field(default=0.0, alias="temp")
    precipitation: float = Field(default=0.0, alias="precip")

    @field_validator("temperature", "precipitation", mode="before")
    @classmethod
    def _null_as_zero(cls, v: Any) -> Any:
        return 0.0 if v is None else v


class ForecastResponse(BaseModel):
    days: List[DailyForecast] = Field(default_factory=list)

    @field_validator("days", mode="before")
    @classmethod
    def _null_as_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)
