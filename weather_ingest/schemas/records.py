from pydantic import BaseModel


class WeatherRecord(BaseModel):
    """Persisted form of one forecast day for one location."""

    location: str
    date: str
    temperature: float
    precipitation: float

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"location": "Paris", "date": "2024-01-01", "temperature": 5.2, "precipitation": 0.0}
            ]
        }
    }
