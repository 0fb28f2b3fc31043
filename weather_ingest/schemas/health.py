from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = Field(default="ok")
    uptime_s: float = Field(ge=0)
    version: str
    app_env: str
    collection: str = Field(description="Document collection the service reads and writes")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "status": "ok",
                    "uptime_s": 12.34,
                    "version": "0.1.0",
                    "app_env": "development",
                    "collection": "weather_data",
                }
            ]
        }
    }
