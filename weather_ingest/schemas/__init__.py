from .forecast import DailyForecast, ForecastQuery, ForecastResponse
from .records import WeatherRecord

__all__ = ["DailyForecast", "ForecastQuery", "ForecastResponse", "WeatherRecord"]
