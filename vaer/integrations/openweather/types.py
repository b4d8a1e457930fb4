from pydantic import BaseModel, ConfigDict, Field


class OpenWeatherModel(BaseModel):
    # NaN or infinite readings are malformed payloads
    model_config = ConfigDict(allow_inf_nan=False)


class Condition(OpenWeatherModel):
    id: int | None = None
    main: str | None = None
    description: str
    icon: str


class MainReadings(OpenWeatherModel):
    temp: float
    feels_like: float
    humidity: int = Field(ge=0, le=100)
    pressure: float
    temp_min: float | None = None
    temp_max: float | None = None


class Wind(OpenWeatherModel):
    speed: float
    deg: float | None = None
    gust: float | None = None


class Sun(OpenWeatherModel):
    country: str
    sunrise: int
    sunset: int


class Coord(OpenWeatherModel):
    lat: float
    lon: float


class CurrentWeatherResponse(OpenWeatherModel):
    """Response from the /weather endpoint."""

    name: str
    main: MainReadings
    weather: list[Condition] = Field(min_length=1)
    wind: Wind
    # Visibility in meters
    visibility: float
    sys: Sun
    # Shift in seconds from UTC
    timezone: int | None = None
    dt: int | None = None
    coord: Coord | None = None


class ForecastMainReadings(OpenWeatherModel):
    temp: float
    feels_like: float | None = None
    humidity: int = Field(ge=0, le=100)
    pressure: float | None = None
    temp_min: float | None = None
    temp_max: float | None = None


class ForecastEntry(OpenWeatherModel):
    """A single 3-hour step in the forecast."""

    dt: int
    main: ForecastMainReadings
    weather: list[Condition] = Field(min_length=1)
    wind: Wind
    visibility: float | None = None
    # Probability of precipitation, 0-1
    pop: float | None = None
    dt_txt: str | None = None


class ForecastCity(OpenWeatherModel):
    name: str | None = None
    country: str | None = None
    timezone: int | None = None
    sunrise: int | None = None
    sunset: int | None = None


class ForecastResponse(OpenWeatherModel):
    """Response from the /forecast endpoint."""

    list: list[ForecastEntry]
    city: ForecastCity | None = None
