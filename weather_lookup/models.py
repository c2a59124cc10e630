# ABOUTME: Pydantic BaseModels for OpenWeatherMap payloads and the derived display structures.
# ABOUTME: Wire names stay as validation aliases; records expose semantic field names and are immutable.

from datetime import date, datetime

from pydantic import AliasPath, BaseModel, ConfigDict, Field


class Record(BaseModel):
    """Immutable value record; accepts both wire aliases and field names."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)


# --- Decoded API records ---


class GeoLocation(Record):
    """One geocoding match."""

    name: str
    country: str
    state: str | None = None
    local_names: dict[str, str] | None = None
    lat: float
    lon: float


class MainReadings(Record):
    temp: float
    feels_like: float
    temp_min: float
    temp_max: float
    pressure: int
    humidity: int


class WeatherCondition(Record):
    id: int
    main: str
    description: str
    icon: str


class Wind(Record):
    speed: float
    deg: int
    gust: float | None = None


class Clouds(Record):
    all: int


class SunTimes(Record):
    """Sunrise and sunset as unix seconds (UTC)."""

    sunrise: int
    sunset: int


class CurrentWeather(Record):
    """Current conditions at a coordinate."""

    name: str = ""
    main: MainReadings
    weather: tuple[WeatherCondition, ...] = ()
    wind: Wind
    clouds: Clouds
    sys: SunTimes
    timezone_offset_seconds: int = Field(validation_alias="timezone")

    @property
    def description(self) -> str:
        return self.weather[0].description if self.weather else "N/A"


class ForecastSample(Record):
    """One 3-hour forecast point."""

    timestamp: int = Field(validation_alias="dt")
    main: MainReadings
    weather: tuple[WeatherCondition, ...] = ()
    clouds: Clouds
    wind: Wind
    time_label: str = Field("", validation_alias="dt_txt")

    @property
    def icon(self) -> str | None:
        return self.weather[0].icon if self.weather else None


class AirQualityComponents(Record):
    """Pollutant concentrations in µg/m³."""

    co: float
    no: float
    no2: float
    o3: float
    so2: float
    pm25: float = Field(validation_alias="pm2_5")
    pm10: float
    nh3: float


class AirQualitySample(Record):
    timestamp: int = Field(validation_alias="dt")
    aqi_index: int = Field(validation_alias=AliasPath("main", "aqi"))
    components: AirQualityComponents


class Coordinate(Record):
    lat: float
    lon: float


class WeatherSnapshot(Record):
    """Everything fetched for one location query.

    Either fully empty or populated from a single coordinate query. Any field may be
    missing on its own when the corresponding upstream call failed.
    """

    coordinate: Coordinate | None = None
    geo_location: GeoLocation | None = None
    current_weather: CurrentWeather | None = None
    forecast: tuple[ForecastSample, ...] | None = None
    air_quality: tuple[AirQualitySample, ...] | None = None

    @property
    def is_empty(self) -> bool:
        return (
            self.coordinate is None
            and self.geo_location is None
            and self.current_weather is None
            and self.forecast is None
            and self.air_quality is None
        )


# --- Derived display structures ---


class WidgetSummary(Record):
    name: str
    current_temp: str
    description: str
    low_high: str


class GeoInfoBlock(Record):
    latitude: str
    longitude: str
    sunrise: tuple[str, str]
    sunset: tuple[str, str]
    timezone_offset: str


class WeatherInfoBlock(Record):
    description: str
    current_temp: str
    low_high: str
    feels_like: str
    clouds: str
    wind: str
    humidity: str
    pressure: str


class HourlyIcon(Record):
    hour: str
    icon: str | None
    timestamp: int


class DayForecast(Record):
    date: date
    label: str
    low: float
    high: float
    low_high: str
    hourly: tuple[HourlyIcon, ...]


class AirQualityComponent(Record):
    label: str
    value: float


class AirQualityBlock(Record):
    aqi_index: int
    description: str
    components: tuple[AirQualityComponent, ...]
    units: str = "μg/m3"


class AqiPoint(Record):
    time: datetime
    aqi_index: int
