from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Contract(BaseModel):
    model_config = ConfigDict(
        frozen=True, populate_by_name=True, coerce_numbers_to_str=True
    )


class Coord(Contract):
    lon: float | None = None
    lat: float | None = None


class MainMetrics(Contract):
    temp: float | None = None
    temp_min: float | None = None
    temp_max: float | None = None
    pressure: float | None = None
    sea_level: float | None = None
    grnd_level: float | None = None
    humidity: int | None = None


class Wind(Contract):
    speed: float | None = None
    deg: float | None = None


class Rain(Contract):
    # volume for the last 3 hours, mm
    last_3h: float | None = Field(default=None, alias='3h')


class Clouds(Contract):
    all: int | None = None


class WeatherCondition(Contract):
    id: int | None = None
    main: str | None = None
    description: str | None = None
    icon: str | None = None


class CityRecord(Contract):
    id: int | None = None
    name: str | None = None
    coord: Coord | None = None
    main: MainMetrics | None = None
    dt: int | None = None
    wind: Wind | None = None
    rain: Rain | None = None
    clouds: Clouds | None = None
    weather: list[WeatherCondition] | None = None


class WeatherSnapshot(Contract):
    cod: str | None = None
    calctime: float | None = None
    cnt: int | None = None
    name: str | None = None
    cities: list[CityRecord] | None = Field(default=None, alias='list')


class CityCount(Contract):
    count: int


class ErrorResponse(Contract):
    error_code: str = Field(alias='errorCode')
    message: str
    details: str | None = None
    timestamp: datetime
    status: int
    path: str
