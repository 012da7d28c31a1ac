from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, TypeVar

from city_letter_finder.client import WeatherServiceClient
from city_letter_finder.contracts import CityRecord, WeatherSnapshot
from city_letter_finder.errors import ErrorKind, WeatherServiceError


logger = logging.getLogger(__name__)

T = TypeVar('T')


class CityProjectionStrategy(ABC):
    @abstractmethod
    def empty(self) -> Any:
        pass  # pragma no cover

    @abstractmethod
    def project(self, cities: list[CityRecord]) -> Any:
        pass  # pragma no cover


class CityCountStrategy(CityProjectionStrategy):
    def empty(self) -> int:
        return 0

    def project(self, cities: list[CityRecord]) -> int:
        return len(cities)


class CityNamesStrategy(CityProjectionStrategy):
    def empty(self) -> list[str]:
        return []

    def project(self, cities: list[CityRecord]) -> list[str]:
        return [city.name for city in cities]


def city_name_starts_with(city: CityRecord, lower_case_letter: str) -> bool:
    return city.name is not None and city.name.lower().startswith(
        lower_case_letter
    )


def validate_weather_snapshot(snapshot: WeatherSnapshot) -> list[CityRecord]:
    if snapshot.cities is None:
        raise WeatherServiceError(
            ErrorKind.INVALID_DATA, 'Weather response contains no cities data'
        )
    return snapshot.cities


class CityLetterFinder:
    """Filters the freshly fetched snapshot by the first letter of city names.

    Every call fetches a new snapshot; nothing is cached between calls.
    Failures other than ``WeatherServiceError`` are wrapped into a
    ``DATA_PROCESSING_ERROR`` chained to the original exception.
    """

    def __init__(self, client: WeatherServiceClient) -> None:
        self.client = client

    async def fetch_weather_data(self) -> WeatherSnapshot:
        return await self._guard(self.client.fetch_weather_data)

    async def count_cities_starting_with(self, letter: str | None) -> int:
        return await self.find(letter, CityCountStrategy())

    async def get_cities_starting_with(
        self, letter: str | None
    ) -> list[str]:
        return await self.find(letter, CityNamesStrategy())

    async def find(
        self, letter: str | None, strategy: CityProjectionStrategy
    ) -> Any:
        if not letter:
            return strategy.empty()

        lower_case_letter = letter.lower()

        async def run() -> Any:
            snapshot = await self.client.fetch_weather_data()
            cities = validate_weather_snapshot(snapshot)
            matching = [
                city
                for city in cities
                if city_name_starts_with(city, lower_case_letter)
            ]
            return strategy.project(matching)

        return await self._guard(run)

    async def _guard(self, operation: Callable[[], Awaitable[T]]) -> T:
        try:
            return await operation()
        except WeatherServiceError:
            raise
        except Exception as exc:
            logger.error('Unexpected error in weather service', exc_info=exc)
            raise WeatherServiceError(
                ErrorKind.DATA_PROCESSING_ERROR,
                'An unexpected error occurred in the service layer',
            ) from exc
