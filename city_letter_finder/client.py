from __future__ import annotations

import asyncio
import logging

import httpx

from config.settings import WeatherApiSetting
from city_letter_finder.contracts import WeatherSnapshot
from city_letter_finder.errors import (
    ErrorKind,
    WeatherServiceError,
    describe_upstream_failure,
)


logger = logging.getLogger(__name__)

RETRYABLE_ERRORS = (httpx.HTTPStatusError, httpx.TransportError)


class WeatherServiceClient:
    """Fetches the bounding-box snapshot from the OpenWeather API."""

    def __init__(self, settings: WeatherApiSetting) -> None:
        self._settings = settings

    @property
    def api_url(self) -> str:
        return self._settings.api_url

    async def fetch_weather_data(self) -> WeatherSnapshot:
        try:
            async with httpx.AsyncClient(
                timeout=self._settings.timeout
            ) as client:
                response = await self._get_with_retry(client)
                return WeatherSnapshot.model_validate(response.json())
        except WeatherServiceError:
            raise
        except Exception as exc:
            logger.error('Error processing weather data: %s', exc)
            raise WeatherServiceError(
                ErrorKind.DATA_PROCESSING_ERROR, str(exc)
            ) from exc

    async def _get_with_retry(
        self, client: httpx.AsyncClient
    ) -> httpx.Response:
        attempts = self._settings.retry_attempts
        for attempt in range(1, attempts + 1):
            try:
                response = await client.get(self.api_url)
                response.raise_for_status()
                return response
            except RETRYABLE_ERRORS as exc:
                if attempt == attempts:
                    logger.error(
                        'Error fetching weather data after %s attempts: %s',
                        attempts,
                        describe_upstream_failure(exc),
                    )
                    raise WeatherServiceError(
                        ErrorKind.SERVICE_UNAVAILABLE,
                        'Retry attempts exhausted while fetching weather data',
                    ) from exc
                logger.warning(
                    'Weather API attempt %s/%s failed: %s',
                    attempt,
                    attempts,
                    describe_upstream_failure(exc),
                )
                await asyncio.sleep(self._settings.retry_delay)
