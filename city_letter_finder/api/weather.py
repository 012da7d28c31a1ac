from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from city_letter_finder import contracts
from city_letter_finder.services import CityLetterFinder


logger = logging.getLogger(__name__)

router = APIRouter()

Letter = Annotated[
    str,
    Query(
        min_length=1,
        max_length=1,
        pattern='^[A-Za-z]$',
        description='Single alphabetic character to match city names against',
    ),
]


def get_city_letter_finder(request: Request) -> CityLetterFinder:
    return request.app.state.city_letter_finder


Finder = Annotated[CityLetterFinder, Depends(get_city_letter_finder)]


@router.get('/weather', response_model=contracts.WeatherSnapshot)
async def get_all_weather_data(finder: Finder) -> contracts.WeatherSnapshot:
    logger.info('Received request to get all weather data')
    return await finder.fetch_weather_data()


@router.get('/weather/cities/count', response_model=contracts.CityCount)
async def count_cities_starting_with(
    letter: Letter, finder: Finder
) -> contracts.CityCount:
    logger.info('Received request to count cities starting with: %s', letter)
    count = await finder.count_cities_starting_with(letter)
    return contracts.CityCount(count=count)


@router.get('/weather/cities', response_model=list[str])
async def get_cities_starting_with(
    letter: Letter, finder: Finder
) -> list[str]:
    logger.info('Received request to get cities starting with: %s', letter)
    return await finder.get_cities_starting_with(letter)
