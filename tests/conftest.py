import httpx
import pytest
from fastapi.testclient import TestClient

from config.settings import WeatherApiSetting
from city_letter_finder.app import AppBuilder


@pytest.fixture
def api_url():
    return 'http://weather.test/data/2.5/box/city'


@pytest.fixture
def make_response(api_url):
    def wrapper(status_code: int, payload=None) -> httpx.Response:
        return httpx.Response(
            status_code=status_code,
            json=payload,
            request=httpx.Request('GET', f'{api_url}?appid=test-key'),
        )
    return wrapper


@pytest.fixture
def weather_settings(api_url):
    return WeatherApiSetting(
        base_url=api_url,
        appid='test-key',
        retry_attempts=3,
        retry_delay=0,
    )


@pytest.fixture
def weather_payload():
    return {
        "cod": "200",
        "calctime": 0.3107,
        "cnt": 2,
        "list": [
            {
                "id": 2208425,
                "name": "Zuwarah",
                "coord": {"lon": 12.08199, "lat": 32.931198},
                "main": {
                    "temp": 16.62,
                    "temp_min": 16.62,
                    "temp_max": 16.62,
                    "pressure": 1020,
                    "sea_level": 1020,
                    "grnd_level": 1018,
                    "humidity": 71,
                },
                "dt": 1485784982,
                "wind": {"speed": 2.7, "deg": 259},
                "rain": {"3h": 0.265},
                "clouds": {"all": 88},
                "weather": [
                    {
                        "id": 500,
                        "main": "Rain",
                        "description": "light rain",
                        "icon": "10d",
                    }
                ],
            },
            {
                "id": 2210247,
                "name": "Tripoli",
                "coord": {"lon": 13.18746, "lat": 32.875191},
                "main": {
                    "temp": 16.1,
                    "temp_min": 16.1,
                    "temp_max": 16.1,
                    "pressure": 1021,
                    "sea_level": 1021,
                    "grnd_level": 1019,
                    "humidity": 66,
                },
                "dt": 1485784982,
                "wind": {"speed": 3.1, "deg": 270},
                "clouds": {"all": 20},
                "weather": [
                    {
                        "id": 801,
                        "main": "Clouds",
                        "description": "few clouds",
                        "icon": "02d",
                    }
                ],
            },
        ],
    }


@pytest.fixture
def app(weather_settings):
    return AppBuilder().set_weather_api_settings(weather_settings).build()


@pytest.fixture
def client(app):
    return TestClient(app)
