from __future__ import annotations

import copy
import logging.config

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.settings import (
    WeatherApiSetting,
    app_settings,
    weather_api_settings,
)
from city_letter_finder.api.weather import router as weather_router
from city_letter_finder.client import WeatherServiceClient
from city_letter_finder.errors import register_exception_handlers
from city_letter_finder.services import CityLetterFinder

logging_config = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": app_settings.log_level,
            "formatter": "default",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": app_settings.log_level,
    },
}


class AppBuilder:
    def __init__(self):
        self._app = FastAPI(title="City Letter Finder")
        self._api_prefix = "/api"
        self._cors_origins = ["*"]
        self._weather_api_settings = weather_api_settings
        self._log_to_file = False
        self._log_file_path = None
        self._file_log_level = None

    def set_api_prefix(self, prefix: str) -> AppBuilder:
        self._api_prefix = prefix
        return self

    def set_cors_origins(self, origins: list[str]) -> AppBuilder:
        self._cors_origins = origins
        return self

    def set_weather_api_settings(
        self, settings: WeatherApiSetting
    ) -> AppBuilder:
        self._weather_api_settings = settings
        return self

    def enable_file_logging(self, filename: str, log_level: str) -> AppBuilder:
        self._log_to_file = True
        self._log_file_path = filename
        self._file_log_level = log_level
        return self

    def _configure_file_logging(self):
        config = copy.deepcopy(logging_config)
        config['handlers']['file'] = {
            "class": "logging.FileHandler",
            "level": self._file_log_level,
            "filename": self._log_file_path,
            "formatter": "default",
        }
        config['root']['handlers'].append('file')
        logging.config.dictConfig(config)

    def build(self) -> FastAPI:
        if self._log_to_file:
            self._configure_file_logging()
        # CORS must be added last to wrap the catch-all error middleware
        register_exception_handlers(self._app)
        self._app.add_middleware(
            CORSMiddleware,
            allow_origins=self._cors_origins,
            allow_methods=["GET"],
            allow_headers=["*"],
        )
        self._app.state.city_letter_finder = CityLetterFinder(
            WeatherServiceClient(self._weather_api_settings)
        )
        self._app.include_router(
            weather_router, prefix=self._api_prefix, tags=['WeatherReport']
        )
        return self._app


def create_app() -> FastAPI:
    logging.config.dictConfig(logging_config)
    builder = (
        AppBuilder()
        .set_api_prefix(app_settings.api_prefix)
        .set_cors_origins(app_settings.cors_origins)
        .set_weather_api_settings(weather_api_settings)
    )
    if app_settings.enable_file_logging:
        builder.enable_file_logging(
            filename=app_settings.log_file_path,
            log_level=app_settings.log_level,
        )
    app = builder.build()
    return app
