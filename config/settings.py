from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSetting(BaseSettings):
    log_level: str = 'DEBUG'
    api_prefix: str = '/api'
    enable_file_logging: bool = False
    log_file_path: str = 'app.log'
    cors_origins: list[str] = ['*']

    model_config = SettingsConfigDict(env_prefix='APP_')


class WeatherApiSetting(BaseSettings):
    """OpenWeather "cities in bounding box" endpoint and fetch policy."""

    base_url: str = 'https://api.openweathermap.org/data/2.5/box/city'
    appid: str = ''
    lon_left: float = 12.0
    lat_bottom: float = 32.0
    lon_right: float = 15.0
    lat_top: float = 37.0
    zoom: int = 10
    retry_attempts: int = Field(default=3, ge=1)
    retry_delay: float = Field(default=2.0, ge=0)
    timeout: float = Field(default=10.0, gt=0)

    model_config = SettingsConfigDict(env_prefix='WEATHER_API_', frozen=True)

    def format_bbox_param(self) -> str:
        return (
            f'{self.lon_left},{self.lat_bottom},'
            f'{self.lon_right},{self.lat_top},{self.zoom}'
        )

    @property
    def api_url(self) -> str:
        return (
            f'{self.base_url}?bbox={self.format_bbox_param()}'
            f'&appid={self.appid}'
        )


app_settings = AppSetting()
weather_api_settings = WeatherApiSetting()
