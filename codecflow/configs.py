from pydantic_settings import BaseSettings

from codecflow.const import DEFAULT_AUDIO_CODEC, DEFAULT_VIDEO_CODEC


class Settings(BaseSettings):
    api_password: str | None = None  # The password for protecting the API endpoints.
    log_level: str = "INFO"  # The logging level to use.
    default_audio_codec: str = DEFAULT_AUDIO_CODEC  # Fallback audio codec when a variant declares none.
    default_video_codec: str = DEFAULT_VIDEO_CODEC  # Fallback video codec when a variant declares none.

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
