"""
Runtime configuration.
Values come from environment variables (prefix MOVIE_DIRECTORY_) or a local .env file.
The OMDb key is also read from the plain OMDB_API_KEY variable.
"""

from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	model_config = SettingsConfigDict(env_prefix="MOVIE_DIRECTORY_", env_file=".env", extra="ignore")

	data_path: str = "data/movies.json"  # bundled catalog document
	omdb_api_key: str = Field(
		default="",
		validation_alias=AliasChoices("MOVIE_DIRECTORY_OMDB_API_KEY", "OMDB_API_KEY"),
	)  # blank disables remote enrichment
	omdb_base_url: str = "https://www.omdbapi.com/"
	omdb_request_delay: float = 0.2  # seconds between detail lookups
	omdb_timeout: float = 10.0  # per request, seconds
	search_remote_limit: int = 10  # remote hits merged into /api/search
	log_level: str = "INFO"
	api_url: Optional[str] = None  # UI talks to this API when reachable


@lru_cache
def get_settings() -> Settings:
	return Settings()
