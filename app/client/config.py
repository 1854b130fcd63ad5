from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """Settings for the AgroMarket client, read from AGRO_* variables."""
    model_config = SettingsConfigDict(env_prefix="AGRO_", env_file=".env", extra="ignore")

    API_BASE_URL: str = "http://localhost:8000"
    # keyring service name the session is stored under
    KEYRING_SERVICE: str = "agromarket"
    REQUEST_TIMEOUT: float = 10.0
