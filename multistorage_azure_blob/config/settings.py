from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Optional
from dotenv import load_dotenv, find_dotenv


DEFAULT_BLOCK_SIZE = 4 * 1024 * 1024


class AzureBlobConfig(BaseSettings):
    """Azure Blob Storage adapter configuration.

    Account name and key are validated by the provider itself so that a
    missing value surfaces as a ConfigurationException naming the value.
    """

    account_name: Optional[str] = Field(default=None)
    access_key: Optional[str] = Field(default=None)
    default_container: Optional[str] = Field(default=None)
    first_folder_is_container: bool = Field(default=False)
    account_url: Optional[str] = Field(default=None)
    block_size: int = Field(default=DEFAULT_BLOCK_SIZE, gt=0)

    model_config = SettingsConfigDict(
        env_prefix="AZURE_BLOB_",
        env_file=".env",
        env_file_encoding="utf-8",
        frozen=True,
        extra="ignore",
        case_sensitive=False
    )

    def __init__(self, **kwargs):
        # Force load environment variables before validation
        load_dotenv(find_dotenv())
        super().__init__(**kwargs)

    @property
    def resolved_account_url(self) -> str:
        if self.account_url:
            return self.account_url.rstrip("/")
        return f"https://{self.account_name}.blob.core.windows.net"


class StorageConfig(BaseSettings):
    """Storage provider selection."""

    provider: str = Field(default="azure-blob")

    model_config = SettingsConfigDict(
        env_prefix="STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
        extra="ignore",
        case_sensitive=False
    )

    def __init__(self, **kwargs):
        load_dotenv(find_dotenv())
        super().__init__(**kwargs)


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    level: str = Field(default="INFO")
    log_file: Optional[str] = Field(default=None)
    enable_file_logging: bool = Field(default=False)
    max_file_size: str = Field(default="10 MB")
    retention_days: int = Field(default=7)

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
        extra="ignore",
        case_sensitive=False
    )

    def __init__(self, **kwargs):
        load_dotenv(find_dotenv())
        super().__init__(**kwargs)


class MultiStorageConfig(BaseSettings):
    """Main configuration class."""

    app_name: str = Field(default="multistorage-azure-blob")
    debug: bool = Field(default=False)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
        extra="ignore",
        case_sensitive=False
    )

    def __init__(self, **kwargs):
        # Force load environment variables before initializing
        load_dotenv(find_dotenv())

        super().__init__(**kwargs)
        # Initialize cached configurations
        self._storage = None
        self._azure_blob = None
        self._logging = None

    @property
    def storage(self) -> StorageConfig:
        if self._storage is None:
            load_dotenv(find_dotenv(), override=True)
            self._storage = StorageConfig()
        return self._storage

    @property
    def azure_blob(self) -> AzureBlobConfig:
        if self._azure_blob is None:
            load_dotenv(find_dotenv(), override=True)
            self._azure_blob = AzureBlobConfig()
        return self._azure_blob

    @property
    def logging(self) -> LoggingConfig:
        if self._logging is None:
            load_dotenv(find_dotenv(), override=True)
            self._logging = LoggingConfig()
        return self._logging
