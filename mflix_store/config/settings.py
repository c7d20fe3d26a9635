"""Application settings using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


MajorityConsistency = Literal["QUORUM", "LOCAL_QUORUM", "EACH_QUORUM", "ALL"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="mflix-store", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    environment: Literal["development", "staging", "production", "testing"] = Field(
        default="development", description="Environment name"
    )

    # Cassandra
    cassandra_hosts: list[str] = Field(
        default=["localhost"], description="Cassandra hosts"
    )
    cassandra_port: int = Field(default=9042, description="Cassandra port")
    cassandra_keyspace: str = Field(default="mflix", description="Cassandra keyspace")
    cassandra_username: str | None = Field(default=None, description="Cassandra user")
    cassandra_password: str | None = Field(
        default=None, description="Cassandra password"
    )
    cassandra_protocol_version: int = Field(default=4, description="Protocol version")
    cassandra_connect_timeout: float = Field(
        default=10.0, description="Connect timeout"
    )
    cassandra_request_timeout: float = Field(
        default=10.0, description="Request timeout"
    )
    cassandra_replication_factor: int = Field(
        default=3, description="Replication factor used in production keyspaces"
    )
    cassandra_datacenter: str = Field(
        default="datacenter1", description="Local datacenter name"
    )

    # Consistency
    cassandra_write_consistency: MajorityConsistency = Field(
        default="QUORUM", description="Consistency level for writes"
    )
    cassandra_read_consistency: MajorityConsistency = Field(
        default="QUORUM", description="Consistency level for point reads"
    )
    cassandra_serial_consistency: Literal["SERIAL", "LOCAL_SERIAL"] = Field(
        default="SERIAL", description="Serial consistency for conditional writes"
    )

    # Leaderboard
    leaderboard_size: int = Field(
        default=20, ge=1, description="Maximum number of critics returned"
    )
    leaderboard_consistency: MajorityConsistency = Field(
        default="QUORUM", description="Consistency level for the leaderboard scan"
    )
    leaderboard_page_size: int = Field(
        default=1000, ge=1, description="Rows fetched per page during the scan"
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level"
    )
    log_format: Literal["json", "console"] = Field(
        default="console", description="Log format"
    )
    log_include_caller_info: bool = Field(
        default=True, description="Include caller info"
    )
    log_dir: str = Field(default="logs", description="Directory for log files")
    log_file_max_bytes: int = Field(
        default=10 * 1024 * 1024, description="Max size per log file (10MB default)"
    )
    log_file_backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.environment == "testing"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
