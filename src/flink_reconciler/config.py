"""Application settings."""

from enum import StrEnum

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ObjectStoreBackend(StrEnum):
    """Available adapters for container-platform object access."""

    IN_MEMORY = "in_memory"
    KUBERNETES = "kubernetes"


class Settings(BaseSettings):
    """Runtime settings loaded from environment variables."""

    app_name: str = "Flink Reconciler"
    api_prefix: str = ""
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "info"
    job_manager_scheme: str = "http"
    job_manager_port: int = 8081
    job_manager_timeout_seconds: float = 10.0
    object_store_backend: ObjectStoreBackend = ObjectStoreBackend.IN_MEMORY
    kubernetes_api_url: str | None = None
    kubernetes_token: str | None = None
    kubernetes_verify_tls: bool = True
    kubernetes_timeout_seconds: float = 10.0

    @model_validator(mode="after")
    def validate_backend_settings(self) -> "Settings":
        """Ensure backend-specific settings are valid."""

        if (
            self.object_store_backend == ObjectStoreBackend.KUBERNETES
            and not self.kubernetes_api_url
        ):
            raise ValueError(
                "FLINK_RECONCILER_KUBERNETES_API_URL is required when "
                "FLINK_RECONCILER_OBJECT_STORE_BACKEND=kubernetes."
            )
        if self.job_manager_scheme not in {"http", "https"}:
            raise ValueError("FLINK_RECONCILER_JOB_MANAGER_SCHEME must be 'http' or 'https'.")
        if not 1 <= self.job_manager_port <= 65535:
            raise ValueError("FLINK_RECONCILER_JOB_MANAGER_PORT must be between 1 and 65535.")
        if not 1 <= self.port <= 65535:
            raise ValueError("FLINK_RECONCILER_PORT must be between 1 and 65535.")
        if self.job_manager_timeout_seconds <= 0:
            raise ValueError("FLINK_RECONCILER_JOB_MANAGER_TIMEOUT_SECONDS must be > 0.")
        if self.kubernetes_timeout_seconds <= 0:
            raise ValueError("FLINK_RECONCILER_KUBERNETES_TIMEOUT_SECONDS must be > 0.")
        return self

    model_config = SettingsConfigDict(env_prefix="FLINK_RECONCILER_", extra="ignore")


__all__ = ["ObjectStoreBackend", "Settings"]
