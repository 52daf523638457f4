"""Connection settings for the database service."""

import os
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator


ENV_VARS = {
    "endpoint": "SURREAL_ENDPOINT",
    "username": "SURREAL_USER",
    "password": "SURREAL_PASS",
    "namespace": "SURREAL_NS",
    "database": "SURREAL_DB",
}


class ConnectionSettings(BaseModel):
    endpoint: str = "http://localhost:8000"
    username: str = "root"
    password: str = "root"
    namespace: str = "test"
    database: str = "test"
    timeout: float = Field(default=30.0, gt=0)
    max_retries: int = Field(default=3, ge=0)

    @field_validator("endpoint")
    @classmethod
    def normalize_endpoint(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("endpoint must not be empty")
        if "://" not in value:
            value = f"http://{value}"
        return value.rstrip("/")

    @classmethod
    def from_env(cls, overrides: Optional[Dict[str, Any]] = None) -> "ConnectionSettings":
        """
        Build settings from SURREAL_* environment variables.

        Explicit overrides win over the environment; None values are ignored.
        """
        values: Dict[str, Any] = {}
        for name, env_var in ENV_VARS.items():
            if os.environ.get(env_var):
                values[name] = os.environ[env_var]

        for name, value in (overrides or {}).items():
            if value is not None:
                values[name] = value

        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation (without the password)."""
        return self.model_dump(exclude={"password"})
