from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    PROJECT_NAME: str = "TaxPayer Registry"
    LOG_LEVEL: str = "INFO"

    # "append" keeps every insert and lookup returns the newest match.
    # "reject" refuses a tid that is already registered.
    DUPLICATE_POLICY: Literal["append", "reject"] = "append"

    # Unset means records live in memory only.
    SNAPSHOT_PATH: Optional[str] = None

    # Request audit entries kept in memory; older ones are dropped.
    AUDIT_LOG_LIMIT: int = Field(10000, ge=1)

    HOST: str = "0.0.0.0"
    PORT: int = 8000

    class Config:
        case_sensitive = True

settings = Settings()
