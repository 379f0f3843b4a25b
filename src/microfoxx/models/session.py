"""
Connection and session models.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator

DEFAULT_SCHEME = "http"
DEFAULT_HOST = "localhost"
DEFAULT_PORT = 80
DEFAULT_MOUNT = "/microfoxx"


class ConnectionParams(BaseModel):
    database: str = Field(min_length=1)
    scheme: str = DEFAULT_SCHEME
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    mount: str = DEFAULT_MOUNT
    username: str = ""
    password: str = ""

    @field_validator("scheme", "host", "port", "mount", mode="before")
    @classmethod
    def blank_means_default(cls, value: Any, info: ValidationInfo) -> Any:
        # Partially specified params fall back to the defaults.
        if value is None or value == "":
            return cls.model_fields[info.field_name].default
        return value

    @field_validator("mount")
    @classmethod
    def leading_slash(cls, value: str) -> str:
        value = value.rstrip("/")
        if value and not value.startswith("/"):
            value = "/" + value
        return value

    @property
    def endpoint(self) -> str:
        """<scheme>://<host>:<port>/_db/<database><mount>"""
        return f"{self.scheme}://{self.host}:{self.port}/_db/{self.database}{self.mount}"


class SessionInfo(BaseModel):
    """Session returned by /login. The server expires it after 5 minutes idle."""

    session_id: str = Field(alias="sid")
    user_id: Optional[str] = Field(default=None, alias="uid")

    model_config = {"populate_by_name": True, "coerce_numbers_to_str": True}
