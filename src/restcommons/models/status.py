"""Service status model for restcommons API."""

from typing import Self

from pydantic import BaseModel, ConfigDict, Field


class StatusInfo(BaseModel):
    """Version and readiness of a REST web service.

    The model only stores readiness. Whoever owns the service lifecycle
    flips ``ready`` on at the end of startup and off again during shutdown.
    """

    model_config = ConfigDict(validate_assignment=True)

    version: str | None = Field(default=None, description="Version of the running service")
    ready: bool = Field(default=False, description="Whether the service accepts traffic")

    def get_version(self) -> str | None:
        return self.version

    def set_version(self, version: str | None) -> Self:
        self.version = version
        return self

    def is_ready(self) -> bool:
        return self.ready

    def set_ready(self, ready: bool) -> Self:
        self.ready = ready
        return self

    def __str__(self) -> str:
        version = "null" if self.version is None else self.version
        ready = "true" if self.ready else "false"
        return f"[StatusInfo version={version}, ready={ready}]"
