"""Pydantic models for the Swagger docs page."""
from pathlib import Path
from typing import Any, Literal

from fastapi import APIRouter, FastAPI
from pydantic import BaseModel, ConfigDict, Field

SwaggerScheme = Literal["http", "https", "ws", "wss"]
SwaggerSubmitMethod = Literal["get", "put", "post", "delete", "options", "head", "patch", "trace"]


class SwaggerTag(BaseModel):
    name: str
    description: str


class SwaggerPageOptions(BaseModel):
    """Options consumed once when the docs page is mounted.

    ``title``, ``version``, ``server`` and ``path`` are required, but they are
    checked by the mounter rather than by pydantic so that the missing field
    is reported in a fixed order.

    ``validator_url`` is tri-state: leave it out to keep the UI default,
    pass ``None`` to disable validation, or pass a URL string.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, populate_by_name=True)

    title: str | None = None
    version: str | None = None
    server: FastAPI | APIRouter | None = None
    path: str | None = None
    description: str | None = None
    host: str | None = None
    tags: list[SwaggerTag] | None = None
    schemes: list[SwaggerScheme] | None = None
    apis: list[str] | None = Field(default=None, description="Glob patterns of annotated source files")
    definitions: dict[str, Any] | None = None
    route_prefix: str | None = Field(default=None, alias="routePrefix")
    force_secure: bool = Field(default=False, alias="forceSecure")
    validator_url: str | None = Field(default=None, alias="validatorUrl")
    supported_submit_methods: list[SwaggerSubmitMethod] | None = Field(
        default=None, alias="supportedSubmitMethods"
    )
    security_definitions: dict[str, Any] | None = Field(default=None, alias="securityDefinitions")
    ui_root: Path | None = Field(default=None, alias="uiRoot")

    @property
    def validator_configured(self) -> bool:
        """True when ``validator_url`` was supplied, even as ``None``."""
        return "validator_url" in self.model_fields_set
