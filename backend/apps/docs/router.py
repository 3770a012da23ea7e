"""Swagger docs page router."""
import json
import logging
import mimetypes
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from fastapi import APIRouter, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, RedirectResponse, Response
from starlette.concurrency import run_in_threadpool
from swagger_ui_bundle import swagger_ui_path

from apps.docs.engine import generate_spec, trim_trailing_slash
from apps.docs.exceptions import SwaggerPageConfigError
from apps.docs.models import SwaggerPageOptions

logger = logging.getLogger(__name__)

DEFAULT_SPEC_URL = 'url: "https://petstore.swagger.io/v2/swagger.json"'
LAYOUT_LINE = 'layout: "StandaloneLayout"'
REQUIRED_FIELDS = ("title", "version", "server", "path")
# Newer bundles moved the SwaggerUIBundle config out of index.html
PATCHED_FILES = frozenset({"index.html", "swagger-initializer.js"})
SECURE_SCHEMES = frozenset({"https", "wss"})


def add_swagger_ui_config(content: str, name: str, value: Any) -> str:
    """Inject ``name: <json value>`` right after the layout line of the UI config."""
    serialized = json.dumps(value, separators=(",", ":"))
    return content.replace(LAYOUT_LINE, f"{LAYOUT_LINE},\n{' ' * 8}{name}: {serialized}")


def render_ui_config(content: str, json_url: str, options: SwaggerPageOptions) -> str:
    content = content.replace(DEFAULT_SPEC_URL, f'url: "{json_url}"')
    if options.validator_configured:
        content = add_swagger_ui_config(content, "validatorUrl", options.validator_url)
    if options.supported_submit_methods is not None:
        content = add_swagger_ui_config(content, "supportedSubmitMethods", options.supported_submit_methods)
    return content


def _validate(options: SwaggerPageOptions | Mapping[str, Any]) -> None:
    for name in REQUIRED_FIELDS:
        value = options.get(name) if isinstance(options, Mapping) else getattr(options, name)
        if value in (None, ""):
            raise SwaggerPageConfigError(f"{name} is required")


def _check_route_clash(server: FastAPI | APIRouter, paths: list[str]) -> None:
    """Refuse to mount over GET routes the server already answers."""
    for route in server.routes:
        if getattr(route, "path", None) in paths and "GET" in (getattr(route, "methods", None) or ()):
            raise SwaggerPageConfigError(f"GET {route.path} is already registered on the server")


def _read_file(root: Path, file: str) -> bytes:
    target = (root / file).resolve()
    if not target.is_relative_to(root.resolve()):
        raise FileNotFoundError(file)
    return target.read_bytes()


def create_swagger_page(options: SwaggerPageOptions | Mapping[str, Any] | None = None, **kwargs: Any) -> None:
    """Mount the Swagger UI and the generated swagger.json onto ``options.server``.

    Registers, in order:

    - ``GET {path}/swagger.json``: the generated document
    - ``GET {path}``: 302 redirect to ``{path}/index.html``
    - ``GET {path}/*``: files of the UI bundle, with ``index.html`` patched
      to point at this server's swagger.json

    Raises SwaggerPageConfigError before registering anything if a required
    option is missing, one of these routes is already taken, or the
    annotations cannot be read.
    """
    if not isinstance(options, SwaggerPageOptions):
        raw = {**(options or {}), **kwargs}
        _validate(raw)
        options = SwaggerPageOptions.model_validate(raw)
    _validate(options)

    public_path = trim_trailing_slash(options.path)
    json_path = f"{public_path}/swagger.json"
    index_path = public_path or "/"
    files_path = f"{public_path}/{{file_path:path}}"
    server = options.server
    _check_route_clash(server, [json_path, index_path, files_path])

    swagger_spec = generate_spec(options)
    ui_root = Path(options.ui_root or swagger_ui_path)

    async def swagger_json() -> JSONResponse:
        return JSONResponse(content=swagger_spec)

    async def redirect_to_index() -> RedirectResponse:
        return RedirectResponse(url=f"{public_path}/index.html", status_code=302)

    async def ui_file(file_path: str, request: Request) -> Response:
        try:
            content = await run_in_threadpool(_read_file, ui_root, file_path)
        except OSError:
            logger.warning(f"Swagger UI file not found: {file_path}")
            raise HTTPException(status_code=404, detail=f"File {file_path} does not exist")

        if file_path in PATCHED_FILES:
            is_secure = options.force_secure or request.url.scheme in SECURE_SCHEMES
            host = request.headers.get("host", "")
            json_url = f"{'https' if is_secure else 'http'}://{host}{public_path}/swagger.json"
            content = render_ui_config(content.decode("utf-8"), json_url, options).encode("utf-8")

        media_type, _ = mimetypes.guess_type(file_path)
        return Response(content=content, media_type=media_type)

    server.add_api_route(json_path, swagger_json, methods=["GET"], include_in_schema=False)
    server.add_api_route(index_path, redirect_to_index, methods=["GET"], include_in_schema=False)
    server.add_api_route(files_path, ui_file, methods=["GET"], include_in_schema=False)

    logger.info(f"Swagger page mounted at {index_path} (ui: {ui_root})")
