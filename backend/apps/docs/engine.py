"""Swagger document generation from source annotations."""
import ast
import glob
import json
import logging
import re
from pathlib import Path
from typing import Any

import yaml
from apispec import APISpec
from apispec.exceptions import APISpecError, DuplicateComponentNameError
from apispec.yaml_utils import load_yaml_from_docstring
from fastapi.encoders import jsonable_encoder

from apps.docs.exceptions import SwaggerPageConfigError
from apps.docs.models import SwaggerPageOptions

logger = logging.getLogger(__name__)

SWAGGER_VERSION = "2.0"

RE_LEADING_SLASHES = re.compile(r"^/+")
RE_TRAILING_SLASHES = re.compile(r"/+$")

DOCSTRING_NODES = (ast.Module, ast.ClassDef, ast.FunctionDef, ast.AsyncFunctionDef)
YAML_SUFFIXES = {".yaml", ".yml"}


def trim_trailing_slash(data: str) -> str:
    return RE_TRAILING_SLASHES.sub("", data)


def build_definition(options: SwaggerPageOptions) -> dict[str, Any]:
    """Build the spec skeleton (metadata only, no paths) handed to the scanner."""
    info = {"title": options.title, "version": options.version}
    if isinstance(options.description, str):
        info["description"] = options.description

    definition: dict[str, Any] = {"info": info}
    if isinstance(options.host, str):
        definition["host"] = trim_trailing_slash(options.host)
    if isinstance(options.route_prefix, str):
        definition["basePath"] = "/" + RE_LEADING_SLASHES.sub("", options.route_prefix)
    else:
        definition["basePath"] = "/"
    if options.schemes is not None:
        definition["schemes"] = list(options.schemes)
    definition["tags"] = [tag.model_dump() for tag in options.tags or []]
    return definition


def expand_globs(patterns: list[str]) -> list[Path]:
    """Expand glob patterns into an ordered, de-duplicated list of files."""
    files: dict[str, None] = {}
    for pattern in patterns:
        for match in sorted(glob.glob(pattern, recursive=True)):
            if Path(match).is_file():
                files.setdefault(match, None)
    return [Path(f) for f in files]


def read_annotations(file: Path) -> list[dict[str, Any]]:
    """Read every annotation block from a source or YAML/JSON file.

    Python sources contribute the YAML that follows a ``---`` line in the
    docstrings of the module, its classes and its functions. YAML and JSON
    files are a single annotation each.
    """
    try:
        text = file.read_text(encoding="utf-8")
    except OSError as e:
        raise SwaggerPageConfigError(f"Cannot read annotations from {file}: {e}") from e

    try:
        if file.suffix == ".json":
            annotations = [json.loads(text)]
        elif file.suffix in YAML_SUFFIXES:
            annotations = [yaml.safe_load(text)]
        else:
            tree = ast.parse(text, filename=str(file))
            docstrings = [
                ast.get_docstring(node) for node in ast.walk(tree) if isinstance(node, DOCSTRING_NODES)
            ]
            annotations = [load_yaml_from_docstring(doc) for doc in docstrings if doc]
    except (SyntaxError, ValueError, yaml.YAMLError) as e:
        raise SwaggerPageConfigError(f"Failed to parse annotations in {file}: {e}") from e

    annotations = [a for a in annotations if a]
    for annotation in annotations:
        if not isinstance(annotation, dict):
            raise SwaggerPageConfigError(f"Annotation in {file} is not a mapping")
    return annotations


def _register(register, name: str, *args) -> None:
    try:
        register(name, *args)
    except DuplicateComponentNameError:
        logger.warning(f"Duplicate component {name!r} ignored")


def add_annotation(spec: APISpec, annotation: dict[str, Any]) -> None:
    """Merge one annotation block into the spec."""
    for key, value in annotation.items():
        if key.startswith("/"):
            operations = dict(value or {})
            parameters = operations.pop("parameters", None)
            spec.path(path=key, operations=operations, parameters=parameters)
        elif key == "definitions":
            for name, schema in value.items():
                _register(spec.components.schema, name, schema)
        elif key == "parameters":
            for name, parameter in value.items():
                _register(spec.components.parameter, name, parameter.get("in", "query"), parameter)
        elif key == "responses":
            for name, response in value.items():
                _register(spec.components.response, name, response)
        elif key == "securityDefinitions":
            for name, scheme in value.items():
                _register(spec.components.security_scheme, name, scheme)
        elif key == "tags":
            for tag in value:
                spec.tag(tag)
        else:
            logger.debug(f"Ignoring unknown annotation key {key!r}")


def scan_annotations(spec: APISpec, apis: list[str]) -> APISpec:
    """Scan the files matched by ``apis`` and add their annotations to ``spec``."""
    files = expand_globs(apis)
    for file in files:
        for annotation in read_annotations(file):
            try:
                add_annotation(spec, annotation)
            except (APISpecError, AttributeError, TypeError) as e:
                raise SwaggerPageConfigError(f"Invalid annotation in {file}: {e}") from e
    logger.debug(f"Scanned {len(files)} files for annotations")
    return spec


def generate_spec(options: SwaggerPageOptions) -> dict[str, Any]:
    """Generate the Swagger document served by the docs page."""
    definition = build_definition(options)
    info = definition["info"]
    spec = APISpec(
        title=info["title"],
        version=info["version"],
        openapi_version=SWAGGER_VERSION,
        **{key: value for key, value in definition.items() if key != "tags"},
    )
    for tag in definition["tags"]:
        spec.tag(tag)

    document = scan_annotations(spec, options.apis or []).to_dict()
    document.setdefault("tags", [])

    # Add any external definitions provided
    definitions = document.setdefault("definitions", {})
    for name, schema in (options.definitions or {}).items():
        definitions[name] = schema

    if options.security_definitions:
        security_definitions = document.setdefault("securityDefinitions", {})
        for name, scheme in options.security_definitions.items():
            security_definitions[name] = scheme
    else:
        document.pop("securityDefinitions", None)

    # YAML scalars such as dates become JSON strings once, here
    return jsonable_encoder(document)
