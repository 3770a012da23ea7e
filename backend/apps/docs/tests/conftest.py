import pytest
import sys
from pathlib import Path

from fastapi import FastAPI
from fastapi.testclient import TestClient

project_root = Path(__file__).parent.parent.parent.parent
sys.path.insert(0, str(project_root))

from apps.docs.router import create_swagger_page  # noqa: E402

INDEX_HTML = """<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="UTF-8">
    <title>Swagger UI</title>
    <link rel="stylesheet" type="text/css" href="./swagger-ui.css" >
  </head>
  <body>
    <div id="swagger-ui"></div>
    <script src="./swagger-ui-bundle.js"> </script>
    <script>
    window.onload = function() {
      // Begin Swagger UI call region
      const ui = SwaggerUIBundle({
        url: "https://petstore.swagger.io/v2/swagger.json",
        dom_id: '#swagger-ui',
        deepLinking: true,
        presets: [
          SwaggerUIBundle.presets.apis,
          SwaggerUIStandalonePreset
        ],
        plugins: [
          SwaggerUIBundle.plugins.DownloadUrl
        ],
        layout: "StandaloneLayout"
      })
      // End Swagger UI call region
      window.ui = ui
    }
  </script>
  </body>
</html>
"""

INITIALIZER_JS = """window.onload = function() {
  //<editor-fold desc="Changeable Configuration Block">

  // the following lines will be replaced by docker/configurator, when it runs in a docker-container
  window.ui = SwaggerUIBundle({
    url: "https://petstore.swagger.io/v2/swagger.json",
    dom_id: '#swagger-ui',
    deepLinking: true,
    presets: [
      SwaggerUIBundle.presets.apis,
      SwaggerUIStandalonePreset
    ],
    plugins: [
      SwaggerUIBundle.plugins.DownloadUrl
    ],
    layout: "StandaloneLayout"
  });

  //</editor-fold>
};
"""

ANNOTATED_API = '''"""Users API."""


def list_users():
    """
    List users.
    ---
    /users:
      get:
        summary: List users
        tags: [Users]
        responses:
          200:
            description: All users
            schema:
              type: array
              items:
                $ref: '#/definitions/User'
    """


class UserResource:
    """
    ---
    definitions:
      User:
        type: object
        properties:
          name:
            type: string
      Foo:
        type: string
    securityDefinitions:
      basicAuth:
        type: basic
    """
'''


@pytest.fixture
def ui_root(tmp_path):
    """Minimal Swagger UI bundle on disk."""
    root = tmp_path / "swagger-ui"
    root.mkdir()
    (root / "index.html").write_text(INDEX_HTML)
    (root / "swagger-initializer.js").write_text(INITIALIZER_JS)
    (root / "swagger-ui.css").write_text(".swagger-ui { color: black; }")
    (root / "notes.zzqx").write_bytes(b"\x00\x01opaque")
    return root


@pytest.fixture
def annotated_api(tmp_path):
    """Python source file carrying Swagger annotations in its docstrings."""
    api_file = tmp_path / "users_api.py"
    api_file.write_text(ANNOTATED_API)
    return api_file


@pytest.fixture
def make_client(ui_root):
    """Mount a docs page on a fresh app and return a client for it."""

    def _make(base_url="http://testserver", **overrides):
        app = FastAPI(docs_url=None, redoc_url=None)
        options = {
            "title": "Test API",
            "version": "1.0.0",
            "server": app,
            "path": "/docs",
            "ui_root": ui_root,
        }
        options.update(overrides)
        create_swagger_page(**options)
        return TestClient(app, base_url=base_url)

    return _make
