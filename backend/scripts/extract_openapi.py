"""
Write the swagger.json the docs page would serve, without starting the server.

Run with: uv run python -m scripts.extract_openapi --output docs/swagger.json
"""
import argparse
import json
import sys
from pathlib import Path

# Make main importable when run from the backend directory
sys.path.append(".")

from apps.docs.engine import generate_spec
from apps.docs.exceptions import SwaggerPageConfigError
from main import docs_options


def main():
    parser = argparse.ArgumentParser(description="Export the generated Swagger document")
    parser.add_argument("--output", "-o", type=Path, default=Path("swagger.json"), help="File to write")
    parser.add_argument("--indent", type=int, default=2, help="JSON indentation")
    args = parser.parse_args()

    try:
        document = generate_spec(docs_options)
    except SwaggerPageConfigError as e:
        parser.exit(1, f"Cannot generate swagger.json: {e}\n")

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(json.dumps(document, indent=args.indent))
    print(f"Wrote {len(document.get('paths', {}))} paths to {args.output.absolute()}")


if __name__ == "__main__":
    main()
