"""OpenAPI metadata and customization utilities.

Adds tag descriptions and documents the plain ``{"error": "..."}`` body
returned by every error status of ``GET /search``.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import FastAPI

_ERROR_SCHEMA = {
    "type": "object",
    "properties": {"error": {"type": "string"}},
    "required": ["error"],
}

_SEARCH_ERRORS = {
    "400": "Missing or blank q",
    "429": "Too many requests from this client (duckduckgo only)",
    "500": "Server not configured (google only)",
    "502": "Upstream fetch failed",
}


def apply_openapi_customizations(app: FastAPI) -> None:
    """Patch FastAPI's OpenAPI generation with tags and error responses."""

    original_openapi = app.openapi

    def custom_openapi() -> Dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema
        schema = original_openapi()

        components = schema.setdefault("components", {})
        components.setdefault("schemas", {})["ErrorResponse"] = _ERROR_SCHEMA

        tags = schema.setdefault("tags", [])
        existing_tag_names = {t.get("name") for t in tags}
        for tag in (
            {"name": "Search", "description": "Normalized upstream search results."},
            {"name": "Health", "description": "Liveness checks."},
        ):
            if tag["name"] not in existing_tag_names:
                tags.append(tag)

        search_get = schema.get("paths", {}).get("/search", {}).get("get")
        if isinstance(search_get, dict):
            responses = search_get.setdefault("responses", {})
            # FastAPI's default 422 never occurs: q is validated by hand
            responses.pop("422", None)
            for status_code, description in _SEARCH_ERRORS.items():
                responses[status_code] = {
                    "description": description,
                    "content": {
                        "application/json": {
                            "schema": {"$ref": "#/components/schemas/ErrorResponse"}
                        }
                    },
                }

        app.openapi_schema = schema
        return schema

    app.openapi = custom_openapi  # type: ignore[assignment]
