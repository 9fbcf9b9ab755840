"""OpenAPI customization utilities.

Enriches the generated schema with:
- tag descriptions for each router
- the shared 429 rate-limit response on every rate-limited operation

This keeps documentation concerns decoupled from the app factory.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import FastAPI

TAGS_METADATA = [
    {"name": "Market", "description": "Market quotes, trending assets and price history."},
    {"name": "Portfolio", "description": "Mock portfolio holdings and totals."},
    {"name": "Alerts", "description": "Mock price alerts."},
    {"name": "News", "description": "Static crypto headlines."},
    {"name": "Frame", "description": "Social frame metadata and button navigation."},
    {"name": "Health", "description": "Liveness checks."},
]

# Tags whose operations are exempt from the client rate limiter
_UNLIMITED_TAGS = {"Frame", "Health"}

RATE_LIMIT_RESPONSE = {
    "description": "Rate limit exceeded for this client",
    "content": {
        "application/json": {
            "example": {
                "data": None,
                "success": False,
                "message": "Rate limit exceeded",
                "error": "Too many requests",
                "timestamp": "2024-01-01T00:00:00Z",
            }
        }
    },
}


def apply_openapi_customizations(app: FastAPI) -> None:
    """Patch FastAPI's OpenAPI generation to add tags and 429 responses."""

    original_openapi = app.openapi

    def custom_openapi() -> Dict[str, Any]:
        schema = original_openapi()

        tags = schema.setdefault("tags", [])
        existing_tag_names = {t.get("name") for t in tags}
        for tag in TAGS_METADATA:
            if tag["name"] not in existing_tag_names:
                tags.append(tag)

        for methods in schema.get("paths", {}).values():
            for operation in methods.values():
                if not isinstance(operation, dict):
                    continue
                if _UNLIMITED_TAGS.intersection(operation.get("tags", [])):
                    continue
                operation.setdefault("responses", {}).setdefault("429", RATE_LIMIT_RESPONSE)

        return schema

    app.openapi = custom_openapi  # type: ignore[assignment]
