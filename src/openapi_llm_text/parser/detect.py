"""Detect which OpenAPI/Swagger version a decoded document uses."""

SWAGGER_2 = "swagger2"
OPENAPI_3 = "openapi3"


def detect_version(doc: dict) -> str:
    """Return SWAGGER_2 only when `swagger` is exactly the string "2.0"."""
    if doc.get("swagger") == "2.0":
        return SWAGGER_2
    return OPENAPI_3
