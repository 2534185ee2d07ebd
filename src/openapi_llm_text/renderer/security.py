"""Security scheme lines."""

from openapi_llm_text.parser.base import SecurityScheme


def render_security_scheme(scheme: SecurityScheme) -> str | None:
    """Return the line for one scheme, or None for unrecognized types."""
    if scheme.type == "oauth2":
        return "- OAuth2 authentication"
    if scheme.type == "apiKey":
        return f"- API Key authentication ({scheme.location}: {scheme.name})"
    if scheme.type == "http":
        return f"- HTTP {scheme.scheme or 'unknown'} authentication"
    if scheme.type == "openIdConnect":
        return "- OpenID Connect authentication"
    if scheme.type == "basic":
        # Swagger 2.0
        return "- HTTP basic authentication"
    return None
