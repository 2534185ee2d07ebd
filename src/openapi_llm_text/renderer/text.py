"""Assemble the condensed plain-text summary of an API document."""

from openapi_llm_text.parser.base import Document, Operation, Server
from openapi_llm_text.parser.swagger import normalize
from openapi_llm_text.renderer.context import REQUEST_BODY, RESPONSE
from openapi_llm_text.renderer.parameter import render_parameter
from openapi_llm_text.renderer.schema_body import render_schemas
from openapi_llm_text.renderer.schema_type import render_type
from openapi_llm_text.renderer.security import render_security_scheme


def render(doc: dict) -> str:
    """Convert a decoded OpenAPI/Swagger mapping into LLM-friendly text."""
    return render_document(normalize(doc))


def render_document(document: Document) -> str:
    sections: list[str] = []
    sections.extend(_format_header(document))
    sections.extend(_format_endpoints(document.operations))

    if document.schemas:
        sections.extend(["SCHEMAS:", "> * = required", ""])
        sections.extend(render_schemas(document.schemas))

    if document.security_schemes:
        sections.append("SECURITY:")
        for scheme in document.security_schemes.values():
            line = render_security_scheme(scheme)
            if line:
                sections.append(line)
        sections.append("")

    return "\n".join(sections) + "\n"


def _format_header(document: Document) -> list[str]:
    lines = [f"API: {document.title} v{document.version}"]
    if document.description:
        lines.append(f"Description: {document.description}")

    if document.servers:
        lines.append(f"\nBase URL: {document.servers[0].url}")
        if len(document.servers) > 1:
            lines.append("Additional URLs:")
            lines.extend(_format_server(s) for s in document.servers[1:])
    return lines


def _format_server(server: Server) -> str:
    if server.description:
        return f"  - {server.url} ({server.description})"
    return f"  - {server.url}"


def _format_endpoints(operations: list[Operation]) -> list[str]:
    lines = ["\nENDPOINTS:\n"]
    for operation in operations:
        lines.extend(_format_operation(operation))
    return lines


def _format_operation(operation: Operation) -> list[str]:
    lines = [f"{operation.method} {operation.path}"]

    if operation.summary:
        lines.append(f"  Summary: {operation.summary}")

    if operation.parameters:
        lines.append("  Parameters:")
        lines.extend(f"    {render_parameter(p)}" for p in operation.parameters)

    if operation.request_body is not None:
        lines.append("  Request Body:")
        for media_type, schema in operation.request_body.items():
            lines.append(f"    Content: {media_type}")
            lines.append(f"    Schema: {render_type(schema, REQUEST_BODY)}")

    if operation.responses:
        lines.append("  Responses:")
        for status, response in operation.responses.items():
            lines.append(f"    {status}: {response.description or 'No description'}")
            for media_type, schema in response.content.items():
                if media_type:
                    lines.append(f"      Content: {media_type}")
                lines.append(f"      Schema: {render_type(schema, RESPONSE)}")

    lines.append("")
    return lines
