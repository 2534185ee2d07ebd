"""Parameter lines for the endpoint listing."""

from openapi_llm_text.parser.base import ParameterNode
from openapi_llm_text.renderer.context import PARAMETER
from openapi_llm_text.renderer.schema_type import format_enum, render_type


def parameter_type(param: ParameterNode) -> str:
    if param.schema_ is not None:
        return render_type(param.schema_, PARAMETER)

    # Swagger 2.0 parameters declare their type directly
    if param.declared_type:
        if param.enum:
            return f"{param.declared_type} {format_enum(param.enum)}"
        return param.declared_type

    return PARAMETER.unknown


def render_parameter(param: ParameterNode) -> str:
    """Render `- name (in, type (required|optional)): description`."""
    required = "required" if param.required else "optional"
    description = param.description or "No description"
    return f"- {param.name} ({param.location}, {parameter_type(param)} ({required})): {description}"
