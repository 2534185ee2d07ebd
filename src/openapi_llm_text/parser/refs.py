"""Local, single-hop `$ref` resolution."""

import logging

logger = logging.getLogger(__name__)


def ref_name(ref: str) -> str:
    """Return the trailing path segment of a reference string."""
    return ref.split("/")[-1]


class ReferenceResolver:
    """Looks up referenced parameters, request bodies and responses.

    Each collection is the raw mapping from the version-appropriate
    location in the source document. Lookups return the mapping stored in
    the document itself, never a copy. A target that is itself a `$ref` is
    treated as unresolved: no alias chains are followed.
    """

    def __init__(
        self,
        parameters: dict | None = None,
        request_bodies: dict | None = None,
        responses: dict | None = None,
    ):
        self.parameters = parameters or {}
        self.request_bodies = request_bodies or {}
        self.responses = responses or {}

    def parameter(self, node: dict) -> dict | None:
        return self._resolve(node, self.parameters, "parameter")

    def request_body(self, node: dict) -> dict | None:
        return self._resolve(node, self.request_bodies, "request body")

    def response(self, node: dict) -> dict | None:
        return self._resolve(node, self.responses, "response")

    def _resolve(self, node, collection: dict, label: str) -> dict | None:
        if not isinstance(node, dict):
            return None
        if "$ref" not in node:
            return node

        ref = str(node["$ref"])
        target = collection.get(ref_name(ref))
        if not isinstance(target, dict) or "$ref" in target:
            logger.debug("Unresolved %s reference %s", label, ref)
            return None
        return target
