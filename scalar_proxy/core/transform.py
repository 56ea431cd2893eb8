"""Request body serialization for upstream requests."""

import json
from typing import Any

BODYLESS_METHODS = frozenset({"GET", "HEAD"})


class RequestTransformer:
    """Turn an inbound body into the payload sent upstream."""

    def encode_body(self, method: str, body: Any) -> str | None:
        """Return the outbound payload, or None when no body is sent.

        Text bodies are forwarded unchanged; structured bodies are serialized
        as JSON. Binary uploads are not supported.
        """
        if method.upper() in BODYLESS_METHODS:
            return None
        if body is None or body == "":
            return None
        if isinstance(body, str):
            return body
        return json.dumps(body)

    @staticmethod
    def is_structured(body: Any) -> bool:
        return body is not None and not isinstance(body, str)
