"""JSON-schema validation for ignored-domain mutation payloads."""

import jsonschema

# After trimming, a pattern must be non-blank and fit on one uncommented line
# of the ignore file.
STORABLE_PATTERN = r"^\s*[^#\r\n\s](?:[^#\r\n]*[^#\r\n\s])?\s*$"

DOMAIN_PAYLOAD_SCHEMA = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {
        "domain": {"type": "string", "pattern": STORABLE_PATTERN},
    },
    "required": ["domain"],
}


def _describe(error: jsonschema.ValidationError) -> str:
    field = ".".join(str(p) for p in error.absolute_path) or "body"
    if error.validator == "pattern":
        return f"{field} must be a non-blank pattern without '#' or line breaks"
    return f"{field}: {error.message}"


class DomainPayloadValidator:
    """Checks `{"domain": "<pattern>"}` bodies for POST and DELETE /ignored-domains."""

    def __init__(self, schema=None):
        self._validator = jsonschema.Draft202012Validator(schema or DOMAIN_PAYLOAD_SCHEMA)

    def validate(self, payload) -> tuple[bool, list[str]]:
        errors = sorted(self._validator.iter_errors(payload), key=lambda e: list(e.absolute_path))
        return not errors, [_describe(e) for e in errors]
