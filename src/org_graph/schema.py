"""JSON Schema export for the organization data model."""

import json
from functools import cache
from typing import Any

from pydantic import TypeAdapter

from org_graph.models import Organization


@cache
def organization_adapter() -> TypeAdapter[Organization]:
    return TypeAdapter(Organization)


def organization_schema() -> dict[str, Any]:
    """Describe the Organization model as a JSON Schema document.

    Failure to build the schema is a programming error in the models and is
    left to propagate.
    """
    schema = organization_adapter().json_schema()
    schema.setdefault("$schema", "https://json-schema.org/draft/2020-12/schema")
    return schema


def schema_json(indent: int | None = 2) -> str:
    """Return the Organization JSON Schema as text."""
    return json.dumps(organization_schema(), indent=indent)
