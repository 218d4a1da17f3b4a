"""Reading and writing organizations as JSON or YAML."""

import json
from pathlib import Path
from typing import Any, Literal

import structlog
import yaml
from pydantic import ValidationError

from org_graph.errors import OrganizationError
from org_graph.models import Organization
from org_graph.schema import organization_adapter

logger = structlog.get_logger()

Format = Literal["json", "yaml"]


def organization_to_dict(org: Organization) -> dict[str, Any]:
    """Convert an organization to plain data, omitting unset display fields."""
    return organization_adapter().dump_python(org, mode="json", exclude_none=True)


def organization_from_dict(data: dict[str, Any]) -> Organization:
    """Build an organization from plain data.

    IDs share one namespace across all entity collections; an ID used by two
    collections is rejected.

    Args:
        data: Mapping in the shape produced by organization_to_dict

    Returns:
        Organization instance

    Raises:
        OrganizationError: If the data does not match the model or IDs collide
    """
    try:
        org = organization_adapter().validate_python(data)
    except ValidationError as e:
        raise OrganizationError(f"Invalid organization data: {e}") from e

    collisions = org.find_id_collisions()
    if collisions:
        details = ", ".join(
            f"{entity_id} ({'/'.join(t.value for t in types)})" for entity_id, types in sorted(collisions.items())
        )
        raise OrganizationError(f"Entity IDs must be unique across collections: {details}")

    logger.debug(
        "Organization loaded",
        name=org.name,
        entities=len(org.entity_ids()),
        relationships=len(org.relationships),
    )
    return org


def format_for_path(path: Path) -> Format:
    return "yaml" if path.suffix.lower() in (".yaml", ".yml") else "json"


def loads_organization(text: str, fmt: Format = "json") -> Organization:
    """Parse an organization from JSON or YAML text."""
    try:
        data = yaml.safe_load(text) if fmt == "yaml" else json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise OrganizationError(f"Failed to parse organization {fmt}: {e}") from e

    if not isinstance(data, dict):
        raise OrganizationError("Organization data must be a mapping")
    return organization_from_dict(data)


def dumps_organization(org: Organization, fmt: Format = "json") -> str:
    """Serialize an organization to JSON or YAML text."""
    data = organization_to_dict(org)
    if fmt == "yaml":
        return yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
    return json.dumps(data, indent=2)


def load_organization(path: str | Path) -> Organization:
    """Load an organization from a .json, .yaml or .yml file."""
    path = Path(path)
    try:
        text = path.read_text()
    except OSError as e:
        logger.error("Failed to read organization", path=str(path), error=str(e))
        raise OrganizationError(f"Failed to read organization from {path}: {e}") from e
    return loads_organization(text, format_for_path(path))


def dump_organization(org: Organization, path: str | Path) -> None:
    """Write an organization to a file, choosing the format from its suffix."""
    path = Path(path)
    try:
        path.write_text(dumps_organization(org, format_for_path(path)))
    except OSError as e:
        logger.error("Failed to write organization", path=str(path), error=str(e))
        raise OrganizationError(f"Failed to write organization to {path}: {e}") from e
    logger.debug("Organization written", path=str(path))
