"""
cloud_inventory/discovery/normalize.py - Raw provider object -> NormalizedResource

Tag extraction across the three tag models providers use, field-name based
sanitization of the raw payload, and identifier selection.

Tag models:
    PAIRS             [{"Key": "env", "Value": "prod"}, ...]
    MAPPING           {"env": "prod"}
    FREEFORM_DEFINED  freeform {"env": "prod"} + defined {"ops": {"team": "core"}}
                      -> {"env": "prod", "ops.team": "core"}

A missing tag container always yields ``{}``.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any

from ..config import REDACTION_MARKER
from ..types import NormalizedResource

logger = logging.getLogger(__name__)

Tags = dict[str, str | None]


class TagModel(Enum):
    PAIRS = "pairs"
    MAPPING = "mapping"
    FREEFORM_DEFINED = "freeform_defined"


def _tag_value(value: Any) -> str | None:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def tags_from_pairs(
    entries: Iterable[Mapping[str, Any]] | None,
    key_field: str = "Key",
    value_field: str = "Value",
) -> Tags:
    """List of key/value entries -> mapping. Entries without a key are skipped."""
    tags: Tags = {}
    for entry in entries or []:
        if not isinstance(entry, Mapping):
            continue
        key = entry.get(key_field)
        if not key:
            continue
        tags[str(key)] = _tag_value(entry.get(value_field))
    return tags


def tags_from_mapping(mapping: Mapping[str, Any] | None) -> Tags:
    if not isinstance(mapping, Mapping):
        return {}
    return {str(k): _tag_value(v) for k, v in mapping.items() if k}


def tags_from_freeform_defined(
    freeform: Mapping[str, Any] | None,
    defined: Mapping[str, Mapping[str, Any]] | None,
) -> Tags:
    """Freeform tags as-is, defined tags flattened to ``namespace.key``"""
    tags = tags_from_mapping(freeform)
    if isinstance(defined, Mapping):
        for namespace, values in defined.items():
            if not isinstance(values, Mapping):
                continue
            for key, value in values.items():
                tags[f"{namespace}.{key}"] = _tag_value(value)
    return tags


def extract_tags(model: TagModel, *containers: Any, **options: Any) -> Tags:
    """Dispatch on the provider's tag model

    Examples:
        extract_tags(TagModel.PAIRS, instance.get("Tags"))
        extract_tags(TagModel.PAIRS, kms_tags, key_field="TagKey", value_field="TagValue")
        extract_tags(TagModel.FREEFORM_DEFINED, item.get("freeform_tags"), item.get("defined_tags"))
    """
    if model is TagModel.PAIRS:
        return tags_from_pairs(containers[0] if containers else None, **options)
    if model is TagModel.MAPPING:
        return tags_from_mapping(containers[0] if containers else None)
    freeform = containers[0] if containers else None
    defined = containers[1] if len(containers) > 1 else None
    return tags_from_freeform_defined(freeform, defined)


def sanitize_configuration(raw: Any, sensitive_fields: Iterable[str]) -> dict[str, Any]:
    """Deep copy of ``raw`` with top-level sensitive fields redacted

    Redaction is by field name only. The input object is never modified.
    A non-mapping payload is wrapped as ``{"value": payload}``.
    """
    if raw is None:
        return {}
    payload = copy.deepcopy(dict(raw)) if isinstance(raw, Mapping) else {"value": copy.deepcopy(raw)}
    for name in sensitive_fields:
        if name in payload:
            payload[name] = REDACTION_MARKER
    return payload


def pick_first(raw: Mapping[str, Any] | None, *keys: str) -> str | None:
    """First non-empty value among ``keys``, most durable identifier first"""
    if not raw:
        return None
    for key in keys:
        value = raw.get(key)
        if value:
            return str(value)
    return None


def build_resource(
    *,
    provider: str,
    service: str,
    resource_type: str,
    raw: Any,
    resource_id: str | None,
    sensitive_fields: Iterable[str],
    account_id: str | None = None,
    region: str | None = None,
    name: str | None = None,
    tags: Tags | None = None,
    metadata: Mapping[str, Any] | None = None,
) -> NormalizedResource | None:
    """Single constructor used by every collector

    Sanitization is always applied. Returns None when no identifier was
    found; callers skip such items.

    Args:
        tags: extracted tags, None when the resource type has no tagging
    """
    if not resource_id:
        logger.debug(f"[{provider}:{service}] {resource_type} without identifier skipped")
        return None

    return NormalizedResource(
        provider=provider,
        service=service,
        resource_type=resource_type,
        resource_id=str(resource_id),
        account_id=account_id,
        region=region,
        name=name or None,
        tags=dict(tags) if tags is not None else None,
        metadata=dict(metadata or {}),
        configuration=sanitize_configuration(raw, sensitive_fields),
    )
