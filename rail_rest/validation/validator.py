"""
Input validator.

Checks request bodies against the property descriptors of a resource and
reports every problem at once.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Iterable, Optional, Union

from django.core.exceptions import NON_FIELD_ERRORS

from ..core.meta import EntityMetadata
from ..core.meta.coercion import coerce_groups
from ..core.registry import MetadataRegistry, metadata_registry
from ..core.settings import ValidationSettings
from ..exceptions import ValidationError
from .types import INVALID, INVALID_TYPE, REQUIRED, Violation, matches_type

logger = logging.getLogger(__name__)


class InputValidator:
    """
    Validate input data for a resource.

    Only fields carrying a property descriptor whose groups intersect the
    requested groups are checked; other keys in the data are tolerated.
    """

    def __init__(
        self,
        registry: Optional[MetadataRegistry] = None,
        settings: Optional[ValidationSettings] = None,
    ):
        self.registry = registry or metadata_registry
        self.settings = settings or ValidationSettings.from_settings()

    def resolve_groups(
        self, metadata: EntityMetadata, groups: Union[None, str, Iterable[str]]
    ) -> frozenset[str]:
        if groups is not None:
            return coerce_groups(groups)
        if metadata.resource is not None:
            return metadata.resource.denormalization_groups
        return coerce_groups(self.settings.default_groups)

    def validate(
        self,
        data: Any,
        resource_type: type,
        groups: Union[None, str, Iterable[str]] = None,
    ) -> list[Violation]:
        """
        Return every violation of ``data`` for ``resource_type``.

        A required field that is missing (or ``None``) yields one ``required``
        violation and is not type checked. Present values are checked
        against the declared type. Violations follow field declaration order.

        Args:
            data: The decoded request body.
            resource_type: The entity class.
            groups: Groups to validate for; defaults to the resource's
                denormalization groups.
        """
        metadata = self.registry.get(resource_type)
        if not isinstance(data, Mapping):
            return [
                Violation(
                    NON_FIELD_ERRORS,
                    f"Expected an object, got {type(data).__name__}.",
                    INVALID,
                )
            ]

        active_groups = self.resolve_groups(metadata, groups)
        violations: list[Violation] = []
        for info in metadata.fields:
            prop = info.property_config
            if prop is None or prop.groups.isdisjoint(active_groups):
                continue
            value = data.get(info.name)
            if value is None:
                if prop.required:
                    violations.append(
                        Violation(info.name, "This field is required.", REQUIRED)
                    )
                continue
            expected = info.declared_type
            if expected is not None and not matches_type(value, expected):
                violations.append(
                    Violation(
                        info.name,
                        f"This value should be of type {expected.value}.",
                        INVALID_TYPE,
                    )
                )

        if violations:
            logger.debug(
                "Input for %s rejected with %d violation(s)",
                metadata.short_name,
                len(violations),
            )
        return violations

    def ensure_valid(
        self,
        data: Any,
        resource_type: type,
        groups: Union[None, str, Iterable[str]] = None,
    ) -> None:
        """Raise ``ValidationError`` carrying all violations, if any."""
        violations = self.validate(data, resource_type, groups)
        if violations:
            raise ValidationError(
                violations, resource=self.registry.get(resource_type).short_name
            )
