"""Serializer helpers shared across apps."""

from rest_framework import serializers


class StrictFieldsMixin:
    """Reject payload keys that are not declared serializer fields.

    ``ignored_fields`` lists keys clients may echo back (ids, timestamps)
    that are silently dropped instead of rejected.
    """

    ignored_fields: frozenset[str] = frozenset()

    def to_internal_value(self, data):
        if isinstance(data, dict):
            unknown = set(data) - set(self.fields) - set(self.ignored_fields)  # type: ignore[attr-defined]
            if unknown:
                raise serializers.ValidationError({field: ["Unrecognized field."] for field in sorted(unknown)})
        return super().to_internal_value(data)  # type: ignore[misc]


__all__ = ["StrictFieldsMixin"]
