"""
Helpers for working with store records generically across related models.
"""

from typing import Dict, Tuple

from django.db import models


def has_date_window(model) -> bool:
    """Whether the model carries a ``from_date`` field."""
    return any(field.name == 'from_date' for field in model._meta.concrete_fields)


def natural_key_fields(model) -> Tuple[str, ...]:
    """
    The fields identifying a record of ``model``: its first ``unique_together``
    set, or the primary key when it has none.
    """
    unique_together = model._meta.unique_together
    if unique_together:
        return tuple(unique_together[0])
    return (model._meta.pk.name,)


def natural_key(record, exclude=()) -> Dict[str, object]:
    """
    Lookup kwargs for the record's natural key, using ``<fk>_id`` attnames for
    foreign keys so no related rows are fetched.
    """
    lookup = {}
    for name in natural_key_fields(type(record)):
        if name in exclude:
            continue
        field = record._meta.get_field(name)
        lookup[field.attname] = getattr(record, field.attname)
    return lookup


def copy_record(record: models.Model, **overrides) -> models.Model:
    """
    Return a new, unsaved instance with the concrete field values of
    ``record`` and ``overrides`` applied on top. The source is left untouched.

    Overrides may name a foreign key either by field (``product=obj``) or by
    attname (``product_id=1``).
    """
    model = type(record)
    values = {}
    for field in model._meta.concrete_fields:
        if field.primary_key:
            continue
        values[field.attname] = getattr(record, field.attname)

    for key, value in overrides.items():
        field = _get_field_by_any_name(model, key)
        if field.is_relation and key == field.name:
            values.pop(field.attname, None)
            values[field.name] = value
        else:
            values[field.attname] = value

    return model(**values)


def _get_field_by_any_name(model, key):
    for field in model._meta.concrete_fields:
        if key in (field.name, field.attname):
            return field
    raise ValueError(f"{model.__name__} has no field {key!r}")
