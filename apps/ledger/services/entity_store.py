"""Generic CRUD over ledger records."""

import logging
from uuid import UUID

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, models, transaction

from .exceptions import DuplicateKeyError, EntityNotFoundError, LedgerValidationError

logger = logging.getLogger(__name__)


def _label(model) -> str:
    return model._meta.verbose_name.title()


def _check_fields(model, fields: dict) -> None:
    concrete = {f.attname for f in model._meta.concrete_fields} | {f.name for f in model._meta.concrete_fields}
    unknown = sorted(set(fields) - concrete)
    if unknown:
        raise LedgerValidationError(
            f"Unknown field(s) for {_label(model)}: {', '.join(unknown)}"
        )


def create_entity(model, **fields) -> models.Model:
    """
    Insert a new record.

    Args:
        model: Ledger model class
        **fields: Field values for the new record

    Returns:
        Created instance

    Raises:
        LedgerValidationError: If a field name is not part of the model
        DuplicateKeyError: If a unique key is already taken
    """
    _check_fields(model, fields)
    try:
        # Savepoint keeps an enclosing transaction usable after the clash
        with transaction.atomic():
            instance = model.objects.create(**fields)
    except IntegrityError as e:
        raise DuplicateKeyError(f"{_label(model)} already exists: {e}") from e

    logger.info("Created %s %s", _label(model), instance.pk)
    return instance


def get_entity(model, entity_id: UUID, *, for_update: bool = False) -> models.Model:
    """
    Fetch one record by id.

    Raises:
        EntityNotFoundError: If no record has this id
    """
    queryset = model.objects.select_for_update() if for_update else model.objects.all()
    try:
        return queryset.get(pk=entity_id)
    except (model.DoesNotExist, DjangoValidationError, ValueError):
        raise EntityNotFoundError(f"{_label(model)} not found: {entity_id}")


def update_entity(model, entity_id: UUID, fields: dict) -> models.Model:
    """
    Merge ``fields`` into an existing record and stamp ``updated_at``.

    Raises:
        EntityNotFoundError: If no record has this id
        LedgerValidationError: If a field name is not part of the model
        DuplicateKeyError: If the update collides with a unique key
    """
    _check_fields(model, fields)
    instance = get_entity(model, entity_id)
    for name, value in fields.items():
        setattr(instance, name, value)

    try:
        with transaction.atomic():
            instance.save()
    except IntegrityError as e:
        raise DuplicateKeyError(f"{_label(model)} already exists: {e}") from e

    logger.info("Updated %s %s (%s)", _label(model), instance.pk, ', '.join(sorted(fields)))
    return instance


def delete_entity(model, entity_id: UUID) -> None:
    """
    Remove a record. Invoices and payments pointing at it are left untouched.

    Raises:
        EntityNotFoundError: If no record has this id
    """
    instance = get_entity(model, entity_id)
    instance.delete()
    logger.info("Deleted %s %s", _label(model), entity_id)


def list_entities(model, filters: dict = None, ordering=None) -> models.QuerySet:
    """Return records matching ``filters``, newest first unless ``ordering`` says otherwise."""
    queryset = model.objects.filter(**(filters or {}))
    return queryset.order_by(*(ordering or ['-created_at']))


def display_name(model, entity_id) -> str:
    """Display name of a record, or the model's "Unknown ..." label when it is gone."""
    if not entity_id:
        return model.unknown_label
    try:
        instance = model.objects.get(pk=entity_id)
    except (model.DoesNotExist, DjangoValidationError, ValueError):
        return model.unknown_label
    return str(instance)
