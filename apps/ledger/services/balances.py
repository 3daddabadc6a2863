"""Running-balance adjustments shared by the invoice and payment flows."""

import logging
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import FieldDoesNotExist

from .exceptions import ReconciliationError

logger = logging.getLogger(__name__)

ZERO = Decimal('0.00')


def to_decimal(value) -> Decimal:
    """Coerce a number (or numeric string) to a two-place Decimal."""
    if value is None or value == '':
        return ZERO
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(Decimal('0.01'))


class BalanceAdjuster:
    """
    Applies balance deltas to ledger records within one unit of work.

    A record that no longer exists is not an error: the adjustment is skipped
    and a warning is collected for the caller. Rows are locked with
    ``select_for_update()`` only when ``LEDGER_LOCK_BALANCE_ROWS`` is on.

    Usage:
        adjuster = BalanceAdjuster()
        adjuster.adjust(Customer, customer_id, Decimal('50.00'))
        adjuster.warnings  # [] or [{'entity': 'Customer', ...}]
    """

    def __init__(self, lock_rows: bool = None):
        if lock_rows is None:
            lock_rows = getattr(settings, 'LEDGER_LOCK_BALANCE_ROWS', False)
        self.lock_rows = lock_rows
        self.changes = []
        self.warnings = []

    def _fetch(self, model, entity_id):
        queryset = model.objects.select_for_update() if self.lock_rows else model.objects.all()
        return queryset.filter(pk=entity_id).first()

    def warn(self, model, entity_id, message: str) -> None:
        label = model._meta.verbose_name.title()
        logger.warning("Skipped adjustment on %s %s: %s", label, entity_id, message)
        self.warnings.append({
            'entity': label,
            'entity_id': str(entity_id) if entity_id else None,
            'message': message,
        })

    def adjust(self, model, entity_id, delta, *, field: str = 'balance', floor_at_zero: bool = False):
        """
        Add ``delta`` to ``field`` of one record.

        Args:
            model: Ledger model class holding the balance
            entity_id: Primary key of the record
            delta: Signed amount to add
            field: Balance column to change (``balance`` or ``left``)
            floor_at_zero: Clamp the result at zero

        Returns:
            The new value, or None when the record is missing
        """
        try:
            model._meta.get_field(field)
        except FieldDoesNotExist:
            raise ReconciliationError(
                f"{model._meta.verbose_name.title()} has no balance field '{field}'"
            )

        if not entity_id:
            self.warn(model, entity_id, 'no reference')
            return None

        instance = self._fetch(model, entity_id)
        if instance is None:
            self.warn(model, entity_id, 'record not found')
            return None

        old = getattr(instance, field)
        new = old + to_decimal(delta)
        if floor_at_zero and new < ZERO:
            new = ZERO

        setattr(instance, field, new)
        instance.save(update_fields=[field, 'updated_at'])

        logger.info(
            "%s %s %s: %s -> %s",
            model._meta.verbose_name.title(), instance.pk, field, old, new
        )
        self.changes.append({
            'entity': model._meta.verbose_name.title(),
            'entity_id': str(instance.pk),
            'field': field,
            'old': old,
            'new': new,
        })
        return new
