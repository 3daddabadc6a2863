"""
Reconciliation engine.

Wraps the invoice composer so that customer and car balances follow every
invoice create, edit and delete. Each flow is one unit of work: the invoice
write and all balance writes commit or roll back together. A referenced
record that no longer exists is skipped and reported back as a warning.
"""

import logging
from typing import List, Tuple
from uuid import UUID

from django.db import transaction

from apps.invoices.models import Invoice
from apps.ledger.models import Car, Customer
from apps.ledger.services import BalanceAdjuster, get_entity

from .invoice_composer import create_invoice, delete_invoice, update_invoice

logger = logging.getLogger(__name__)


@transaction.atomic
def create_invoice_flow(
    *,
    invoice_no: str,
    car_id: UUID,
    invoice_date,
    lines: list
) -> Tuple[Invoice, List[dict]]:
    """
    Create an invoice and distribute its amounts.

    The car's ``balance`` grows by the invoice total and its ``left`` by the
    unpaid remainder (when positive). Each credit line adds its total to the
    line's customer.

    Returns:
        Tuple of (created invoice, list of skipped-adjustment warnings)
    """
    invoice = create_invoice(
        invoice_no=invoice_no,
        car_id=car_id,
        invoice_date=invoice_date,
        lines=lines,
    )

    adjuster = BalanceAdjuster()
    adjuster.adjust(Car, invoice.car_id, invoice.total)
    if invoice.total_left > 0:
        adjuster.adjust(Car, invoice.car_id, invoice.total_left, field='left')

    for line in invoice.lines.all():
        if line.is_credit:
            adjuster.adjust(Customer, line.customer_id, line.total)

    return invoice, adjuster.warnings


@transaction.atomic
def delete_invoice_flow(*, invoice_id: UUID) -> List[dict]:
    """
    Reverse an invoice's amounts, then delete it.

    Every reversal is floored at zero: credit customers lose the line total,
    the car loses the invoice total from ``balance`` and the unpaid remainder
    from ``left``.

    Returns:
        List of skipped-adjustment warnings

    Raises:
        EntityNotFoundError: If the invoice does not exist
    """
    invoice = get_entity(Invoice, invoice_id)
    adjuster = BalanceAdjuster()

    for line in invoice.lines.all():
        if line.is_credit:
            adjuster.adjust(Customer, line.customer_id, -line.total, floor_at_zero=True)

    # left is rewritten even for a zero remainder, clamped at zero
    if adjuster.adjust(Car, invoice.car_id, -invoice.total, floor_at_zero=True) is not None:
        adjuster.adjust(Car, invoice.car_id, -invoice.total_left, field='left', floor_at_zero=True)

    delete_invoice(invoice_id=invoice.pk)
    return adjuster.warnings


@transaction.atomic
def edit_invoice_flow(*, invoice_id: UUID, fields: dict) -> Tuple[Invoice, List[dict]]:
    """
    Update an invoice and move customer balances from the old lines to the new.

    Every original credit line is reversed (not floored) before any new
    credit line is applied, so a customer that appears on both sides ends up
    with the net change. Car balances are not touched on edit.

    Returns:
        Tuple of (updated invoice, list of skipped-adjustment warnings)

    Raises:
        EntityNotFoundError: If the invoice does not exist
    """
    invoice = get_entity(Invoice, invoice_id)
    original_credit = [
        (line.customer_id, line.total)
        for line in invoice.lines.all()
        if line.is_credit
    ]

    invoice = update_invoice(invoice_id=invoice.pk, fields=fields)

    adjuster = BalanceAdjuster()
    if 'lines' in fields:
        for customer_id, total in original_credit:
            adjuster.adjust(Customer, customer_id, -total)
        for line in invoice.lines.all():
            if line.is_credit:
                adjuster.adjust(Customer, line.customer_id, line.total)

    logger.info(
        "Reconciled edit of invoice %s: %d balance change(s), %d warning(s)",
        invoice.invoice_no, len(adjuster.changes), len(adjuster.warnings)
    )
    return invoice, adjuster.warnings
