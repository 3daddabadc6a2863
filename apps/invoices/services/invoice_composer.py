"""
Invoice composer service.

Persists invoices and their lines. Totals are always the sums of the line
values as stored; balances are not touched here (see reconciliation).
"""

import logging
import re
from decimal import Decimal
from typing import List, Tuple
from uuid import UUID

from django.conf import settings
from django.db import IntegrityError, transaction

from apps.invoices.models import Invoice, InvoiceLine, InvoiceStatus, PaymentMethod
from apps.ledger.models import Customer, Item
from apps.ledger.services import (
    DuplicateKeyError,
    LedgerValidationError,
    display_name,
    get_entity,
    to_decimal,
)

logger = logging.getLogger(__name__)

INVOICE_NO_PATTERN = re.compile(r'^INV-(\d+)$')

LINE_FIELDS = (
    'item_id',
    'item_name',
    'customer_id',
    'customer_name',
    'description',
    'quantity',
    'price',
    'total',
    'left_amount',
    'payment_method',
)
MONEY_FIELDS = ('quantity', 'price', 'total', 'left_amount')
UPDATABLE_FIELDS = ('invoice_no', 'car_id', 'invoice_date', 'status')

# Accept relation names as well as their id columns
FIELD_ALIASES = {
    'item': 'item_id',
    'customer': 'customer_id',
    'car': 'car_id',
}


def line_to_dict(line: InvoiceLine) -> dict:
    """Plain representation of a stored line, as accepted by the composer."""
    return {name: getattr(line, name) for name in LINE_FIELDS}


def _validate_line_count(lines) -> None:
    if not lines:
        raise LedgerValidationError("An invoice needs at least one line")
    max_lines = getattr(settings, 'INVOICE_MAX_LINES', None)
    if max_lines and len(lines) > max_lines:
        raise LedgerValidationError(
            f"An invoice can have at most {max_lines} lines, got {len(lines)}"
        )


def _build_lines(lines) -> List[InvoiceLine]:
    """Unsaved InvoiceLine objects for the submitted line payloads, numbered from 1."""
    built = []
    for position, data in enumerate(lines, start=1):
        data = {FIELD_ALIASES.get(k, k): v for k, v in data.items()}
        item_id = data.get('item_id')
        if not item_id:
            raise LedgerValidationError(f"Line {position}: item is required")

        customer_id = data.get('customer_id') or None
        quantity = to_decimal(data.get('quantity', Decimal('1.00')))
        price = to_decimal(data.get('price'))

        # Client totals are trusted; only a missing total is computed
        total = data.get('total')
        total = to_decimal(quantity * price) if total is None else to_decimal(total)

        payment_method = data.get('payment_method') or PaymentMethod.CASH
        if payment_method not in PaymentMethod.values:
            raise LedgerValidationError(f"Line {position}: unknown payment method '{payment_method}'")

        built.append(InvoiceLine(
            position=position,
            item_id=item_id,
            item_name=data.get('item_name') or display_name(Item, item_id),
            customer_id=customer_id,
            customer_name=data.get('customer_name') or (
                display_name(Customer, customer_id) if customer_id else ''
            ),
            description=data.get('description') or '',
            quantity=quantity,
            price=price,
            total=total,
            left_amount=to_decimal(data.get('left_amount')),
            payment_method=payment_method,
        ))
    return built


def _save_invoice(invoice: Invoice, **kwargs) -> None:
    try:
        with transaction.atomic():
            invoice.save(**kwargs)
    except IntegrityError as e:
        raise DuplicateKeyError(f"Invoice number already exists: {invoice.invoice_no}") from e


@transaction.atomic
def create_invoice(
    *,
    invoice_no: str,
    car_id: UUID,
    invoice_date,
    lines: list,
    status: str = InvoiceStatus.ACTIVE
) -> Invoice:
    """
    Create an invoice with its lines.

    Args:
        invoice_no: Unique invoice number
        car_id: Car the invoice belongs to
        invoice_date: Date of the invoice
        lines: Line payloads (dicts keyed like ``LINE_FIELDS``)
        status: Initial status

    Returns:
        Created Invoice instance with ``total`` / ``total_left`` set

    Raises:
        LedgerValidationError: If a header field is missing or there are no lines
        DuplicateKeyError: If the invoice number is taken
    """
    missing = [
        name for name, value in
        (('invoice_no', invoice_no), ('car_id', car_id), ('invoice_date', invoice_date))
        if not value
    ]
    if missing:
        raise LedgerValidationError(f"Missing required field(s): {', '.join(missing)}")
    _validate_line_count(lines)

    if Invoice.objects.filter(invoice_no=invoice_no).exists():
        raise DuplicateKeyError(f"Invoice number already exists: {invoice_no}")

    built = _build_lines(lines)
    invoice = Invoice(
        invoice_no=invoice_no,
        car_id=car_id,
        invoice_date=invoice_date,
        status=status,
        total=sum((line.total for line in built), Decimal('0.00')),
        total_left=sum((line.left_amount for line in built), Decimal('0.00')),
    )
    _save_invoice(invoice, force_insert=True)

    for line in built:
        line.invoice = invoice
    InvoiceLine.objects.bulk_create(built)

    logger.info(
        "Created invoice %s for car %s: %d line(s), total %s, left %s",
        invoice.invoice_no, car_id, len(built), invoice.total, invoice.total_left
    )
    return invoice


@transaction.atomic
def update_invoice(*, invoice_id: UUID, fields: dict) -> Invoice:
    """
    Replace the given fields of an invoice.

    A ``lines`` entry replaces every line. Totals are recomputed from the
    resulting lines. Balances are left alone.

    Raises:
        EntityNotFoundError: If the invoice does not exist
        LedgerValidationError: If a field is unknown or ``lines`` is empty
        DuplicateKeyError: If the new invoice number is taken
    """
    invoice = get_entity(Invoice, invoice_id)
    fields = {FIELD_ALIASES.get(k, k): v for k, v in fields.items()}

    unknown = sorted(set(fields) - set(UPDATABLE_FIELDS) - {'lines'})
    if unknown:
        raise LedgerValidationError(f"Unknown invoice field(s): {', '.join(unknown)}")

    for name in UPDATABLE_FIELDS:
        if name in fields:
            setattr(invoice, name, fields[name])
    _save_invoice(invoice)

    if 'lines' in fields:
        _validate_line_count(fields['lines'])
        built = _build_lines(fields['lines'])
        invoice.lines.all().delete()
        for line in built:
            line.invoice = invoice
        InvoiceLine.objects.bulk_create(built)

    invoice.recalculate_totals()

    logger.info(
        "Updated invoice %s (%s): total %s, left %s",
        invoice.invoice_no, ', '.join(sorted(fields)), invoice.total, invoice.total_left
    )
    return invoice


@transaction.atomic
def delete_invoice(*, invoice_id: UUID) -> None:
    """
    Delete an invoice and its lines. Balances are left alone.

    Raises:
        EntityNotFoundError: If the invoice does not exist
    """
    invoice = get_entity(Invoice, invoice_id)
    invoice_no = invoice.invoice_no
    invoice.delete()
    logger.info("Deleted invoice %s", invoice_no)


def apply_line_change(line: dict, field: str, value) -> dict:
    """
    Apply one field edit to a line payload and return the new payload.

    Changing the item copies the item's current price and name; changing the
    customer copies the customer's name; changing the item, quantity or price
    recomputes ``total = quantity * price``.

    Raises:
        LedgerValidationError: If ``field`` is not a line field or a money
            value is not a number
        EntityNotFoundError: If the new item or customer does not exist
    """
    field = FIELD_ALIASES.get(field, field)
    if field not in LINE_FIELDS:
        raise LedgerValidationError(f"Unknown line field: {field}")

    updated = dict(line)

    if field == 'item_id':
        item = get_entity(Item, value)
        updated['item_id'] = item.pk
        updated['item_name'] = item.item_name
        updated['price'] = item.price
    elif field == 'customer_id':
        if value:
            customer = get_entity(Customer, value)
            updated['customer_id'] = customer.pk
            updated['customer_name'] = customer.customer_name
        else:
            updated['customer_id'] = None
            updated['customer_name'] = ''
    elif field in MONEY_FIELDS:
        try:
            updated[field] = to_decimal(value)
        except ArithmeticError:
            raise LedgerValidationError(f"Invalid {field}: {value}")
    else:
        updated[field] = value

    if field in ('item_id', 'quantity', 'price'):
        updated['total'] = to_decimal(
            to_decimal(updated.get('quantity', Decimal('1.00'))) * to_decimal(updated.get('price'))
        )
    return updated


def _validate_edited_line(line: dict, position: int) -> None:
    """The checks a submitted line goes through, applied to an edited one."""
    payment_method = line.get('payment_method')
    if payment_method not in PaymentMethod.values:
        raise LedgerValidationError(f"Line {position}: unknown payment method '{payment_method}'")

    if not Item.objects.filter(pk=line.get('item_id')).exists():
        raise LedgerValidationError(f"Line {position}: item not found")

    customer_id = line.get('customer_id')
    if customer_id and not Customer.objects.filter(pk=customer_id).exists():
        raise LedgerValidationError(f"Line {position}: customer not found")
    if payment_method == PaymentMethod.CREDIT and not customer_id:
        raise LedgerValidationError(f"Line {position}: credit lines need a customer")

    negative = [name for name in ('quantity', 'price', 'left_amount') if to_decimal(line.get(name)) < 0]
    if negative:
        raise LedgerValidationError(f"Line {position}: {', '.join(negative)} cannot be negative")


def edit_invoice_line(*, invoice_id: UUID, position: int, changes: dict) -> Tuple[Invoice, List[dict]]:
    """
    Edit one stored line and run the result through the invoice edit flow,
    so customer balances follow the change.

    Returns:
        Tuple of (updated invoice, list of skipped-adjustment warnings)

    Raises:
        EntityNotFoundError: If the invoice does not exist
        LedgerValidationError: If there is no line at ``position`` or the
            edited line would not be accepted on create
    """
    from .reconciliation import edit_invoice_flow

    invoice = get_entity(Invoice, invoice_id)
    lines = [line_to_dict(line) for line in invoice.lines.all()]
    if not 1 <= position <= len(lines):
        raise LedgerValidationError(
            f"Invoice {invoice.invoice_no} has no line {position}"
        )

    line = lines[position - 1]
    for field, value in changes.items():
        line = apply_line_change(line, field, value)
    _validate_edited_line(line, position)
    lines[position - 1] = line

    return edit_invoice_flow(invoice_id=invoice_id, fields={'lines': lines})


def next_invoice_no() -> str:
    """``INV-001`` style number following the highest existing one."""
    highest = 0
    for invoice_no in Invoice.objects.filter(invoice_no__startswith='INV-').values_list('invoice_no', flat=True):
        match = INVOICE_NO_PATTERN.match(invoice_no)
        if match:
            highest = max(highest, int(match.group(1)))
    return f"INV-{highest + 1:03d}"
