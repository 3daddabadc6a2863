"""Sequential document numbers for payments."""

from apps.payments.models import Payment

RECEIPT_PREFIX = 'PYN'
BALANCE_PREFIX = 'BAL'


def next_payment_no(prefix: str = RECEIPT_PREFIX) -> str:
    """
    Next number in the ``PREFIX-0001`` sequence.

    The sequence is the count of all stored payments plus one, whatever their
    prefix. Two concurrent callers can receive the same number and deleting a
    payment makes the next number repeat an existing one; ``payment_no`` is
    not unique.
    """
    return f"{prefix}-{Payment.objects.count() + 1:04d}"
