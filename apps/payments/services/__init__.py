"""Services for the payment ledger."""

from .numbering import next_payment_no
from .payment_ledger import (
    receive_payment,
    pay_out,
    adjust_employee_balance,
    update_payment,
    delete_payment,
    list_payments,
)

__all__ = [
    'next_payment_no',
    'receive_payment',
    'pay_out',
    'adjust_employee_balance',
    'update_payment',
    'delete_payment',
    'list_payments',
]
