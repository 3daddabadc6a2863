"""Services for invoices: composition and balance reconciliation."""

from .invoice_composer import (
    create_invoice,
    update_invoice,
    delete_invoice,
    apply_line_change,
    edit_invoice_line,
    next_invoice_no,
    line_to_dict,
)
from .reconciliation import (
    create_invoice_flow,
    delete_invoice_flow,
    edit_invoice_flow,
)

__all__ = [
    # Composer
    'create_invoice',
    'update_invoice',
    'delete_invoice',
    'apply_line_change',
    'edit_invoice_line',
    'next_invoice_no',
    'line_to_dict',
    # Reconciliation
    'create_invoice_flow',
    'delete_invoice_flow',
    'edit_invoice_flow',
]
