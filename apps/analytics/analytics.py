"""
Analytics Module
=================

Read-only reporting over the ledger: dashboard figures, monthly revenue and
payment summaries, a customer credit overview that recomputes each
customer's balance from invoices and payments, per-car reports and
customer statements.

Classes:
    LedgerReports: Static methods for the reporting endpoints.

Example:
    Monthly summary for one car::

        from apps.analytics.analytics import LedgerReports

        summary = LedgerReports.monthly_summary(year=2024, car_id=car.id)
        for month in summary['months']:
            print(month['month'], month['revenue'], month['collected'])

Note:
    Profit is not stored on invoices. It is known once an account month is
    closed, so profit figures come from month closings and are zero for
    months still open. All methods return plain dictionaries or lists, suitable for JSON
    serialization in API responses.
"""

from django.db.models import Sum, Count
from django.db.models.functions import TruncMonth, Coalesce
from datetime import date
from decimal import Decimal

from apps.closings.models import MonthClosing
from apps.closings.services import closed_profit_by_month
from apps.invoices.models import Invoice, InvoiceLine, PaymentMethod
from apps.ledger.models import Car, Customer, Employee, Item, CarStatus, EntityStatus
from apps.ledger.services import get_entity
from apps.payments.models import Payment, PaymentType

ZERO = Decimal('0.00')


def _month_key(value):
    return value.strftime('%Y-%m')


def _in_range(value, date_from, date_to):
    return (not date_from or value >= date_from) and (not date_to or value <= date_to)


class LedgerReports:
    """
    Aggregation queries for the reporting endpoints.

    Methods:
        dashboard_stats: Headline counts and totals.
        monthly_summary: Invoice and payment totals per calendar month.
        credit_overview: Stored versus recomputed customer balances.
        car_report: One car's invoice lines grouped by item, with pay-outs.
        customer_statement: A customer's credit lines and payments in date order.
    """

    @staticmethod
    def dashboard_stats():
        """
        Headline figures for the dashboard.

        Returns:
            dict: A dictionary containing:
                - active_cars (list): ``id``, ``car_name``, ``balance`` of each
                  active car.
                - active_cars_count, active_employees_count,
                  active_customers_count (int)
                - total_invoices (int)
                - total_revenue (Decimal): Sum of invoice totals.
                - total_outstanding (Decimal): Sum of invoice unpaid remainders.
                - total_profit (Decimal): Sum of the profit of closed months.
        """
        active_cars = list(
            Car.objects.filter(status=CarStatus.ACTIVE)
            .order_by('car_name')
            .values('id', 'car_name', 'balance')
        )

        invoice_totals = Invoice.objects.aggregate(
            count=Count('id'),
            revenue=Coalesce(Sum('total'), ZERO),
            outstanding=Coalesce(Sum('total_left'), ZERO),
        )

        return {
            'active_cars': active_cars,
            'active_cars_count': len(active_cars),
            'active_employees_count': Employee.objects.filter(status=EntityStatus.ACTIVE).count(),
            'active_customers_count': Customer.objects.filter(status=EntityStatus.ACTIVE).count(),
            'total_invoices': invoice_totals['count'],
            'total_revenue': invoice_totals['revenue'],
            'total_outstanding': invoice_totals['outstanding'],
            'total_profit': MonthClosing.objects.aggregate(total=Coalesce(Sum('profit'), ZERO))['total'],
        }

    @staticmethod
    def monthly_summary(year=None, car_id=None):
        """
        Invoice and payment totals for each month of one year.

        Args:
            year (int, optional): Calendar year, defaults to the current one.
            car_id (UUID, optional): Restrict invoices and pay-outs to one car.
                Money received from customers is not tied to a car and is
                then reported as zero.

        Returns:
            dict: ``year``, ``car`` and ``months``, a list of twelve entries
            with ``month`` (YYYY-MM), ``invoice_count``, ``revenue``,
            ``outstanding``, ``collected`` (revenue - outstanding),
            ``payments_received``, ``payments_out`` and ``profit`` (as recorded
            when the month was closed, zero while it is open).
        """
        year = year or date.today().year

        invoices = Invoice.objects.filter(invoice_date__year=year)
        payments = Payment.objects.filter(payment_date__year=year)
        if car_id:
            invoices = invoices.filter(car_id=car_id)
            payments = payments.filter(car_id=car_id)

        invoice_rows = {
            _month_key(row['month']): row
            for row in invoices
            .annotate(month=TruncMonth('invoice_date'))
            .values('month')
            .annotate(
                invoice_count=Count('id'),
                revenue=Coalesce(Sum('total'), ZERO),
                outstanding=Coalesce(Sum('total_left'), ZERO),
            )
            .order_by('month')
        }

        payment_rows = {}
        for row in (
            payments
            .filter(type__in=[PaymentType.RECEIVE, PaymentType.PAYMENT_OUT])
            .annotate(month=TruncMonth('payment_date'))
            .values('month', 'type')
            .annotate(amount=Coalesce(Sum('amount'), ZERO))
            .order_by('month')
        ):
            payment_rows[(_month_key(row['month']), row['type'])] = row['amount']

        closed_profit = closed_profit_by_month(year=year, car_id=car_id)

        months = []
        for month in range(1, 13):
            key = f"{year}-{month:02d}"
            row = invoice_rows.get(key, {})
            revenue = row.get('revenue', ZERO)
            outstanding = row.get('outstanding', ZERO)
            months.append({
                'month': key,
                'invoice_count': row.get('invoice_count', 0),
                'revenue': revenue,
                'outstanding': outstanding,
                'collected': revenue - outstanding,
                'payments_received': payment_rows.get((key, PaymentType.RECEIVE), ZERO),
                'payments_out': payment_rows.get((key, PaymentType.PAYMENT_OUT), ZERO),
                'profit': closed_profit.get(key, ZERO),
            })

        return {
            'year': year,
            'car': car_id,
            'months': months,
        }

    @staticmethod
    def credit_overview():
        """
        Compare each customer's stored balance with the balance recomputed
        from credit invoice lines and received payments.

        Returns:
            list: One dict per customer with ``customer_id``,
            ``customer_name``, ``total_credited``, ``total_received``,
            ``derived_balance`` (max(0, credited - received)),
            ``stored_balance`` and ``drift`` (stored - derived).
        """
        credited = dict(
            InvoiceLine.objects.filter(payment_method=PaymentMethod.CREDIT, customer__isnull=False)
            .values('customer_id')
            .annotate(total=Coalesce(Sum('total'), ZERO))
            .values_list('customer_id', 'total')
        )
        received = dict(
            Payment.objects.filter(type=PaymentType.RECEIVE, customer__isnull=False)
            .values('customer_id')
            .annotate(total=Coalesce(Sum('amount'), ZERO))
            .values_list('customer_id', 'total')
        )

        overview = []
        for customer in Customer.objects.order_by('customer_name'):
            total_credited = credited.get(customer.pk, ZERO)
            total_received = received.get(customer.pk, ZERO)
            derived = max(ZERO, total_credited - total_received)
            overview.append({
                'customer_id': customer.pk,
                'customer_name': customer.customer_name,
                'total_credited': total_credited,
                'total_received': total_received,
                'derived_balance': derived,
                'stored_balance': customer.balance,
                'drift': customer.balance - derived,
            })
        return overview

    @staticmethod
    def car_report(car_id, date_from=None, date_to=None):
        """
        Invoice lines of one car grouped by item, with the car's pay-outs.

        Args:
            car_id (UUID): Car to report on.
            date_from (date, optional): Invoices and pay-outs on or after.
            date_to (date, optional): Invoices and pay-outs on or before.

        Returns:
            dict: A dictionary containing:
                - car (dict): ``id``, ``car_name``, ``number_plate``,
                  ``balance``, ``left``.
                - items (list): Per item name, ``transactions`` plus
                  ``total_quantity``, ``total_value`` and ``total_left``,
                  largest value first.
                - payments (list): Pay-outs to the car in the period.
                - total_value, total_left (Decimal)
                - payments_received (Decimal): Paid on the invoices,
                  total_value - total_left.
                - payments_out (Decimal): Sum of the pay-outs.
                - net_amount (Decimal): total_value - payments_out.

        Raises:
            EntityNotFoundError: If the car does not exist.
        """
        car = get_entity(Car, car_id)

        lines = (
            InvoiceLine.objects.filter(invoice__car_id=car.pk)
            .select_related('invoice')
            .order_by('invoice__invoice_date', 'invoice__invoice_no', 'position')
        )
        payments = Payment.objects.filter(type=PaymentType.PAYMENT_OUT, car_id=car.pk)
        if date_from:
            lines = lines.filter(invoice__invoice_date__gte=date_from)
            payments = payments.filter(payment_date__gte=date_from)
        if date_to:
            lines = lines.filter(invoice__invoice_date__lte=date_to)
            payments = payments.filter(payment_date__lte=date_to)

        groups = {}
        for line in lines:
            item_name = line.item_name or Item.unknown_label
            group = groups.setdefault(item_name, {
                'item_name': item_name,
                'transactions': [],
                'total_quantity': ZERO,
                'total_value': ZERO,
                'total_left': ZERO,
            })
            group['transactions'].append({
                'date': line.invoice.invoice_date,
                'invoice_no': line.invoice.invoice_no,
                'customer_name': line.customer_name or (Customer.unknown_label if line.customer_id else ''),
                'quantity': line.quantity,
                'price': line.price,
                'total': line.total,
                'left_amount': line.left_amount,
                'payment_method': line.payment_method,
                'description': line.description,
            })
            group['total_quantity'] += line.quantity
            group['total_value'] += line.total
            group['total_left'] += line.left_amount

        items = sorted(groups.values(), key=lambda group: group['total_value'], reverse=True)
        total_value = sum((group['total_value'] for group in items), ZERO)
        total_left = sum((group['total_left'] for group in items), ZERO)

        payment_rows = list(
            payments.order_by('payment_date', 'created_at')
            .values('id', 'payment_no', 'payment_date', 'amount', 'account_month', 'description')
        )
        payments_out = sum((row['amount'] for row in payment_rows), ZERO)

        return {
            'car': {
                'id': car.pk,
                'car_name': car.car_name,
                'number_plate': car.number_plate,
                'balance': car.balance,
                'left': car.left,
            },
            'date_from': date_from,
            'date_to': date_to,
            'items': items,
            'payments': payment_rows,
            'transaction_count': sum(len(group['transactions']) for group in items),
            'total_value': total_value,
            'total_left': total_left,
            'payments_received': total_value - total_left,
            'payments_out': payments_out,
            'net_amount': total_value - payments_out,
        }

    @staticmethod
    def customer_statement(customer_id, date_from=None, date_to=None):
        """
        A customer's credit lines and received payments as one history.

        Entries are in date order (credit before payment on the same day)
        with a running balance: credit lines add their total, payments
        subtract their amount. The running balance starts with the
        customer's first entry, so a date range only hides entries.

        Returns:
            dict: ``customer``, ``date_from``, ``date_to``, ``entries`` and
            the all-time ``total_credited``, ``total_paid`` and
            ``final_balance`` (max(0, credited - paid)).

        Raises:
            EntityNotFoundError: If the customer does not exist.
        """
        customer = get_entity(Customer, customer_id)

        lines = list(
            InvoiceLine.objects.filter(customer_id=customer.pk, payment_method=PaymentMethod.CREDIT)
            .select_related('invoice')
            .order_by('invoice__invoice_date', 'invoice__created_at', 'position')
        )
        car_names = dict(
            Car.objects.filter(pk__in={line.invoice.car_id for line in lines})
            .values_list('id', 'car_name')
        )

        entries = [
            {
                'type': 'transaction',
                'date': line.invoice.invoice_date,
                'reference': line.invoice.invoice_no,
                'car_name': car_names.get(line.invoice.car_id, Car.unknown_label),
                'item_name': line.item_name or Item.unknown_label,
                'quantity': line.quantity,
                'price': line.price,
                'description': line.description,
                'amount': line.total,
            }
            for line in lines
        ]
        entries.extend(
            {
                'type': 'payment',
                'date': payment.payment_date,
                'reference': payment.payment_no,
                'car_name': '',
                'item_name': '',
                'quantity': None,
                'price': None,
                'description': payment.description,
                'amount': payment.amount,
            }
            for payment in Payment.objects.filter(customer_id=customer.pk, type=PaymentType.RECEIVE)
            .order_by('payment_date', 'created_at')
        )
        entries.sort(key=lambda entry: entry['date'])

        running = ZERO
        total_credited = ZERO
        total_paid = ZERO
        for entry in entries:
            if entry['type'] == 'transaction':
                running += entry['amount']
                total_credited += entry['amount']
            else:
                running -= entry['amount']
                total_paid += entry['amount']
            entry['running_balance'] = running

        return {
            'customer': {
                'id': customer.pk,
                'customer_name': customer.customer_name,
                'phone_number': customer.phone_number,
                'balance': customer.balance,
            },
            'date_from': date_from,
            'date_to': date_to,
            'entries': [
                entry for entry in entries
                if _in_range(entry['date'], date_from, date_to)
            ],
            'total_credited': total_credited,
            'total_paid': total_paid,
            'final_balance': max(ZERO, total_credited - total_paid),
        }
