from django.db.models import Q
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .models import Car, Employee, Customer, Item
from .serializers import (
    CarSerializer,
    EmployeeSerializer,
    CustomerSerializer,
    ItemSerializer,
    EntityFilterSerializer,
    EmployeeBalanceInputSerializer,
    BalanceResponseSerializer,
)
from apps.ledger.services import (
    create_entity,
    update_entity,
    delete_entity,
    list_entities,
)
from apps.payments.models import PaymentType
from apps.payments.serializers import PaymentSerializer
from apps.payments.services import adjust_employee_balance, list_payments


class LedgerEntityViewSet(viewsets.ModelViewSet):
    """
    CRUD for one kind of ledger record.

    Writes go through the entity store service; subclasses set ``model``,
    ``serializer_class`` and the fields searched by ``?search=``.
    """

    model = None
    search_fields = ()
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        """Filter records using input serializer validation."""
        if self.action != 'list':
            return list_entities(self.model)

        filter_serializer = EntityFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        filters = {}
        if 'status' in params and any(f.name == 'status' for f in self.model._meta.fields):
            filters['status'] = params['status']
        queryset = list_entities(self.model, filters)

        search = params.get('search')
        if search:
            query = Q()
            for field in self.search_fields:
                query |= Q(**{f'{field}__icontains': search})
            queryset = queryset.filter(query)

        return queryset

    def perform_create(self, serializer):
        serializer.instance = create_entity(self.model, **serializer.validated_data)

    def perform_update(self, serializer):
        serializer.instance = update_entity(
            self.model,
            serializer.instance.pk,
            serializer.validated_data
        )

    def perform_destroy(self, instance):
        delete_entity(self.model, instance.pk)


class CarViewSet(LedgerEntityViewSet):
    """
    list: All cars (``?status=``, ``?search=``)
    create: Register a car (name and unique number plate required)
    retrieve / update / partial_update / destroy: Single car
    """

    model = Car
    serializer_class = CarSerializer
    search_fields = ('car_name', 'number_plate', 'driver_name', 'helper_name')


class EmployeeViewSet(LedgerEntityViewSet):
    """
    list: All employees (``?status=``, ``?search=``)
    create: Register a driver or helper
    retrieve / update / partial_update / destroy: Single employee
    add_balance / deduct_balance: Adjust the running balance
    payment_history: Balance adjustments and pay-outs for the employee
    """

    model = Employee
    serializer_class = EmployeeSerializer
    search_fields = ('employee_name', 'phone_number')

    def _adjust(self, request, pk, direction):
        input_serializer = EmployeeBalanceInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)
        data = input_serializer.validated_data

        new_balance = adjust_employee_balance(
            employee_id=pk,
            amount=data['amount'],
            date=data['date'],
            description=data['description'],
            direction=direction,
        )
        verb = 'added' if direction == 'add' else 'deducted'
        return Response({
            'success': True,
            'message': f'Balance {verb} successfully',
            'new_balance': new_balance,
        })

    @extend_schema(
        request=EmployeeBalanceInputSerializer,
        responses={200: BalanceResponseSerializer},
    )
    @action(detail=True, methods=['post'], url_path='add-balance')
    def add_balance(self, request, pk=None):
        """
        Add to an employee's balance.

        POST /api/employees/{id}/add-balance/
        Body: {"amount": "30.00", "date": "2024-05-01", "description": "bonus"}
        """
        return self._adjust(request, pk, 'add')

    @extend_schema(
        request=EmployeeBalanceInputSerializer,
        responses={200: BalanceResponseSerializer},
    )
    @action(detail=True, methods=['post'], url_path='deduct-balance')
    def deduct_balance(self, request, pk=None):
        """
        Deduct from an employee's balance.

        POST /api/employees/{id}/deduct-balance/
        """
        return self._adjust(request, pk, 'deduct')

    @extend_schema(responses={200: PaymentSerializer(many=True)})
    @action(detail=True, methods=['get'], url_path='payment-history')
    def payment_history(self, request, pk=None):
        """
        Balance adjustments and pay-outs for one employee, newest first.

        GET /api/employees/{id}/payment-history/
        """
        employee = self.get_object()
        payments = list_payments(
            employee_id=employee.pk,
            types=[
                PaymentType.BALANCE_ADD,
                PaymentType.BALANCE_DEDUCT,
                PaymentType.PAYMENT_OUT,
            ],
        )
        return Response(PaymentSerializer(payments, many=True).data, status=status.HTTP_200_OK)


class CustomerViewSet(LedgerEntityViewSet):
    model = Customer
    serializer_class = CustomerSerializer
    search_fields = ('customer_name', 'phone_number')


class ItemViewSet(LedgerEntityViewSet):
    model = Item
    serializer_class = ItemSerializer
    search_fields = ('item_name',)
