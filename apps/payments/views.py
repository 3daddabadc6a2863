from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from .serializers import (
    PaymentSerializer,
    PaymentFilterSerializer,
    ReceivePaymentInputSerializer,
    PaymentOutInputSerializer,
    PaymentUpdateInputSerializer,
    PaymentCreatedResponseSerializer,
)
from apps.payments.services import (
    receive_payment,
    pay_out,
    update_payment,
    delete_payment,
    list_payments,
)


class PaymentPagination(PageNumberPagination):
    """Custom pagination for payments."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class PaymentViewSet(mixins.ListModelMixin, mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    """
    ViewSet for payments.

    Payments are created through the receive and payment-out actions so that
    every write goes through the payment ledger service.

    list: Payments, newest first (filterable)
    retrieve: A single payment
    update: Change amount/date/description/number, re-applying the difference
    destroy: Reverse the payment's balance effect and delete it
    """

    serializer_class = PaymentSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = PaymentPagination

    def get_queryset(self):
        """Filter payments using input serializer validation."""
        if self.action != 'list':
            return list_payments()

        filter_serializer = PaymentFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        return list_payments(
            payment_type=params.get('type'),
            customer_id=params.get('customer'),
            employee_id=params.get('employee'),
            car_id=params.get('car'),
            date_from=params.get('date_from'),
            date_to=params.get('date_to'),
        )

    @extend_schema(
        request=PaymentUpdateInputSerializer,
        responses={200: PaymentSerializer},
    )
    def update(self, request, pk=None):
        """
        Edit a payment.

        PUT /api/payments/{id}/
        """
        input_serializer = PaymentUpdateInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)
        data = input_serializer.validated_data

        payment, warnings = update_payment(
            payment_id=pk,
            amount=data['amount'],
            payment_date=data.get('payment_date'),
            description=data.get('description'),
            payment_no=data.get('payment_no'),
            customer_id=data.get('customer'),
            car_id=data.get('car'),
        )

        return Response({
            'payment': PaymentSerializer(payment).data,
            'warnings': warnings,
        })

    def destroy(self, request, pk=None):
        """
        Delete a payment after reversing its balance effect.

        DELETE /api/payments/{id}/
        """
        warnings = delete_payment(payment_id=pk)
        return Response({
            'success': True,
            'message': 'Payment deleted successfully',
            'warnings': warnings,
        })

    @extend_schema(
        request=ReceivePaymentInputSerializer,
        responses={201: PaymentCreatedResponseSerializer},
    )
    @action(detail=False, methods=['post'])
    def receive(self, request):
        """
        Record money received from a customer.

        POST /api/payments/receive/
        Body: {"customer": "<uuid>", "amount": "20.00", "payment_date": "2024-05-01"}
        """
        input_serializer = ReceivePaymentInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)
        data = input_serializer.validated_data

        payment = receive_payment(
            customer_id=data['customer'],
            amount=data['amount'],
            payment_date=data['payment_date'],
            description=data.get('description', ''),
            payment_no=data.get('payment_no'),
        )

        return Response({
            'payment_id': payment.id,
            'payment_no': payment.payment_no,
            'message': 'Payment received successfully',
        }, status=status.HTTP_201_CREATED)

    @extend_schema(
        request=PaymentOutInputSerializer,
        responses={201: PaymentCreatedResponseSerializer},
    )
    @action(detail=False, methods=['post'], url_path='payment-out')
    def payment_out(self, request):
        """
        Record money paid out to an employee or car account.

        POST /api/payments/payment-out/
        """
        input_serializer = PaymentOutInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)
        data = input_serializer.validated_data

        payment = pay_out(
            account_type=data['account_type'],
            recipient_id=data['recipient'],
            amount=data['amount'],
            payment_date=data['payment_date'],
            account_month=data.get('account_month', ''),
            payment_no=data.get('payment_no'),
            description=data.get('description', ''),
        )

        return Response({
            'payment_id': payment.id,
            'payment_no': payment.payment_no,
            'message': 'Payment processed successfully',
        }, status=status.HTTP_201_CREATED)
