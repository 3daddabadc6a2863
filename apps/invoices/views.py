from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from .models import Invoice
from .serializers import (
    InvoiceSerializer,
    InvoiceListSerializer,
    InvoiceFilterSerializer,
    InvoiceCreateInputSerializer,
    InvoiceUpdateInputSerializer,
    EditLineInputSerializer,
    InvoiceWriteResponseSerializer,
    NextInvoiceNoSerializer,
)
from apps.invoices.services import (
    create_invoice_flow,
    edit_invoice_flow,
    delete_invoice_flow,
    edit_invoice_line,
    next_invoice_no,
)


class InvoicePagination(PageNumberPagination):
    """Custom pagination for invoices."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class InvoiceViewSet(viewsets.ModelViewSet):
    """
    ViewSet for invoices.

    All balance effects are handled by the reconciliation services.
    Views are thin HTTP handlers only.

    list: Invoices, newest first (filterable)
    create: Create an invoice and distribute its amounts
    retrieve: Invoice with lines
    update / partial_update: Edit an invoice; customer balances follow the lines
    destroy: Reverse the invoice's amounts and delete it
    """

    queryset = Invoice.objects.prefetch_related('lines')
    serializer_class = InvoiceSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = InvoicePagination

    def get_queryset(self):
        """Filter invoices using input serializer validation."""
        queryset = super().get_queryset()
        if self.action != 'list':
            return queryset

        filter_serializer = InvoiceFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        if 'car' in params:
            queryset = queryset.filter(car_id=params['car'])
        if 'customer' in params:
            queryset = queryset.filter(lines__customer_id=params['customer']).distinct()
        if 'status' in params:
            queryset = queryset.filter(status=params['status'])
        if params.get('search'):
            queryset = queryset.filter(invoice_no__icontains=params['search'])
        if 'date_from' in params:
            queryset = queryset.filter(invoice_date__gte=params['date_from'])
        if 'date_to' in params:
            queryset = queryset.filter(invoice_date__lte=params['date_to'])

        return queryset

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action == 'list':
            return InvoiceListSerializer
        return InvoiceSerializer

    @extend_schema(request=InvoiceCreateInputSerializer)
    def create(self, request):
        """
        Create an invoice.

        POST /api/invoices/
        """
        input_serializer = InvoiceCreateInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        invoice, warnings = create_invoice_flow(**input_serializer.to_service())

        return Response({
            'success': True,
            'message': 'Invoice created successfully',
            'invoice_id': invoice.id,
            'invoice_no': invoice.invoice_no,
            'total': invoice.total,
            'total_left': invoice.total_left,
            'warnings': warnings,
        }, status=status.HTTP_201_CREATED)

    @extend_schema(
        request=InvoiceUpdateInputSerializer,
        responses={200: InvoiceWriteResponseSerializer},
    )
    def update(self, request, pk=None, partial=False):
        """
        Edit an invoice. Sending ``lines`` replaces every line.

        PUT/PATCH /api/invoices/{id}/
        """
        input_serializer = InvoiceUpdateInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        invoice, warnings = edit_invoice_flow(
            invoice_id=pk,
            fields=input_serializer.to_service()
        )

        return Response({
            'invoice': InvoiceSerializer(invoice).data,
            'warnings': warnings,
        })

    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk, partial=True)

    def destroy(self, request, pk=None):
        """
        Delete an invoice after reversing its amounts.

        DELETE /api/invoices/{id}/
        """
        warnings = delete_invoice_flow(invoice_id=pk)
        return Response({
            'success': True,
            'message': 'Invoice deleted successfully',
            'warnings': warnings,
        })

    @extend_schema(
        request=EditLineInputSerializer,
        responses={200: InvoiceWriteResponseSerializer},
    )
    @action(detail=True, methods=['post'], url_path='edit-line')
    def edit_line(self, request, pk=None):
        """
        Edit one line of an invoice.

        POST /api/invoices/{id}/edit-line/
        Body: {"position": 1, "changes": {"quantity": "3"}}
        """
        input_serializer = EditLineInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        invoice, warnings = edit_invoice_line(
            invoice_id=pk,
            position=input_serializer.validated_data['position'],
            changes=input_serializer.validated_data['changes'],
        )

        return Response({
            'invoice': InvoiceSerializer(invoice).data,
            'warnings': warnings,
        })

    @extend_schema(responses={200: NextInvoiceNoSerializer})
    @action(detail=False, methods=['get'], url_path='next-number')
    def next_number(self, request):
        """
        Suggested number for the next invoice.

        GET /api/invoices/next-number/
        """
        return Response({'invoice_no': next_invoice_no()})
