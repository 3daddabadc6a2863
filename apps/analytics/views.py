from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from .analytics import LedgerReports
from .serializers import (
    # Input serializers
    MonthlySummaryQuerySerializer,
    DateRangeQuerySerializer,
    # Response serializers
    DashboardResponseSerializer,
    MonthlySummaryResponseSerializer,
    CreditOverviewSerializer,
    CarReportSerializer,
    CustomerStatementSerializer,
    ErrorSerializer,
)


@extend_schema(
    responses={200: DashboardResponseSerializer},
    description="Headline counts and totals: active cars, invoices, revenue and outstanding amounts.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def dashboard(request):
    """Dashboard figures - thin HTTP handler."""
    return Response(LedgerReports.dashboard_stats())


@extend_schema(
    parameters=[
        OpenApiParameter('year', OpenApiTypes.INT, description='Calendar year (default: current year)'),
        OpenApiParameter('car', OpenApiTypes.UUID, description='Restrict to one car'),
    ],
    responses={
        200: MonthlySummaryResponseSerializer,
        400: ErrorSerializer,
    },
    description="Invoice count, revenue, outstanding, collected and payment totals per month.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def monthly_summary(request):
    """Monthly summary - thin HTTP handler."""
    query_serializer = MonthlySummaryQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    data = LedgerReports.monthly_summary(
        year=params['year'],
        car_id=params.get('car'),
    )
    return Response(data)


@extend_schema(
    responses={200: CreditOverviewSerializer(many=True)},
    description="Stored customer balances next to the balance recomputed from credit lines and receipts.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def credit_overview(request):
    """Credit overview - thin HTTP handler."""
    return Response(LedgerReports.credit_overview())


_DATE_RANGE_PARAMETERS = [
    OpenApiParameter('date_from', OpenApiTypes.DATE, description='On or after this date'),
    OpenApiParameter('date_to', OpenApiTypes.DATE, description='On or before this date'),
]


@extend_schema(
    parameters=_DATE_RANGE_PARAMETERS,
    responses={
        200: CarReportSerializer,
        400: ErrorSerializer,
        404: ErrorSerializer,
    },
    description="One car's invoice lines grouped by item, with totals, pay-outs and net amount.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def car_report(request, car_id):
    """Car report - thin HTTP handler."""
    query_serializer = DateRangeQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    data = LedgerReports.car_report(
        car_id,
        date_from=params.get('date_from'),
        date_to=params.get('date_to'),
    )
    return Response(data)


@extend_schema(
    parameters=_DATE_RANGE_PARAMETERS,
    responses={
        200: CustomerStatementSerializer,
        400: ErrorSerializer,
        404: ErrorSerializer,
    },
    description="A customer's credit lines and payments in date order with a running balance.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def customer_statement(request, customer_id):
    """Customer statement - thin HTTP handler."""
    query_serializer = DateRangeQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    data = LedgerReports.customer_statement(
        customer_id,
        date_from=params.get('date_from'),
        date_to=params.get('date_to'),
    )
    return Response(data)
