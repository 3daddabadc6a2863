from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from .serializers import (
    CloseMonthInputSerializer,
    ClosingFilterSerializer,
    MonthClosingSerializer,
    MonthFiguresSerializer,
)
from apps.closings.services import close_month, list_closings, month_figures


class MonthClosingViewSet(mixins.ListModelMixin, mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    """
    ViewSet for account month closings.

    list: Closings, latest month first (filterable by year)
    retrieve: A single closing with its per-car rows
    create: Close a month and reset every car account
    preview: Figures a closing would record, nothing is written
    """

    serializer_class = MonthClosingSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        if self.action != 'list':
            return list_closings()

        filter_serializer = ClosingFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        return list_closings(year=filter_serializer.validated_data.get('year'))

    @extend_schema(
        request=CloseMonthInputSerializer,
        responses={201: MonthClosingSerializer},
    )
    def create(self, request):
        """
        Close an account month.

        POST /api/closings/
        Body: {"account_month": "2024-05"}
        """
        input_serializer = CloseMonthInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        closing = close_month(account_month=input_serializer.validated_data.get('account_month'))

        return Response(MonthClosingSerializer(closing).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        parameters=[
            OpenApiParameter('account_month', OpenApiTypes.STR, description='YYYY-MM (default: current month)'),
        ],
        responses={200: MonthFiguresSerializer},
    )
    @action(detail=False, methods=['get'])
    def preview(self, request):
        """
        Figures of the month as it would be closed now.

        GET /api/closings/preview/?account_month=2024-05
        """
        filter_serializer = ClosingFilterSerializer(data=request.query_params)
        filter_serializer.is_valid(raise_exception=True)

        figures = month_figures(filter_serializer.validated_data.get('account_month'))
        return Response(MonthFiguresSerializer(figures).data)
