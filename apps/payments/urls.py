from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'payments'

router = DefaultRouter()
router.register(r'payments', views.PaymentViewSet, basename='payment')

urlpatterns = [
    # GET    /api/payments/               - List payments
    # GET    /api/payments/{id}/          - Get payment
    # PUT    /api/payments/{id}/          - Update payment (applies the difference)
    # DELETE /api/payments/{id}/          - Reverse and delete payment
    # POST   /api/payments/receive/       - Money received from a customer
    # POST   /api/payments/payment-out/   - Money paid to an employee or car
    path('', include(router.urls)),
]
