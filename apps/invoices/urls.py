from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'invoices'

router = DefaultRouter()
router.register(r'invoices', views.InvoiceViewSet, basename='invoice')

urlpatterns = [
    # GET    /api/invoices/                  - List invoices
    # POST   /api/invoices/                  - Create invoice (balances follow)
    # GET    /api/invoices/{id}/             - Invoice with lines
    # PUT    /api/invoices/{id}/             - Edit invoice
    # PATCH  /api/invoices/{id}/             - Edit invoice
    # DELETE /api/invoices/{id}/             - Reverse and delete invoice
    # POST   /api/invoices/{id}/edit-line/   - Edit a single line
    # GET    /api/invoices/next-number/      - Next free invoice number
    path('', include(router.urls)),
]
