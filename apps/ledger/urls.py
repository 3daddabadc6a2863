from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'ledger'

router = DefaultRouter()
router.register(r'cars', views.CarViewSet, basename='car')
router.register(r'employees', views.EmployeeViewSet, basename='employee')
router.register(r'customers', views.CustomerViewSet, basename='customer')
router.register(r'items', views.ItemViewSet, basename='item')

urlpatterns = [
    # GET/POST            /api/{cars,employees,customers,items}/
    # GET/PUT/PATCH/DELETE /api/{cars,employees,customers,items}/{id}/

    # Employee balance actions
    # POST   /api/employees/{id}/add-balance/
    # POST   /api/employees/{id}/deduct-balance/
    # GET    /api/employees/{id}/payment-history/
    path('', include(router.urls)),
]
