from django.urls import path
from . import views

app_name = 'analytics'

urlpatterns = [
    # Dashboard
    path('dashboard/', views.dashboard, name='dashboard'),

    # Reports
    path('analytics/monthly-summary/', views.monthly_summary, name='monthly-summary'),
    path('analytics/credit-overview/', views.credit_overview, name='credit-overview'),
    path('analytics/cars/<uuid:car_id>/report/', views.car_report, name='car-report'),
    path('analytics/customers/<uuid:customer_id>/statement/', views.customer_statement, name='customer-statement'),
]
