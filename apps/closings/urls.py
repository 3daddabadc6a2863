from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'closings'

router = DefaultRouter()
router.register(r'closings', views.MonthClosingViewSet, basename='closing')

urlpatterns = [
    # GET  /api/closings/           - List closed months
    # POST /api/closings/           - Close a month and reset car accounts
    # GET  /api/closings/{id}/      - Get one closing with its per-car rows
    # GET  /api/closings/preview/   - Figures a closing would record
    path('', include(router.urls)),
]
