from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'users'

router = DefaultRouter()
router.register(r'users', views.UserViewSet, basename='user')

urlpatterns = [
    # Authentication
    path('auth/login/', views.login, name='login'),
    path('auth/register/', views.register, name='register'),
    path('auth/verify/', views.verify, name='verify'),

    # User management (administrators)
    # GET    /api/users/
    # GET    /api/users/{id}/
    # PUT    /api/users/{id}/
    # PATCH  /api/users/{id}/
    # DELETE /api/users/{id}/
    path('', include(router.urls)),
]
