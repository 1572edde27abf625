"""Users Identity - URL Configuration."""
from django.urls import path
from . import views

app_name = 'identity'

urlpatterns = [
    # Authentication
    path('auth/register', views.RegisterView.as_view(), name='register'),
    path('auth/login', views.LoginView.as_view(), name='login'),
    path('auth/token/refresh', views.RefreshTokenView.as_view(), name='token_refresh'),

    # Profile
    path('users/me', views.MeView.as_view(), name='me'),
    path('users/<uuid:user_id>', views.PublicProfileView.as_view(), name='profile'),
]
