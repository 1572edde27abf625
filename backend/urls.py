"""
Masters Marketplace - URL Configuration.

Main URL router for the backend API.
"""
from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView, SpectacularRedocView

urlpatterns = [
    # Admin
    path('admin/', admin.site.urls),

    # API Documentation
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
    path('api/redoc/', SpectacularRedocView.as_view(url_name='schema'), name='redoc'),

    # API Endpoints - Users
    path('api/', include('apps.users.identity.urls')),
    path('api/', include('apps.users.lists.urls')),

    # API Endpoints - Reference data
    path('api/', include('apps.common.geography.urls')),

    # API Endpoints - Marketplace
    path('api/', include('apps.marketplace.tickets.urls')),
    path('api/', include('apps.marketplace.chats.urls')),
    path('api/', include('apps.marketplace.reviews.urls')),
    path('api/', include('apps.marketplace.appeals.urls')),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
