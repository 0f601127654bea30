"""
URL configuration for the CardKeeper API.

All API endpoints live under /api/ and require a JWT access token,
except health checks, token endpoints and the schema.
"""
from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

from config.views import health_check, ready_check

urlpatterns = [
    # Health checks
    path('api/health/', health_check, name='health-check'),
    path('api/ready/', ready_check, name='ready-check'),

    # Admin
    path('admin/', admin.site.urls),

    # API Documentation
    path('api/schema/', SpectacularAPIView.as_view(), name='api-schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='api-schema'), name='api-docs'),

    # Authentication
    path('api/auth/', include('apps.accounts.urls')),

    # API endpoints
    path('api/', include('apps.sharing.urls')),
    path('api/gift-cards/', include('apps.giftcards.urls')),
    path('api/favorites/', include('apps.favorites.urls')),
]


# Custom error handlers
handler404 = 'config.views.error_404'
handler500 = 'config.views.error_500'
