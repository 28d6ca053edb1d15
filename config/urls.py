"""
URL configuration for the Kitchen Procurement project.

API:
    /api/requests            - procurement requests (see apps.procurement.urls)
    /api/health              - liveness probe
    /api/schema/, /api/docs/ - OpenAPI schema and Swagger UI
Uploaded photos (local storage backend) are served from MEDIA_URL.
"""
from django.contrib import admin
from django.urls import path, include, re_path
from django.conf import settings
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

from config.views import health_check, uploaded_image

urlpatterns = [
    # Health check (for Render)
    path('api/health', health_check, name='health-check'),

    # Admin
    path('admin/', admin.site.urls),

    # API Documentation
    path('api/schema/', SpectacularAPIView.as_view(), name='api-schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='api-schema'), name='api-docs'),

    # API endpoints
    path('api/', include('apps.procurement.urls')),

    # Uploaded images must stay reachable outside DEBUG as well
    re_path(
        r'^%s(?P<path>.*)$' % settings.MEDIA_URL.lstrip('/'),
        uploaded_image,
        name='uploaded-image',
    ),
]

if settings.DEBUG:
    from django.conf.urls.static import static
    urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)


# Custom error handlers
handler404 = 'config.views.error_404'
handler500 = 'config.views.error_500'
