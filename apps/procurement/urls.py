from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'procurement'

# Paths are served without a trailing slash: /api/requests, /api/requests/{id}
router = SimpleRouter(trailing_slash=False)
router.register(r'requests', views.ProcurementRequestViewSet, basename='request')

urlpatterns = [
    # Procurement request routes
    # GET    /api/requests        - List requests (status, priority, category, search)
    # POST   /api/requests        - Submit request (multipart with optional image)
    # GET    /api/requests/{id}   - Get request details
    # PATCH  /api/requests/{id}   - Update status / checklist / notes
    # DELETE /api/requests/{id}   - Delete request and its image

    # Include router URLs
    path('', include(router.urls)),
]
