"""
URL configuration for the FreightDesk project.

- ``/api/...``        REST API (bearer token)
- ``/web/...``        cookie-authenticated proxy used by the dashboard
- ``/login``, ``/dashboard/...``  server-rendered pages
"""
from django.contrib import admin
from django.urls import include, path, re_path
from django.views.generic import RedirectView
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView, SpectacularSwaggerView
from drf_yasg import openapi
from drf_yasg.views import get_schema_view
from rest_framework.routers import DefaultRouter

from forwarders.views import ForwarderViewSet
from invoices.views import InvoiceViewSet
from orders.views import OrderViewSet
from suppliers.views import SupplierViewSet

from .views import health


router = DefaultRouter()
# Optional slash; the constructor only takes True/False.
router.trailing_slash = '/?'
router.register(r'suppliers', SupplierViewSet, basename='supplier')
router.register(r'forwarders', ForwarderViewSet, basename='forwarder')
router.register(r'orders', OrderViewSet, basename='order')
router.register(r'invoices', InvoiceViewSet, basename='invoice')


schema_view = get_schema_view(
   openapi.Info(title="FreightDesk API", default_version='v1'),
   public=True,
)

urlpatterns = [
    path('', RedirectView.as_view(url='/dashboard', permanent=False), name='home'),
    path('admin/', admin.site.urls),
    re_path(r'^api/health/?$', health, name='health'),
    path('api/auth/', include('accounts.urls')),
    path('api/', include('invoices.urls')),
    path('api/', include(router.urls)),
    path('web/', include('web.urls')),
    path('', include('web.page_urls')),
    # API documentation
    path('swagger/', schema_view.with_ui('swagger', cache_timeout=0)),
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
    path('api/redoc/', SpectacularRedocView.as_view(url_name='schema'), name='redoc'),
]
