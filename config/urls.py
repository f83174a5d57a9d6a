"""
URL configuration for the gifting storefront
JSON API for the storefront frontend plus the Django admin for staff.
"""

from django.contrib import admin
from django.urls import include, path

# ===============================================================================
# MAIN URL PATTERNS
# ===============================================================================

urlpatterns = [
    # Staff catalog and order management
    path("admin/", admin.site.urls),
    # Checkout and staff order API
    path("api/", include("apps.orders.urls")),
]
