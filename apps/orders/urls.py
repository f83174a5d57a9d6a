"""
Order API URLs
Public checkout endpoints and staff order management.
"""

from django.urls import path

from . import views

app_name = 'orders'

urlpatterns = [
    # Checkout (public)
    path('orders/', views.create_order, name='create_order'),
    path('orders/quote/', views.quote_cart, name='quote_cart'),
    path('orders/<str:order_id>/handoff/', views.order_handoff, name='order_handoff'),

    # Order management (staff)
    path('admin/orders/', views.admin_order_list, name='admin_order_list'),
    path('admin/orders/<uuid:pk>/', views.admin_order_detail, name='admin_order_detail'),
]
