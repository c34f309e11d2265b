"""
URL mappings for the inventory API, mounted under ``api/v1/inventory/``.
"""
from django.urls import path

from . import views


urlpatterns = [
    path('dashboard', views.dashboard, name='inventory_dashboard'),
    # Item master
    path('items', views.items, name='inventory_items'),
    path('items/<int:pk>', views.item_detail, name='inventory_item_detail'),
    path('items/<int:pk>/deactivate', views.item_deactivate, name='inventory_item_deactivate'),
    path('items/<int:pk>/audit', views.item_audit, name='inventory_item_audit'),
    # Vendors
    path('vendors', views.vendors, name='inventory_vendors'),
    path('vendors/<int:pk>', views.vendor_detail, name='inventory_vendor_detail'),
    path('vendors/<int:pk>/deactivate', views.vendor_deactivate, name='inventory_vendor_deactivate'),
    # Lookups
    path('categories', views.categories, name='inventory_categories'),
    path('locations', views.locations, name='inventory_locations'),
]
