from datetime import timedelta

from django.conf import settings
from django.core.cache import cache
from django.db.models import F, IntegerField, Sum, Value
from django.db.models.functions import Coalesce
from django.utils import timezone

from inventory.models import Item, StockBatch, Vendor
from inventory.services.events import DASHBOARD_CACHE_KEY


def low_stock_items():
    """Active items whose on-hand quantity is at or below the reorder level."""
    return (Item.objects.filter(is_active=True)
            .annotate(on_hand=Coalesce(Sum('batches__quantity'), Value(0), output_field=IntegerField()))
            .filter(on_hand__lte=F('reorder_level')))


def dashboard_stats(today=None) -> dict:
    today = today or timezone.localdate()
    horizon = today + timedelta(days=settings.INVENTORY_NEAR_EXPIRY_DAYS)
    live = StockBatch.objects.filter(quantity__gt=0, item__is_active=True)
    return {
        'totalItems': Item.objects.filter(is_active=True).count(),
        'activeVendors': Vendor.objects.filter(is_active=True).count(),
        'lowStockItems': low_stock_items().count(),
        'nearExpiryItems': live.filter(expiry_date__gte=today, expiry_date__lte=horizon)
                               .values('item_id').distinct().count(),
        'expiredItems': live.filter(expiry_date__lt=today).values('item_id').distinct().count(),
    }


def cached_dashboard_stats() -> dict:
    data = cache.get(DASHBOARD_CACHE_KEY)
    if data is None:
        data = dashboard_stats()
        cache.set(DASHBOARD_CACHE_KEY, data, settings.INVENTORY_DASHBOARD_CACHE_SECONDS)
    return data
