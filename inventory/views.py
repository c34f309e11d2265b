"""
Inventory API views.

Endpoints back the inventory dashboard, item master and vendor pages.
Every signed-in staff member can read; only administrators and
inventory managers can create, edit or deactivate.  Lists answer with
``{"success", "data", "pagination"}``; single objects with
``{"success", "data"}``.
"""
from __future__ import annotations

from django.shortcuts import get_object_or_404
from rest_framework import serializers, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from core.pagination import ListQuerySerializer, paginate
from core.permissions import IsInventoryManagerOrReadOnly
from core.services.audit import events_for, format_event

from .models import Item, ItemCategory, Location, Vendor
from .serializers import (
    DeactivateSerializer,
    ItemCategorySerializer,
    ItemSerializer,
    LocationSerializer,
    VendorSerializer,
)
from .services.dashboard import cached_dashboard_stats
from .services.master_data import ITEM, VENDOR, deactivate_record, filter_items, filter_vendors, save_record


class ItemListQuerySerializer(ListQuerySerializer):
    category = serializers.IntegerField(required=False, allow_null=True, min_value=1)


def _ok(data, *, code=status.HTTP_200_OK, **extra):
    return Response({'success': True, 'data': data, **extra}, status=code)


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------
@api_view(['GET'])
@permission_classes([IsInventoryManagerOrReadOnly])
def dashboard(request):
    """Headline counters for the inventory dashboard (cached briefly)."""
    return _ok(cached_dashboard_stats())


# ---------------------------------------------------------------------------
# Items
# ---------------------------------------------------------------------------
@api_view(['GET', 'POST'])
@permission_classes([IsInventoryManagerOrReadOnly])
def items(request):
    """List items (paged, searchable, filterable) or create one.

    Query params for ``GET``:
      - page, limit
      - search: matches item code or name
      - category: category or sub-category id
      - isActive: true|false
    """
    if request.method == 'GET':
        q = ItemListQuerySerializer(data=request.query_params)
        q.is_valid(raise_exception=True)
        vd = q.validated_data
        qs = filter_items(search=vd['search'].strip(), category=vd.get('category'), is_active=vd['isActive'])
        rows, meta = paginate(qs, page=vd['page'], limit=vd['limit'])
        return _ok(ItemSerializer(rows, many=True).data, pagination=meta)

    s = ItemSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    item = save_record(s, kind=ITEM, user=request.user)
    return _ok(ItemSerializer(item).data, code=status.HTTP_201_CREATED, message='Item created')


@api_view(['GET', 'PUT', 'PATCH'])
@permission_classes([IsInventoryManagerOrReadOnly])
def item_detail(request, pk: int):
    item = get_object_or_404(Item.objects.select_related('category', 'sub_category', 'default_location'), pk=pk)
    if request.method == 'GET':
        return _ok(ItemSerializer(item).data)

    s = ItemSerializer(item, data=request.data, partial=request.method == 'PATCH')
    s.is_valid(raise_exception=True)
    item = save_record(s, kind=ITEM, user=request.user)
    return _ok(ItemSerializer(item).data, message='Item updated')


@api_view(['POST'])
@permission_classes([IsInventoryManagerOrReadOnly])
def item_deactivate(request, pk: int):
    """Mark an item inactive; ``reason`` is mandatory."""
    item = get_object_or_404(Item, pk=pk)
    s = DeactivateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    deactivate_record(item, kind=ITEM, reason=s.validated_data['reason'], user=request.user)
    return _ok(ItemSerializer(item).data, message='Item deactivated')


@api_view(['GET'])
@permission_classes([IsInventoryManagerOrReadOnly])
def item_audit(request, pk: int):
    item = get_object_or_404(Item, pk=pk)
    return _ok([format_event(ev) for ev in events_for(ITEM, item.pk)])


# ---------------------------------------------------------------------------
# Vendors
# ---------------------------------------------------------------------------
@api_view(['GET', 'POST'])
@permission_classes([IsInventoryManagerOrReadOnly])
def vendors(request):
    """List vendors (paged, searchable, ``isActive`` filter) or create one."""
    if request.method == 'GET':
        q = ListQuerySerializer(data=request.query_params)
        q.is_valid(raise_exception=True)
        vd = q.validated_data
        qs = filter_vendors(search=vd['search'].strip(), is_active=vd['isActive'])
        rows, meta = paginate(qs, page=vd['page'], limit=vd['limit'])
        return _ok(VendorSerializer(rows, many=True).data, pagination=meta)

    s = VendorSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vendor = save_record(s, kind=VENDOR, user=request.user)
    return _ok(VendorSerializer(vendor).data, code=status.HTTP_201_CREATED, message='Vendor created')


@api_view(['GET', 'PUT', 'PATCH'])
@permission_classes([IsInventoryManagerOrReadOnly])
def vendor_detail(request, pk: int):
    vendor = get_object_or_404(Vendor, pk=pk)
    if request.method == 'GET':
        return _ok(VendorSerializer(vendor).data)

    s = VendorSerializer(vendor, data=request.data, partial=request.method == 'PATCH')
    s.is_valid(raise_exception=True)
    vendor = save_record(s, kind=VENDOR, user=request.user)
    return _ok(VendorSerializer(vendor).data, message='Vendor updated')


@api_view(['POST'])
@permission_classes([IsInventoryManagerOrReadOnly])
def vendor_deactivate(request, pk: int):
    vendor = get_object_or_404(Vendor, pk=pk)
    s = DeactivateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    deactivate_record(vendor, kind=VENDOR, reason=s.validated_data['reason'], user=request.user)
    return _ok(VendorSerializer(vendor).data, message='Vendor deactivated')


# ---------------------------------------------------------------------------
# Lookups used by the item form
# ---------------------------------------------------------------------------
@api_view(['GET', 'POST'])
@permission_classes([IsInventoryManagerOrReadOnly])
def categories(request):
    if request.method == 'GET':
        qs = ItemCategory.objects.filter(is_active=True)
        if request.query_params.get('topLevel') in ('1', 'true'):
            qs = qs.filter(parent__isnull=True)
        return _ok(ItemCategorySerializer(qs, many=True).data)
    s = ItemCategorySerializer(data=request.data)
    s.is_valid(raise_exception=True)
    return _ok(ItemCategorySerializer(s.save()).data, code=status.HTTP_201_CREATED)


@api_view(['GET', 'POST'])
@permission_classes([IsInventoryManagerOrReadOnly])
def locations(request):
    if request.method == 'GET':
        return _ok(LocationSerializer(Location.objects.filter(is_active=True), many=True).data)
    s = LocationSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    return _ok(LocationSerializer(s.save()).data, code=status.HTTP_201_CREATED)
