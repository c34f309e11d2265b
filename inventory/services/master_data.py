"""
Item and vendor master data operations.

Views validate input with the serializers and call into here for the
queries and the writes, which are audited and announced through
:func:`inventory.services.events.publish_change`.
"""
from __future__ import annotations

from typing import Optional

from django.db import transaction
from django.db.models import Q
from rest_framework.exceptions import ValidationError

from core.services.audit import log_action
from inventory.models import Item, Vendor
from inventory.services.events import publish_change

ITEM = 'item'
VENDOR = 'vendor'


def filter_items(*, search: str = '', category: Optional[int] = None, is_active: Optional[bool] = None):
    qs = Item.objects.select_related('category', 'sub_category', 'default_location')
    if search:
        qs = qs.filter(Q(item_code__icontains=search) | Q(item_name__icontains=search))
    if category:
        qs = qs.filter(Q(category_id=category) | Q(sub_category_id=category))
    if is_active is not None:
        qs = qs.filter(is_active=is_active)
    return qs.order_by('item_code')


def filter_vendors(*, search: str = '', is_active: Optional[bool] = None):
    qs = Vendor.objects.all()
    if search:
        qs = qs.filter(
            Q(vendor_code__icontains=search) | Q(vendor_name__icontains=search)
            | Q(contact_person__icontains=search) | Q(email__icontains=search)
        )
    if is_active is not None:
        qs = qs.filter(is_active=is_active)
    return qs.order_by('vendor_code')


def _changed_fields(serializer) -> list[str]:
    return sorted(serializer.validated_data.keys())


def save_record(serializer, *, kind: str, user):
    """Create or update through ``serializer`` and audit the change."""
    creating = serializer.instance is None
    with transaction.atomic():
        if creating:
            obj = serializer.save(created_by=user)
        else:
            obj = serializer.save()
        action = f'{kind}_create' if creating else f'{kind}_update'
        log_action(user=user, action=action, object_type=kind, object_id=obj.pk,
                   detail={'fields': _changed_fields(serializer)})
    publish_change(kind, obj.pk, 'created' if creating else 'updated')
    return obj


def deactivate_record(obj, *, kind: str, reason: str, user):
    """Soft-deactivate ``obj``; the row and its history stay in place."""
    if not obj.is_active:
        raise ValidationError({'detail': f'{kind.capitalize()} is already inactive'})
    with transaction.atomic():
        obj.deactivate(reason=reason, by=user)
        log_action(user=user, action=f'{kind}_deactivate', object_type=kind, object_id=obj.pk,
                   detail={'reason': reason})
    publish_change(kind, obj.pk, 'deactivated')
    return obj
