"""
Inventory master data for non-medicine stock.

Items and vendors are never deleted: deactivation flips ``is_active``,
sets ``status`` to ``inactive`` and records who did it and why, so
historical documents keep pointing at valid rows.
"""
from __future__ import annotations

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone


class DeactivatableModel(models.Model):
    STATUS_ACTIVE = 'active'
    STATUS_INACTIVE = 'inactive'
    STATUS_CHOICES = ((STATUS_ACTIVE, 'active'), (STATUS_INACTIVE, 'inactive'))

    is_active = models.BooleanField(default=True, db_index=True)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_ACTIVE)
    deactivation_reason = models.TextField(blank=True)
    deactivated_at = models.DateTimeField(null=True, blank=True)
    deactivated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, null=True, blank=True, on_delete=models.SET_NULL, related_name='+'
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, null=True, blank=True, on_delete=models.SET_NULL, related_name='+'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True

    def deactivate(self, *, reason: str, by=None) -> None:
        self.is_active = False
        self.status = self.STATUS_INACTIVE
        self.deactivation_reason = reason
        self.deactivated_at = timezone.now()
        self.deactivated_by = by
        self.save(update_fields=['is_active', 'status', 'deactivation_reason',
                                 'deactivated_at', 'deactivated_by', 'updated_at'])


class ItemCategory(models.Model):
    """Item category; a category with a ``parent`` is a sub-category."""
    category_code = models.CharField(max_length=32, unique=True)
    category_name = models.CharField(max_length=128)
    description = models.TextField(blank=True)
    parent = models.ForeignKey('self', null=True, blank=True, on_delete=models.PROTECT, related_name='children')
    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ['category_name']
        verbose_name_plural = 'item categories'

    def __str__(self) -> str:
        return f"{self.category_name} ({self.category_code})"


class Location(models.Model):
    TYPE_CHOICES = [
        ('store', 'Store'),
        ('ward', 'Ward'),
        ('department', 'Department'),
        ('other', 'Other'),
    ]
    location_code = models.CharField(max_length=32, unique=True)
    location_name = models.CharField(max_length=128)
    location_type = models.CharField(max_length=16, choices=TYPE_CHOICES, default='store')
    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ['location_name']

    def __str__(self) -> str:
        return f"{self.location_name} ({self.location_code})"


class Item(DeactivatableModel):
    UOM_CHOICES = [(u, u) for u in (
        'Piece', 'Box', 'Pack', 'Carton', 'Kg', 'Gram', 'Liter', 'ML',
        'Meter', 'Roll', 'Sheet', 'Set', 'Pair', 'Dozen', 'Unit',
    )]

    item_code = models.CharField(max_length=32, unique=True)
    item_name = models.CharField(max_length=255, db_index=True)
    description = models.TextField(blank=True)
    category = models.ForeignKey(ItemCategory, on_delete=models.PROTECT, related_name='items')
    sub_category = models.ForeignKey(
        ItemCategory, null=True, blank=True, on_delete=models.PROTECT, related_name='sub_items'
    )
    uom = models.CharField(max_length=16, choices=UOM_CHOICES, default='Piece')
    reorder_level = models.PositiveIntegerField(default=10, validators=[MinValueValidator(0)])
    max_stock_level = models.PositiveIntegerField(default=100, validators=[MinValueValidator(0)])
    batch_tracking = models.BooleanField(default=False)
    expiry_tracking = models.BooleanField(default=False)
    default_location = models.ForeignKey(
        Location, null=True, blank=True, on_delete=models.SET_NULL, related_name='default_items'
    )
    specifications = models.JSONField(default=dict, blank=True)

    class Meta:
        ordering = ['item_code']

    def __str__(self) -> str:
        return f"{self.item_code} {self.item_name}"


class Vendor(DeactivatableModel):
    vendor_code = models.CharField(max_length=32, unique=True)
    vendor_name = models.CharField(max_length=255, db_index=True)
    contact_person = models.CharField(max_length=128, blank=True)
    email = models.EmailField(blank=True)
    phone = models.CharField(max_length=32, blank=True)
    address = models.TextField(blank=True)
    gst_number = models.CharField(max_length=32, blank=True)
    pan_number = models.CharField(max_length=16, blank=True)
    bank_name = models.CharField(max_length=128, blank=True)
    bank_account_number = models.CharField(max_length=64, blank=True)
    ifsc_code = models.CharField(max_length=16, blank=True)
    payment_terms = models.PositiveIntegerField(default=30, help_text="Payment terms in days")
    notes = models.TextField(blank=True)

    class Meta:
        ordering = ['vendor_code']

    def __str__(self) -> str:
        return f"{self.vendor_code} {self.vendor_name}"


class StockBatch(models.Model):
    """Quantity of an item held at a location, per batch."""
    item = models.ForeignKey(Item, on_delete=models.CASCADE, related_name='batches')
    location = models.ForeignKey(Location, on_delete=models.PROTECT, related_name='batches')
    batch_number = models.CharField(max_length=64, blank=True)
    quantity = models.PositiveIntegerField(default=0)
    expiry_date = models.DateField(null=True, blank=True, db_index=True)
    received_at = models.DateTimeField(default=timezone.now)

    class Meta:
        indexes = [models.Index(fields=['item', 'location'], name='inventory_s_item_id_5b1c2e_idx')]

    def __str__(self) -> str:
        return f"{self.item.item_code} #{self.batch_number or '-'} x{self.quantity} @ {self.location.location_code}"
