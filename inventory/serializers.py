"""
Serializers for the inventory API.

Field names follow the frontend's camelCase forms.  Related master data
is written as a primary key and read back as a small nested object,
e.g. ``"category": 3`` in, ``"category": {"_id": 3, "categoryName": ...}``
out.
"""
from __future__ import annotations

import re

import bleach
from rest_framework import serializers
from rest_framework.validators import UniqueValidator

from .models import Item, ItemCategory, Location, Vendor

PAN_RE = re.compile(r'^[A-Z]{5}[0-9]{4}[A-Z]$')
GSTIN_RE = re.compile(r'^[0-9]{2}[A-Z0-9]{10}[0-9A-Z]Z[0-9A-Z]$')
IFSC_RE = re.compile(r'^[A-Z]{4}0[A-Z0-9]{6}$')


def clean_text(v: str) -> str:
    return bleach.clean((v or '').strip(), tags=[], strip=True)


def category_ref(c: ItemCategory | None):
    if c is None:
        return None
    return {'_id': c.id, 'id': c.id, 'categoryCode': c.category_code, 'categoryName': c.category_name}


def location_ref(loc: Location | None):
    if loc is None:
        return None
    return {'_id': loc.id, 'id': loc.id, 'locationCode': loc.location_code, 'locationName': loc.location_name}


class ItemCategorySerializer(serializers.ModelSerializer):
    categoryCode = serializers.CharField(
        source='category_code', max_length=32,
        validators=[UniqueValidator(queryset=ItemCategory.objects.all(), message='Category code already exists', lookup='iexact')],
    )
    categoryName = serializers.CharField(source='category_name', max_length=128)
    parent = serializers.PrimaryKeyRelatedField(
        queryset=ItemCategory.objects.filter(is_active=True), required=False, allow_null=True
    )
    isActive = serializers.BooleanField(source='is_active', read_only=True)

    class Meta:
        model = ItemCategory
        fields = ['id', 'categoryCode', 'categoryName', 'description', 'parent', 'isActive']

    def validate_categoryCode(self, v):
        return v.strip().upper()

    def validate_description(self, v):
        return clean_text(v)

    def to_representation(self, instance):
        data = super().to_representation(instance)
        data['_id'] = instance.id
        return data


class LocationSerializer(serializers.ModelSerializer):
    locationCode = serializers.CharField(
        source='location_code', max_length=32,
        validators=[UniqueValidator(queryset=Location.objects.all(), message='Location code already exists', lookup='iexact')],
    )
    locationName = serializers.CharField(source='location_name', max_length=128)
    locationType = serializers.ChoiceField(source='location_type', choices=Location.TYPE_CHOICES, required=False)
    isActive = serializers.BooleanField(source='is_active', read_only=True)

    class Meta:
        model = Location
        fields = ['id', 'locationCode', 'locationName', 'locationType', 'isActive']

    def validate_locationCode(self, v):
        return v.strip().upper()

    def to_representation(self, instance):
        data = super().to_representation(instance)
        data['_id'] = instance.id
        return data


class DeactivationInfoMixin(serializers.Serializer):
    isActive = serializers.BooleanField(source='is_active', read_only=True)
    status = serializers.CharField(read_only=True)
    deactivationReason = serializers.CharField(source='deactivation_reason', read_only=True)
    deactivatedAt = serializers.DateTimeField(source='deactivated_at', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)


class ItemSerializer(DeactivationInfoMixin, serializers.ModelSerializer):
    itemCode = serializers.CharField(
        source='item_code', max_length=32,
        validators=[UniqueValidator(queryset=Item.objects.all(), message='Item code already exists', lookup='iexact')],
    )
    itemName = serializers.CharField(source='item_name', max_length=255)
    description = serializers.CharField(required=False, allow_blank=True)
    category = serializers.PrimaryKeyRelatedField(queryset=ItemCategory.objects.filter(is_active=True))
    subCategory = serializers.PrimaryKeyRelatedField(
        source='sub_category', queryset=ItemCategory.objects.filter(is_active=True), required=False, allow_null=True
    )
    uom = serializers.ChoiceField(choices=Item.UOM_CHOICES, required=False)
    reorderLevel = serializers.IntegerField(source='reorder_level', min_value=0, required=False)
    maxStockLevel = serializers.IntegerField(source='max_stock_level', min_value=0, required=False)
    batchTracking = serializers.BooleanField(source='batch_tracking', required=False)
    expiryTracking = serializers.BooleanField(source='expiry_tracking', required=False)
    defaultLocation = serializers.PrimaryKeyRelatedField(
        source='default_location', queryset=Location.objects.filter(is_active=True), required=False, allow_null=True
    )
    specifications = serializers.DictField(child=serializers.CharField(allow_blank=True), required=False)

    class Meta:
        model = Item
        fields = [
            'id', 'itemCode', 'itemName', 'description', 'category', 'subCategory', 'uom',
            'reorderLevel', 'maxStockLevel', 'batchTracking', 'expiryTracking', 'defaultLocation',
            'specifications', 'isActive', 'status', 'deactivationReason', 'deactivatedAt',
            'createdAt', 'updatedAt',
        ]

    def validate_itemCode(self, v):
        v = v.strip().upper()
        if not v:
            raise serializers.ValidationError('Item Code is required')
        if self.instance is not None and v != self.instance.item_code:
            raise serializers.ValidationError('Item code cannot be changed')
        return v

    def validate_itemName(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('Item Name is required')
        return v

    def validate_description(self, v):
        return clean_text(v)

    def validate(self, attrs):
        def current(name, default=None):
            if name in attrs:
                return attrs[name]
            return getattr(self.instance, name, default) if self.instance is not None else default

        reorder = current('reorder_level', 10)
        max_level = current('max_stock_level', 100)
        if max_level < reorder:
            raise serializers.ValidationError({'maxStockLevel': ['Max stock level must be at least the reorder level']})

        category = current('category')
        sub = current('sub_category')
        if sub is not None and category is not None and sub.parent_id != category.id:
            raise serializers.ValidationError({'subCategory': ['Sub-category does not belong to the selected category']})
        return attrs

    def to_representation(self, instance):
        data = super().to_representation(instance)
        data['_id'] = instance.id
        data['category'] = category_ref(instance.category)
        data['subCategory'] = category_ref(instance.sub_category)
        data['defaultLocation'] = location_ref(instance.default_location)
        return data


class BankDetailsSerializer(serializers.Serializer):
    bankName = serializers.CharField(source='bank_name', required=False, allow_blank=True, max_length=128)
    accountNumber = serializers.CharField(source='bank_account_number', required=False, allow_blank=True, max_length=64)
    ifscCode = serializers.CharField(source='ifsc_code', required=False, allow_blank=True, max_length=16)

    def validate_accountNumber(self, v):
        v = (v or '').replace(' ', '')
        if v and not v.isdigit():
            raise serializers.ValidationError('Account number must contain digits only')
        return v

    def validate_ifscCode(self, v):
        v = (v or '').strip().upper()
        if v and not IFSC_RE.match(v):
            raise serializers.ValidationError('Invalid IFSC code')
        return v


class VendorSerializer(DeactivationInfoMixin, serializers.ModelSerializer):
    vendorCode = serializers.CharField(
        source='vendor_code', max_length=32,
        validators=[UniqueValidator(queryset=Vendor.objects.all(), message='Vendor code already exists', lookup='iexact')],
    )
    vendorName = serializers.CharField(source='vendor_name', max_length=255)
    contactPerson = serializers.CharField(source='contact_person', required=False, allow_blank=True, max_length=128)
    email = serializers.EmailField(required=False, allow_blank=True)
    phone = serializers.CharField(required=False, allow_blank=True, max_length=32)
    address = serializers.CharField(required=False, allow_blank=True)
    gstNumber = serializers.CharField(source='gst_number', required=False, allow_blank=True, max_length=32)
    panNumber = serializers.CharField(source='pan_number', required=False, allow_blank=True, max_length=16)
    bankDetails = BankDetailsSerializer(source='*', required=False)
    paymentTerms = serializers.IntegerField(source='payment_terms', min_value=0, max_value=365, required=False)
    notes = serializers.CharField(required=False, allow_blank=True)

    class Meta:
        model = Vendor
        fields = [
            'id', 'vendorCode', 'vendorName', 'contactPerson', 'email', 'phone', 'address',
            'gstNumber', 'panNumber', 'bankDetails', 'paymentTerms', 'notes',
            'isActive', 'status', 'deactivationReason', 'deactivatedAt', 'createdAt', 'updatedAt',
        ]

    def validate_vendorCode(self, v):
        v = v.strip().upper()
        if not v:
            raise serializers.ValidationError('Vendor Code is required')
        if self.instance is not None and v != self.instance.vendor_code:
            raise serializers.ValidationError('Vendor code cannot be changed')
        return v

    def validate_vendorName(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('Vendor Name is required')
        return v

    def validate_gstNumber(self, v):
        v = (v or '').strip().upper()
        if v and not GSTIN_RE.match(v):
            raise serializers.ValidationError('Invalid GST number')
        return v

    def validate_panNumber(self, v):
        v = (v or '').strip().upper()
        if v and not PAN_RE.match(v):
            raise serializers.ValidationError('Invalid PAN number')
        return v

    def validate_address(self, v):
        return clean_text(v)

    def validate_notes(self, v):
        return clean_text(v)

    def to_representation(self, instance):
        data = super().to_representation(instance)
        data['_id'] = instance.id
        return data


class DeactivateSerializer(serializers.Serializer):
    reason = serializers.CharField(max_length=500)

    def validate_reason(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('A reason for deactivation is required')
        return v
