from django.contrib import admin

from .models import Item, ItemCategory, Location, StockBatch, Vendor


@admin.register(ItemCategory)
class ItemCategoryAdmin(admin.ModelAdmin):
    list_display = ("category_code", "category_name", "parent", "is_active")
    list_filter = ("is_active",)
    search_fields = ("category_code", "category_name")


@admin.register(Location)
class LocationAdmin(admin.ModelAdmin):
    list_display = ("location_code", "location_name", "location_type", "is_active")
    list_filter = ("location_type", "is_active")


@admin.register(Item)
class ItemAdmin(admin.ModelAdmin):
    list_display = ("item_code", "item_name", "category", "uom", "reorder_level", "is_active")
    list_filter = ("is_active", "category", "uom")
    search_fields = ("item_code", "item_name")
    readonly_fields = ("deactivated_at", "deactivated_by", "created_by", "created_at", "updated_at")


@admin.register(Vendor)
class VendorAdmin(admin.ModelAdmin):
    list_display = ("vendor_code", "vendor_name", "contact_person", "phone", "is_active")
    list_filter = ("is_active",)
    search_fields = ("vendor_code", "vendor_name", "contact_person", "email")
    readonly_fields = ("deactivated_at", "deactivated_by", "created_by", "created_at", "updated_at")


@admin.register(StockBatch)
class StockBatchAdmin(admin.ModelAdmin):
    list_display = ("item", "location", "batch_number", "quantity", "expiry_date")
    list_filter = ("location",)
    search_fields = ("item__item_code", "batch_number")
