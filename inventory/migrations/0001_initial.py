import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='ItemCategory',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('category_code', models.CharField(max_length=32, unique=True)),
                ('category_name', models.CharField(max_length=128)),
                ('description', models.TextField(blank=True)),
                ('is_active', models.BooleanField(default=True)),
                ('parent', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='children', to='inventory.itemcategory')),
            ],
            options={
                'verbose_name_plural': 'item categories',
                'ordering': ['category_name'],
            },
        ),
        migrations.CreateModel(
            name='Location',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('location_code', models.CharField(max_length=32, unique=True)),
                ('location_name', models.CharField(max_length=128)),
                ('location_type', models.CharField(choices=[('store', 'Store'), ('ward', 'Ward'), ('department', 'Department'), ('other', 'Other')], default='store', max_length=16)),
                ('is_active', models.BooleanField(default=True)),
            ],
            options={
                'ordering': ['location_name'],
            },
        ),
        migrations.CreateModel(
            name='Item',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('is_active', models.BooleanField(db_index=True, default=True)),
                ('status', models.CharField(choices=[('active', 'active'), ('inactive', 'inactive')], default='active', max_length=16)),
                ('deactivation_reason', models.TextField(blank=True)),
                ('deactivated_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('item_code', models.CharField(max_length=32, unique=True)),
                ('item_name', models.CharField(db_index=True, max_length=255)),
                ('description', models.TextField(blank=True)),
                ('uom', models.CharField(choices=[('Piece', 'Piece'), ('Box', 'Box'), ('Pack', 'Pack'), ('Carton', 'Carton'), ('Kg', 'Kg'), ('Gram', 'Gram'), ('Liter', 'Liter'), ('ML', 'ML'), ('Meter', 'Meter'), ('Roll', 'Roll'), ('Sheet', 'Sheet'), ('Set', 'Set'), ('Pair', 'Pair'), ('Dozen', 'Dozen'), ('Unit', 'Unit')], default='Piece', max_length=16)),
                ('reorder_level', models.PositiveIntegerField(default=10, validators=[django.core.validators.MinValueValidator(0)])),
                ('max_stock_level', models.PositiveIntegerField(default=100, validators=[django.core.validators.MinValueValidator(0)])),
                ('batch_tracking', models.BooleanField(default=False)),
                ('expiry_tracking', models.BooleanField(default=False)),
                ('specifications', models.JSONField(blank=True, default=dict)),
                ('category', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='items', to='inventory.itemcategory')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('deactivated_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('default_location', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='default_items', to='inventory.location')),
                ('sub_category', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='sub_items', to='inventory.itemcategory')),
            ],
            options={
                'ordering': ['item_code'],
            },
        ),
        migrations.CreateModel(
            name='Vendor',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('is_active', models.BooleanField(db_index=True, default=True)),
                ('status', models.CharField(choices=[('active', 'active'), ('inactive', 'inactive')], default='active', max_length=16)),
                ('deactivation_reason', models.TextField(blank=True)),
                ('deactivated_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('vendor_code', models.CharField(max_length=32, unique=True)),
                ('vendor_name', models.CharField(db_index=True, max_length=255)),
                ('contact_person', models.CharField(blank=True, max_length=128)),
                ('email', models.EmailField(blank=True, max_length=254)),
                ('phone', models.CharField(blank=True, max_length=32)),
                ('address', models.TextField(blank=True)),
                ('gst_number', models.CharField(blank=True, max_length=32)),
                ('pan_number', models.CharField(blank=True, max_length=16)),
                ('bank_name', models.CharField(blank=True, max_length=128)),
                ('bank_account_number', models.CharField(blank=True, max_length=64)),
                ('ifsc_code', models.CharField(blank=True, max_length=16)),
                ('payment_terms', models.PositiveIntegerField(default=30, help_text='Payment terms in days')),
                ('notes', models.TextField(blank=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('deactivated_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['vendor_code'],
            },
        ),
        migrations.CreateModel(
            name='StockBatch',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('batch_number', models.CharField(blank=True, max_length=64)),
                ('quantity', models.PositiveIntegerField(default=0)),
                ('expiry_date', models.DateField(blank=True, db_index=True, null=True)),
                ('received_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('item', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='batches', to='inventory.item')),
                ('location', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='batches', to='inventory.location')),
            ],
            options={
                'indexes': [models.Index(fields=['item', 'location'], name='inventory_s_item_id_5b1c2e_idx')],
            },
        ),
    ]
