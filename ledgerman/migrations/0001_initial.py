"""
Initial migration for Ledgerman models.
"""

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


PROVIDER_CHOICES = [
    ('NAVER', 'Naver Smart Store'),
    ('COUPANG', 'Coupang'),
    ('ELEVENST', '11st'),
    ('KREAM', 'KREAM'),
    ('ETC', 'Other'),
]


class Migration(migrations.Migration):
    """Create Ledgerman models: catalog, ledger, channel sync, warehouses."""

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Category',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100, verbose_name='Name')),
                ('sort_order', models.IntegerField(default=0, verbose_name='Sort order')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='ledger_categories', to=settings.AUTH_USER_MODEL, verbose_name='User')),
            ],
            options={
                'verbose_name': 'Category',
                'verbose_name_plural': 'Categories',
                'ordering': ['sort_order', 'id'],
                'indexes': [models.Index(fields=['user', 'sort_order'], name='ledger_cat_user_sort_idx')],
                'constraints': [models.UniqueConstraint(fields=('user', 'name'), name='unique_category_name_per_user')],
            },
        ),
        migrations.CreateModel(
            name='Warehouse',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100, verbose_name='Name')),
                ('location', models.CharField(blank=True, default='', max_length=200, verbose_name='Location')),
                ('description', models.TextField(blank=True, default='', verbose_name='Description')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='ledger_warehouses', to=settings.AUTH_USER_MODEL, verbose_name='User')),
            ],
            options={
                'verbose_name': 'Warehouse',
                'verbose_name_plural': 'Warehouses',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Item',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200, verbose_name='Name')),
                ('size', models.CharField(blank=True, default='', max_length=100, verbose_name='Size / variant')),
                ('image_url', models.URLField(blank=True, default='', max_length=500, verbose_name='Image')),
                ('barcode', models.CharField(blank=True, max_length=64, null=True, verbose_name='Barcode')),
                ('sku', models.CharField(blank=True, max_length=64, null=True, verbose_name='SKU')),
                ('memo', models.TextField(blank=True, default='', verbose_name='Memo')),
                ('low_stock_alert', models.BooleanField(default=False, verbose_name='Low stock alert')),
                ('low_stock_threshold', models.PositiveIntegerField(blank=True, help_text='Alert when stock is at or below this value', null=True, verbose_name='Low stock threshold')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('category', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='items', to='ledgerman.category', verbose_name='Category')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='ledger_items', to=settings.AUTH_USER_MODEL, verbose_name='User')),
            ],
            options={
                'verbose_name': 'Item',
                'verbose_name_plural': 'Items',
                'ordering': ['id'],
                'indexes': [models.Index(fields=['user', 'category'], name='ledger_item_user_cat_idx')],
                'constraints': [
                    models.UniqueConstraint(fields=('user', 'barcode'), name='unique_item_barcode_per_user'),
                    models.UniqueConstraint(fields=('user', 'sku'), name='unique_item_sku_per_user'),
                ],
            },
        ),
        migrations.CreateModel(
            name='ChannelListing',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('provider', models.CharField(choices=PROVIDER_CHOICES, max_length=10, verbose_name='Channel')),
                ('channel_product_id', models.CharField(blank=True, max_length=100, null=True)),
                ('channel_option_id', models.CharField(blank=True, max_length=100, null=True)),
                ('external_sku', models.CharField(blank=True, max_length=100, null=True)),
                ('is_active', models.BooleanField(default=True, verbose_name='Active')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('item', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='listings', to='ledgerman.item', verbose_name='Item')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='User')),
            ],
            options={
                'verbose_name': 'Channel Listing',
                'verbose_name_plural': 'Channel Listings',
                'ordering': ['id'],
                'constraints': [models.UniqueConstraint(fields=('user', 'provider', 'item'), name='unique_listing_per_channel_item')],
            },
        ),
        migrations.CreateModel(
            name='InventoryPolicy',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('mode', models.CharField(choices=[('NORMAL', 'Normal'), ('EXCLUSIVE', 'Exclusive')], default='NORMAL', max_length=10, verbose_name='Mode')),
                ('buffer', models.PositiveIntegerField(default=1, help_text='Units held back from every channel in NORMAL mode', verbose_name='Buffer')),
                ('min_visible', models.PositiveIntegerField(default=1, help_text='Floor published while any stock remains', verbose_name='Minimum visible')),
                ('exclusive_provider', models.CharField(blank=True, choices=PROVIDER_CHOICES, help_text='Only used in EXCLUSIVE mode', max_length=10, null=True, verbose_name='Exclusive channel')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('item', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='inventory_policy', to='ledgerman.item', verbose_name='Item')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='User')),
            ],
            options={
                'verbose_name': 'Inventory Policy',
                'verbose_name_plural': 'Inventory Policies',
            },
        ),
        migrations.CreateModel(
            name='Movement',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('type', models.CharField(choices=[('IN', 'In'), ('OUT', 'Out'), ('PURCHASE', 'Purchase')], db_index=True, max_length=10, verbose_name='Type')),
                ('count', models.PositiveIntegerField(default=1, verbose_name='Quantity')),
                ('price', models.PositiveIntegerField(blank=True, help_text='Empty for IN. Required for PURCHASE.', null=True, verbose_name='Unit price')),
                ('date', models.DateField(db_index=True, default=django.utils.timezone.localdate, verbose_name='Date')),
                ('memo', models.TextField(blank=True, default='', verbose_name='Memo')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('fulfills', models.ForeignKey(blank=True, limit_choices_to={'type': 'PURCHASE'}, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='arrivals', to='ledgerman.movement', verbose_name='Fulfills purchase')),
                ('item', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='movements', to='ledgerman.item', verbose_name='Item')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='ledger_movements', to=settings.AUTH_USER_MODEL, verbose_name='User')),
                ('warehouse', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='movements', to='ledgerman.warehouse', verbose_name='Warehouse')),
            ],
            options={
                'verbose_name': 'Movement',
                'verbose_name_plural': 'Movements',
                'ordering': ['date', 'id'],
                'indexes': [
                    models.Index(fields=['user', 'item', 'type'], name='ledger_mov_user_item_type_idx'),
                    models.Index(fields=['fulfills', 'type'], name='ledger_mov_fulfills_type_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='StockAudit',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('expected_quantity', models.PositiveIntegerField(verbose_name='Expected')),
                ('actual_quantity', models.PositiveIntegerField(verbose_name='Counted')),
                ('difference', models.IntegerField(verbose_name='Difference')),
                ('notes', models.TextField(blank=True, default='', verbose_name='Notes')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('item', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='audits', to='ledgerman.item', verbose_name='Item')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('warehouse', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='audits', to='ledgerman.warehouse', verbose_name='Warehouse')),
            ],
            options={
                'verbose_name': 'Stock Audit',
                'verbose_name_plural': 'Stock Audits',
                'ordering': ['-created_at', '-id'],
            },
        ),
        migrations.CreateModel(
            name='StockTransfer',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('quantity', models.PositiveIntegerField(verbose_name='Quantity')),
                ('reason', models.CharField(blank=True, default='', max_length=255, verbose_name='Reason')),
                ('status', models.CharField(default='COMPLETED', max_length=20, verbose_name='Status')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('from_warehouse', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='transfers_out', to='ledgerman.warehouse', verbose_name='From')),
                ('item', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='transfers', to='ledgerman.item', verbose_name='Item')),
                ('to_warehouse', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='transfers_in', to='ledgerman.warehouse', verbose_name='To')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='+', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Stock Transfer',
                'verbose_name_plural': 'Stock Transfers',
                'ordering': ['-created_at', '-id'],
            },
        ),
        migrations.CreateModel(
            name='SyncJob',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('provider', models.CharField(choices=PROVIDER_CHOICES, max_length=10, verbose_name='Channel')),
                ('target_qty', models.IntegerField(verbose_name='Target quantity')),
                ('status', models.CharField(choices=[('PENDING', 'Pending'), ('RUNNING', 'Running'), ('SUCCEEDED', 'Succeeded'), ('FAILED', 'Failed')], db_index=True, default='PENDING', max_length=10, verbose_name='Status')),
                ('attempts', models.PositiveIntegerField(default=0, verbose_name='Attempts')),
                ('last_error', models.TextField(blank=True, null=True, verbose_name='Last error')),
                ('next_run_at', models.DateTimeField(default=django.utils.timezone.now, verbose_name='Next run')),
                ('locked_at', models.DateTimeField(blank=True, null=True, verbose_name='Locked at')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('item', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='sync_jobs', to='ledgerman.item', verbose_name='Item')),
                ('listing', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='sync_jobs', to='ledgerman.channellisting', verbose_name='Listing')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='User')),
            ],
            options={
                'verbose_name': 'Sync Job',
                'verbose_name_plural': 'Sync Jobs',
                'indexes': [
                    models.Index(fields=['status', 'next_run_at'], name='ledger_job_status_due_idx'),
                    models.Index(fields=['user', 'status', 'next_run_at'], name='ledger_job_user_status_due_idx'),
                ],
                'constraints': [models.UniqueConstraint(fields=('user', 'provider', 'item'), name='unique_sync_job_per_channel_item')],
            },
        ),
    ]
