"""
Initial migration for Stockroom models.
"""

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):
    """Create Stockroom models: Product, Unit, Movement, MasterProduct."""

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Product',
            fields=[
                ('key', models.CharField(help_text='Store key. Normally the barcode itself.', max_length=64, primary_key=True, serialize=False, verbose_name='Key')),
                ('barcode', models.CharField(blank=True, db_index=True, max_length=64, null=True, verbose_name='Barcode')),
                ('name', models.CharField(max_length=200, verbose_name='Name')),
                ('brand', models.CharField(blank=True, default='', max_length=100, verbose_name='Brand')),
                ('category', models.CharField(blank=True, default='', max_length=100, verbose_name='Category')),
                ('sizes', models.CharField(blank=True, default='', max_length=100, verbose_name='Size')),
                ('material', models.CharField(blank=True, default='', max_length=100, verbose_name='Material')),
                ('colors', models.CharField(blank=True, default='', max_length=200, verbose_name='Colors')),
                ('match_key', models.CharField(db_index=True, default='', editable=False, max_length=600)),
                ('quantity', models.IntegerField(default=0, verbose_name='Quantity on hand')),
                ('price', models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True, verbose_name='Price')),
                ('buy_price', models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True, verbose_name='Buy price')),
                ('sell_price', models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True, verbose_name='Sell price')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('created_by_id', models.CharField(blank=True, default='', max_length=150)),
                ('created_by_label', models.CharField(blank=True, default='', max_length=150)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('updated_by_id', models.CharField(blank=True, default='', max_length=150)),
                ('updated_by_label', models.CharField(blank=True, default='', max_length=150)),
                ('metadata', models.JSONField(blank=True, default=dict)),
            ],
            options={
                'verbose_name': 'Product',
                'verbose_name_plural': 'Products',
                'ordering': ['name'],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('quantity__gte', 0)), name='stockroom_product_quantity_non_negative'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Unit',
            fields=[
                ('serial', models.CharField(max_length=64, primary_key=True, serialize=False, verbose_name='Serial')),
                ('status', models.CharField(choices=[('in', 'In stock'), ('out', 'Checked out')], db_index=True, default='in', max_length=8, verbose_name='Status')),
                ('last_moved_at', models.DateTimeField(blank=True, null=True, verbose_name='Last moved at')),
                ('last_moved_by_id', models.CharField(blank=True, default='', max_length=150)),
                ('last_moved_by_label', models.CharField(blank=True, default='', max_length=150)),
                ('moved_note', models.CharField(blank=True, default='', max_length=255)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='units', to='stockroom.product', verbose_name='Product')),
            ],
            options={
                'verbose_name': 'Unit',
                'verbose_name_plural': 'Units',
                'ordering': ['serial'],
            },
        ),
        migrations.CreateModel(
            name='Movement',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('type', models.CharField(choices=[('incoming', 'Incoming'), ('outgoing', 'Outgoing')], db_index=True, max_length=10, verbose_name='Type')),
                ('product_name', models.CharField(blank=True, default='', max_length=200)),
                ('barcode', models.CharField(blank=True, default='', max_length=64)),
                ('unit_serial', models.CharField(blank=True, db_index=True, max_length=64, null=True, verbose_name='Unit serial')),
                ('quantity', models.PositiveIntegerField(verbose_name='Quantity')),
                ('actor_id', models.CharField(blank=True, default='', max_length=150, verbose_name='Actor id')),
                ('actor_label', models.CharField(blank=True, default='', max_length=150, verbose_name='Handled by')),
                ('client_name', models.CharField(blank=True, max_length=200, null=True, verbose_name='Client')),
                ('client_address', models.CharField(blank=True, max_length=255, null=True, verbose_name='Client address')),
                ('supplier_name', models.CharField(blank=True, max_length=200, null=True, verbose_name='Supplier')),
                ('note', models.TextField(blank=True, null=True, verbose_name='Note')),
                ('metadata', models.JSONField(blank=True, default=dict)),
                ('timestamp', models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name='Date/Time')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='movements', to='stockroom.product', verbose_name='Product')),
            ],
            options={
                'verbose_name': 'Movement',
                'verbose_name_plural': 'Movements',
                'ordering': ['timestamp'],
                'indexes': [
                    models.Index(fields=['product', 'timestamp'], name='stockroom_mov_product_ts'),
                    models.Index(fields=['type', 'timestamp'], name='stockroom_mov_type_ts'),
                ],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('quantity__gt', 0)), name='stockroom_movement_quantity_positive'),
                ],
            },
        ),
        migrations.CreateModel(
            name='MasterProduct',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200, verbose_name='Name')),
                ('name_lower', models.CharField(db_index=True, editable=False, max_length=200)),
                ('category', models.CharField(blank=True, max_length=100, null=True, verbose_name='Category')),
                ('brand', models.CharField(blank=True, max_length=100, null=True, verbose_name='Brand')),
                ('sizes', models.JSONField(blank=True, default=list, verbose_name='Sizes')),
                ('material', models.CharField(blank=True, max_length=100, null=True, verbose_name='Material')),
                ('colors', models.CharField(blank=True, max_length=200, null=True, verbose_name='Colors')),
                ('aliases', models.JSONField(blank=True, default=list, help_text='Alternative spellings', verbose_name='Aliases')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('created_by_id', models.CharField(blank=True, default='', max_length=150)),
                ('created_by_label', models.CharField(blank=True, default='', max_length=150)),
            ],
            options={
                'verbose_name': 'Master product',
                'verbose_name_plural': 'Master products',
                'ordering': ['name_lower'],
            },
        ),
    ]
