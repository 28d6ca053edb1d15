# Generated manually for procurement app

import uuid
from django.db import migrations, models
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='ProcurementRequest',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('item_name_en', models.CharField(max_length=200)),
                ('item_name_zh', models.CharField(blank=True, default='', max_length=200)),
                ('category', models.CharField(choices=[('Equipment', 'Equipment'), ('Ingredient', 'Ingredient'), ('Consumable', 'Consumable'), ('Cleaning', 'Cleaning'), ('Other', 'Other')], default='Equipment', max_length=20)),
                ('quantity', models.CharField(blank=True, default='', max_length=100)),
                ('unit', models.CharField(blank=True, default='', max_length=50)),
                ('estimated_price', models.CharField(blank=True, default='', max_length=100)),
                ('supplier', models.CharField(blank=True, default='', max_length=200)),
                ('priority', models.CharField(choices=[('Low', 'Low'), ('High', 'High'), ('Urgent', 'Urgent')], default='Low', max_length=10)),
                ('date_needed', models.CharField(blank=True, default='', max_length=50)),
                ('requestor_name', models.CharField(max_length=200)),
                ('department', models.CharField(blank=True, default='', max_length=200)),
                ('comments', models.TextField(blank=True, default='')),
                ('image_path', models.CharField(blank=True, default='', max_length=500)),
                ('status', models.CharField(choices=[('Pending', 'Pending'), ('Done', 'Done'), ('Approved', 'Approved'), ('Ordered', 'Ordered'), ('Received', 'Received'), ('Cancelled', 'Cancelled')], default='Pending', max_length=20)),
                ('quote_obtained', models.BooleanField(default=False)),
                ('manager_approved', models.BooleanField(default=False)),
                ('order_placed', models.BooleanField(default=False)),
                ('payment_processed', models.BooleanField(default=False)),
                ('item_received', models.BooleanField(default=False)),
                ('invoice_filed', models.BooleanField(default=False)),
                ('purchaser_notes', models.TextField(blank=True, default='')),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ('updated_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('completed_at', models.DateTimeField(blank=True, null=True)),
            ],
            options={
                'db_table': 'procurement_requests',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['status'], name='procurement_status_idx'),
                    models.Index(fields=['priority'], name='procurement_priority_idx'),
                    models.Index(fields=['category'], name='procurement_category_idx'),
                    models.Index(fields=['created_at'], name='procurement_created_idx'),
                ],
            },
        ),
    ]
