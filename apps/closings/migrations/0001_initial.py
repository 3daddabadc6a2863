# Generated manually for the closings app

import uuid
from decimal import Decimal
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('ledger', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='MonthClosing',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('account_month', models.CharField(max_length=7, unique=True)),
                ('total_balance', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=14)),
                ('total_left', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=14)),
                ('car_payments', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=14)),
                ('profit', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=14)),
                ('cars_count', models.PositiveIntegerField(default=0)),
                ('customers_count', models.PositiveIntegerField(default=0)),
                ('closed_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'month_closings',
                'ordering': ['-account_month'],
            },
        ),
        migrations.CreateModel(
            name='CarClosing',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('car_name', models.CharField(max_length=100)),
                ('balance', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=14)),
                ('left', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=14)),
                ('payments', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=14)),
                ('car', models.ForeignKey(blank=True, db_constraint=False, null=True, on_delete=django.db.models.deletion.DO_NOTHING, related_name='closings', to='ledger.car')),
                ('closing', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='cars', to='closings.monthclosing')),
            ],
            options={
                'db_table': 'month_closing_cars',
                'ordering': ['car_name'],
                'constraints': [
                    models.UniqueConstraint(fields=('closing', 'car'), name='month_closing_cars_unique_car'),
                ],
            },
        ),
    ]
