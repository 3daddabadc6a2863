# Generated manually for the payments app

import uuid
from decimal import Decimal
from django.core.validators import MinValueValidator
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('ledger', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Payment',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('type', models.CharField(choices=[('receive', 'Received'), ('payment_out', 'Payment out'), ('balance_add', 'Balance added'), ('balance_deduct', 'Balance deducted')], max_length=20)),
                ('amount', models.DecimalField(decimal_places=2, max_digits=14, validators=[MinValueValidator(Decimal('0.01'))])),
                ('payment_no', models.CharField(blank=True, max_length=30)),
                ('payment_date', models.DateField()),
                ('description', models.TextField(blank=True)),
                ('account_month', models.CharField(blank=True, max_length=7)),
                ('balance_after', models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('car', models.ForeignKey(blank=True, db_constraint=False, null=True, on_delete=django.db.models.deletion.DO_NOTHING, related_name='payments', to='ledger.car')),
                ('customer', models.ForeignKey(blank=True, db_constraint=False, null=True, on_delete=django.db.models.deletion.DO_NOTHING, related_name='payments', to='ledger.customer')),
                ('employee', models.ForeignKey(blank=True, db_constraint=False, null=True, on_delete=django.db.models.deletion.DO_NOTHING, related_name='payments', to='ledger.employee')),
            ],
            options={
                'db_table': 'payments',
                'ordering': ['-payment_date', '-created_at'],
                'indexes': [
                    models.Index(fields=['type', 'payment_date'], name='payments_type_date_idx'),
                    models.Index(fields=['payment_no'], name='payments_payment_no_idx'),
                ],
                'constraints': [
                    models.CheckConstraint(
                        condition=(
                            models.Q(customer__isnull=False, employee__isnull=True, car__isnull=True)
                            | models.Q(customer__isnull=True, employee__isnull=False, car__isnull=True)
                            | models.Q(customer__isnull=True, employee__isnull=True, car__isnull=False)
                        ),
                        name='payments_single_beneficiary',
                    ),
                ],
            },
        ),
    ]
