# Generated manually for the vouchers app

import uuid
from decimal import Decimal
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Voucher',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('merchant_name', models.CharField(blank=True, max_length=200)),
                ('code', models.CharField(max_length=100)),
                ('voucher_type', models.CharField(choices=[('percentage', 'Percentage'), ('fixed_amount', 'Fixed amount'), ('points_multiplier', 'Points multiplier')], max_length=30)),
                ('value', models.DecimalField(decimal_places=2, max_digits=10, validators=[MinValueValidator(Decimal('0.00'))])),
                ('description', models.TextField(blank=True)),
                ('min_purchase_amount', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10)),
                ('valid_from', models.DateField()),
                ('valid_until', models.DateField()),
                ('usage_limit_type', models.CharField(choices=[('single_use', 'Single use'), ('one_per_customer', 'One per customer'), ('multiple_use_with_card', 'Multiple use with card'), ('multiple_use_without_card', 'Multiple use without card'), ('unlimited', 'Unlimited')], default='single_use', max_length=30)),
                ('barcode_type', models.CharField(default='CODE128', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('owner', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='vouchers', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'vouchers',
                'ordering': ['valid_until', '-created_at'],
                'indexes': [
                    models.Index(fields=['owner', 'created_at'], name='vouchers_owner_created_idx'),
                    models.Index(fields=['valid_until'], name='vouchers_valid_until_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='VoucherShare',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('can_edit', models.BooleanField(default=False)),
                ('can_delete', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('voucher', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='shares', to='vouchers.voucher')),
                ('shared_with', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='voucher_shares', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'voucher_shares',
                'ordering': ['created_at'],
                'indexes': [models.Index(fields=['shared_with', 'created_at'], name='voucher_shares_user_idx')],
                'constraints': [models.UniqueConstraint(fields=('voucher', 'shared_with'), name='unique_voucher_share')],
            },
        ),
    ]
