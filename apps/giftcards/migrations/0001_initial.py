# Generated manually for the giftcards app

import uuid
from decimal import Decimal
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import migrations, models
import django.db.models.deletion
import apps.giftcards.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='GiftCard',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('merchant_name', models.CharField(blank=True, max_length=200)),
                ('card_number', models.CharField(max_length=100)),
                ('pin', models.CharField(blank=True, max_length=50)),
                ('initial_balance', models.DecimalField(decimal_places=2, max_digits=10, validators=[MinValueValidator(Decimal('0.01'))])),
                ('current_balance', models.DecimalField(decimal_places=2, max_digits=10)),
                ('currency', models.CharField(default=apps.giftcards.models.default_currency, max_length=3)),
                ('expires_at', models.DateField(blank=True, null=True)),
                ('status', models.CharField(choices=[('active', 'Active'), ('expired', 'Expired'), ('archived', 'Archived')], default='active', max_length=20)),
                ('notes', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('owner', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='gift_cards', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'gift_cards',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['owner', 'created_at'], name='gift_cards_owner_created_idx'),
                    models.Index(fields=['status'], name='gift_cards_status_idx'),
                ],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('current_balance__gte', 0)), name='gift_card_balance_non_negative'),
                    models.CheckConstraint(condition=models.Q(('initial_balance__gt', 0)), name='gift_card_initial_balance_positive'),
                ],
            },
        ),
        migrations.CreateModel(
            name='GiftCardShare',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('can_edit', models.BooleanField(default=False)),
                ('can_delete', models.BooleanField(default=False)),
                ('can_edit_transactions', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('gift_card', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='shares', to='giftcards.giftcard')),
                ('shared_with', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='gift_card_shares', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'gift_card_shares',
                'ordering': ['created_at'],
                'indexes': [models.Index(fields=['shared_with', 'created_at'], name='gc_shares_user_created_idx')],
                'constraints': [models.UniqueConstraint(fields=('gift_card', 'shared_with'), name='unique_gift_card_share')],
            },
        ),
        migrations.CreateModel(
            name='GiftCardTransaction',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('amount', models.DecimalField(decimal_places=2, max_digits=10, validators=[MinValueValidator(Decimal('0.01'))])),
                ('description', models.TextField(blank=True)),
                ('transaction_date', models.DateTimeField()),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('deleted_at', models.DateTimeField(blank=True, null=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='gift_card_transactions', to=settings.AUTH_USER_MODEL)),
                ('gift_card', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='transactions', to='giftcards.giftcard')),
            ],
            options={
                'db_table': 'gift_card_transactions',
                'ordering': ['-transaction_date', '-created_at'],
                'indexes': [
                    models.Index(fields=['gift_card', 'deleted_at'], name='gc_txn_card_deleted_idx'),
                    models.Index(fields=['gift_card', 'transaction_date'], name='gc_txn_card_date_idx'),
                ],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('amount__gt', 0)), name='gift_card_transaction_amount_positive'),
                ],
            },
        ),
    ]
