# Generated manually for the cards app

import uuid
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Card',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('merchant_name', models.CharField(blank=True, max_length=200)),
                ('program', models.CharField(max_length=200)),
                ('card_number', models.CharField(max_length=100)),
                ('barcode_type', models.CharField(choices=[('CODE128', 'Code 128'), ('EAN13', 'EAN-13'), ('QR', 'QR code')], default='CODE128', max_length=20)),
                ('status', models.CharField(default='active', max_length=20)),
                ('notes', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('owner', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='cards', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'cards',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['owner', 'created_at'], name='cards_owner_created_idx')],
            },
        ),
        migrations.CreateModel(
            name='CardShare',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('can_edit', models.BooleanField(default=False)),
                ('can_delete', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('card', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='shares', to='cards.card')),
                ('shared_with', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='card_shares', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'card_shares',
                'ordering': ['created_at'],
                'indexes': [models.Index(fields=['shared_with', 'created_at'], name='card_shares_user_created_idx')],
                'constraints': [models.UniqueConstraint(fields=('card', 'shared_with'), name='unique_card_share')],
            },
        ),
    ]
