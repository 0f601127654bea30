# Generated manually for the favorites app

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
            name='UserFavorite',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('resource_type', models.CharField(choices=[('card', 'Card'), ('voucher', 'Voucher'), ('gift_card', 'Gift card')], max_length=20)),
                ('resource_id', models.UUIDField()),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('deleted_at', models.DateTimeField(blank=True, null=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='favorites', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'user_favorites',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['user', 'resource_type', 'deleted_at'], name='user_favorites_lookup_idx')],
                'constraints': [models.UniqueConstraint(fields=('user', 'resource_type', 'resource_id'), name='unique_user_favorite')],
            },
        ),
    ]
