"""
Add ChannelConnection: per-user credentials for each sales channel.
"""

import django.db.models.deletion
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

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('ledgerman', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='ChannelConnection',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('provider', models.CharField(choices=PROVIDER_CHOICES, max_length=10, verbose_name='Channel')),
                ('credentials', models.JSONField(default=dict, verbose_name='Credentials')),
                ('is_active', models.BooleanField(default=True, verbose_name='Active')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='ledger_channel_connections', to=settings.AUTH_USER_MODEL, verbose_name='User')),
            ],
            options={
                'verbose_name': 'Channel Connection',
                'verbose_name_plural': 'Channel Connections',
                'ordering': ['provider'],
                'constraints': [models.UniqueConstraint(fields=('user', 'provider'), name='unique_connection_per_channel')],
            },
        ),
    ]
