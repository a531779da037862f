import core.models
import django.core.validators
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('campaigns', '0001_initial'),
        ('markets', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Playback',
            fields=[
                ('id', models.CharField(default=core.models.generate_id, editable=False, max_length=64, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('date', models.DateField()),
                ('time', models.TimeField()),
                ('duration', models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ('campaign', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='playbacks', to='campaigns.campaign')),
                ('device', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='playbacks', to='markets.device')),
            ],
            options={
                'indexes': [
                    models.Index(fields=['date', 'device'], name='playback_date_device_idx'),
                    models.Index(fields=['campaign', 'date'], name='playback_campaign_date_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Audience',
            fields=[
                ('id', models.CharField(default=core.models.generate_id, editable=False, max_length=64, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('date', models.DateField()),
                ('time', models.TimeField()),
                ('visitors', models.PositiveIntegerField(default=0)),
                ('impressions', models.PositiveIntegerField(default=0)),
                ('device', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='audiences', to='markets.device')),
            ],
            options={
                'indexes': [models.Index(fields=['date', 'device'], name='audience_date_device_idx')],
            },
        ),
    ]
