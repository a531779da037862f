import core.models
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Campaign',
            fields=[
                ('id', models.CharField(default=core.models.generate_id, editable=False, max_length=64, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('name', models.CharField(max_length=100)),
                ('client', models.CharField(db_index=True, max_length=100)),
                ('start_date', models.DateField()),
                ('end_date', models.DateField()),
            ],
            options={
                'indexes': [
                    models.Index(fields=['client', 'start_date'], name='campaign_client_start_idx'),
                    models.Index(fields=['start_date', 'end_date'], name='campaign_date_range_idx'),
                ],
            },
        ),
    ]
