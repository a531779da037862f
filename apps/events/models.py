from django.core.validators import MinValueValidator
from django.db import models

from core.models import IdentifiedModel


class Playback(IdentifiedModel):
    """One recorded play of a campaign's content on a device."""

    campaign = models.ForeignKey('campaigns.Campaign', on_delete=models.CASCADE, related_name='playbacks')
    device = models.ForeignKey('markets.Device', on_delete=models.CASCADE, related_name='playbacks')
    date = models.DateField()
    time = models.TimeField()
    duration = models.PositiveIntegerField(validators=[MinValueValidator(1)])  # segundos

    class Meta:
        app_label = 'events'
        indexes = [
            models.Index(fields=['date', 'device'], name='playback_date_device_idx'),
            models.Index(fields=['campaign', 'date'], name='playback_campaign_date_idx'),
        ]


class Audience(IdentifiedModel):
    """Visitor and impression counts measured by a device."""

    device = models.ForeignKey('markets.Device', on_delete=models.CASCADE, related_name='audiences')
    date = models.DateField()
    time = models.TimeField()
    visitors = models.PositiveIntegerField(default=0)
    impressions = models.PositiveIntegerField(default=0)

    class Meta:
        app_label = 'events'
        indexes = [
            models.Index(fields=['date', 'device'], name='audience_date_device_idx'),
        ]
