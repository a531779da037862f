from django.db import models

from core.models import IdentifiedModel


class Report(IdentifiedModel):
    campaign = models.ForeignKey('campaigns.Campaign', on_delete=models.CASCADE, related_name='reports')
    summary_json = models.JSONField(default=dict)

    class Meta:
        app_label = 'reports'
        indexes = [
            models.Index(fields=['campaign', 'created_at'], name='report_campaign_created_idx'),
        ]
