from django.core.exceptions import ValidationError
from django.db import models

from core.models import IdentifiedModel


class Campaign(IdentifiedModel):
    class Meta:
        app_label = 'campaigns'
        indexes = [
            models.Index(fields=['client', 'start_date'], name='campaign_client_start_idx'),
            models.Index(fields=['start_date', 'end_date'], name='campaign_date_range_idx'),
        ]

    name = models.CharField(max_length=100)
    client = models.CharField(max_length=100, db_index=True)
    start_date = models.DateField()
    end_date = models.DateField()

    def __str__(self):
        return self.name

    def clean(self):
        if self.start_date > self.end_date:
            raise ValidationError("start_date must not be after end_date")

    def is_active_on(self, day):
        return self.start_date <= day <= self.end_date
