from django.db import models

from core.models import IdentifiedModel


class Market(IdentifiedModel):
    name = models.CharField(max_length=100)
    city = models.CharField(max_length=100)

    class Meta:
        app_label = 'markets'
        ordering = ['name']

    def __str__(self):
        return f"{self.name} - {self.city}"


class Device(IdentifiedModel):
    TYPE_TV = 'tv'
    TYPE_CAMERA = 'camera'
    TYPE_CHOICES = [
        (TYPE_TV, 'TV'),
        (TYPE_CAMERA, 'Camera'),
    ]

    market = models.ForeignKey(Market, on_delete=models.CASCADE, related_name='devices')
    type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    name = models.CharField(max_length=100)

    class Meta:
        app_label = 'markets'
        indexes = [
            models.Index(fields=['market', 'type'], name='device_market_type_idx'),
        ]

    def __str__(self):
        return self.name
