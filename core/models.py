import uuid

from django.db import models


def generate_id():
    return str(uuid.uuid4())


class IdentifiedModel(models.Model):
    """Base for backend entities keyed by opaque string identifiers."""

    id = models.CharField(primary_key=True, max_length=64, default=generate_id, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        abstract = True
