from django.contrib.auth.models import AbstractUser
from django.core.exceptions import ValidationError
from django.db import models


class User(AbstractUser):
    ROLE_ADMIN = 'admin'
    ROLE_CLIENT = 'client'
    ROLE_MARKET = 'market'
    ROLE_CHOICES = [
        (ROLE_ADMIN, 'Admin'),
        (ROLE_CLIENT, 'Client'),
        (ROLE_MARKET, 'Market'),
    ]

    email = models.EmailField(unique=True)
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_CLIENT, db_index=True)
    # Identificador del cliente dueño de las campañas (Campaign.client)
    client_id = models.CharField(max_length=100, blank=True, null=True)
    market = models.ForeignKey(
        'markets.Market',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='users'
    )

    # Fix reverse accessor conflicts
    groups = models.ManyToManyField(
        'auth.Group',
        related_name='custom_user_set',
        blank=True
    )
    user_permissions = models.ManyToManyField(
        'auth.Permission',
        related_name='custom_user_set',
        blank=True
    )

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['username']

    def clean(self):
        if self.role == self.ROLE_CLIENT and not self.client_id:
            raise ValidationError("client users require a client_id")
        if self.role == self.ROLE_MARKET and not self.market_id:
            raise ValidationError("market users require a market")
