from django.contrib import admin

from .models import Campaign


@admin.register(Campaign)
class CampaignAdmin(admin.ModelAdmin):
    list_display = ('name', 'client', 'start_date', 'end_date', 'created_at')
    list_filter = ('client',)
    search_fields = ('name', 'client')
