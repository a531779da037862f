from django.contrib import admin

from .models import Market, Device


@admin.register(Market)
class MarketAdmin(admin.ModelAdmin):
    list_display = ('name', 'city', 'created_at')
    search_fields = ('name', 'city')


@admin.register(Device)
class DeviceAdmin(admin.ModelAdmin):
    list_display = ('name', 'type', 'market', 'created_at')
    list_filter = ('type', 'market')
