from django.contrib import admin

from .models import Playback, Audience


@admin.register(Playback)
class PlaybackAdmin(admin.ModelAdmin):
    list_display = ('campaign', 'device', 'date', 'time', 'duration')
    list_filter = ('date',)


@admin.register(Audience)
class AudienceAdmin(admin.ModelAdmin):
    list_display = ('device', 'date', 'time', 'visitors', 'impressions')
    list_filter = ('date',)
