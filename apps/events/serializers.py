from rest_framework import serializers

from apps.campaigns.models import Campaign
from apps.markets.models import Device
from .models import Playback, Audience


class PlaybackSerializer(serializers.ModelSerializer):
    campaign_id = serializers.PrimaryKeyRelatedField(source='campaign', queryset=Campaign.objects.all())
    device_id = serializers.PrimaryKeyRelatedField(source='device', queryset=Device.objects.all())
    duration = serializers.IntegerField(min_value=1)

    class Meta:
        model = Playback
        fields = ('id', 'campaign_id', 'device_id', 'date', 'time', 'duration', 'created_at')
        read_only_fields = ('id', 'created_at')


class AudienceSerializer(serializers.ModelSerializer):
    device_id = serializers.PrimaryKeyRelatedField(source='device', read_only=True)

    class Meta:
        model = Audience
        fields = ('id', 'device_id', 'date', 'time', 'visitors', 'impressions', 'created_at')
