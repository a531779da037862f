from rest_framework import serializers
from .models import Market, Device


class MarketSerializer(serializers.ModelSerializer):
    class Meta:
        model = Market
        fields = ('id', 'name', 'city', 'created_at')


class DeviceSerializer(serializers.ModelSerializer):
    market_name = serializers.CharField(source='market.name', read_only=True)

    class Meta:
        model = Device
        fields = ('id', 'market', 'market_name', 'type', 'name', 'created_at')
