from rest_framework import serializers

from .models import Report


class ReportSerializer(serializers.ModelSerializer):
    campaign_id = serializers.PrimaryKeyRelatedField(source='campaign', read_only=True)
    campaign_name = serializers.CharField(source='campaign.name', read_only=True)

    class Meta:
        model = Report
        fields = ('id', 'campaign_id', 'campaign_name', 'summary_json', 'created_at')


class ReportExportParamsSerializer(serializers.Serializer):
    FORMAT_PDF = 'pdf'
    FORMAT_EXCEL = 'excel'

    type = serializers.ChoiceField(choices=[FORMAT_PDF, FORMAT_EXCEL], default=FORMAT_PDF)
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    market = serializers.CharField(required=False, default='all')

    def validate(self, data):
        if data['start_date'] > data['end_date']:
            raise serializers.ValidationError('start_date must not be after end_date')
        return data
