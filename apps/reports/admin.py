from django.contrib import admin

from .models import Report


@admin.register(Report)
class ReportAdmin(admin.ModelAdmin):
    list_display = ('campaign', 'created_at')
    readonly_fields = ('summary_json',)
