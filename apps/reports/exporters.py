# apps/reports/exporters.py
"""PDF and Excel renderings of a ``ReportData`` snapshot.

Both exporters take their table contents from the row builders below, so
the campaign counts and totals in either document come from the same rows.
"""
from datetime import date
from io import BytesIO

from django.conf import settings

DATE_FORMAT = '%d/%m/%Y'

REPORT_TITLE = 'Reporte de Campañas - Canal Mercado'

CAMPAIGN_HEADERS = ('Nombre', 'Cliente', 'Inicio', 'Fin', 'Reproducciones')
PLAYBACK_HEADERS = ('Campaña', 'Dispositivo', 'Fecha', 'Hora', 'Duración (s)')
SUMMARY_HEADERS = ('Métrica', 'Valor')
TOTALS_HEADERS = ('Reproducciones', 'Segundos', 'Minutos', 'Horas')

SHEET_CAMPAIGNS = 'Campañas'
SHEET_PLAYBACKS = 'Reproducciones'
SHEET_SUMMARY = 'Resumen'

CONTENT_TYPES = {
    'pdf': 'application/pdf',
    'xlsx': 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
}


def format_date(value):
    return value.strftime(DATE_FORMAT)


def period_label(report_data):
    return f"Período: {format_date(report_data.start_date)} - {format_date(report_data.end_date)}"


def market_label(report_data):
    market = report_data.market
    if market is None:
        return None
    return f"Mercado: {market.name} - {market.city}"


# Row builders

def campaign_rows(report_data):
    counts = report_data.playback_counts()
    return [
        (
            campaign.name,
            campaign.client,
            format_date(campaign.start_date),
            format_date(campaign.end_date),
            counts.get(campaign.id, 0),
        )
        for campaign in report_data.campaigns
    ]


def playback_rows(report_data):
    campaign_names = {campaign.id: campaign.name for campaign in report_data.campaigns}
    return [
        (
            campaign_names.get(playback.campaign_id, playback.campaign_id),
            playback.device_id,
            format_date(playback.date),
            playback.time.strftime('%H:%M:%S'),
            playback.duration,
        )
        for playback in report_data.playbacks
    ]


def totals_row(report_data):
    return (
        report_data.total_playbacks,
        report_data.total_duration,
        report_data.total_minutes,
        report_data.total_hours,
    )


def summary_rows(report_data):
    return [
        ('Total de campañas', len(report_data.campaigns)),
        ('Total de reproducciones', report_data.total_playbacks),
        ('Duración total (segundos)', report_data.total_duration),
        ('Duración total (minutos)', report_data.total_minutes),
        ('Duración total (horas)', report_data.total_hours),
        ('Fecha de inicio', format_date(report_data.start_date)),
        ('Fecha de fin', format_date(report_data.end_date)),
    ]


def report_filename(extension, today=None):
    today = today or date.today()
    return f"{settings.REPORT_FILENAME_PREFIX}-{today.isoformat()}.{extension}"


# Renderers

def export_pdf(report_data) -> bytes:
    from reportlab.lib import colors  # imported lazily to keep module import lightweight
    from reportlab.lib.pagesizes import A4
    from reportlab.lib.styles import getSampleStyleSheet
    from reportlab.lib.units import inch
    from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        title=REPORT_TITLE,
        topMargin=0.5 * inch,
        bottomMargin=0.5 * inch,
        invariant=1,
    )
    styles = getSampleStyleSheet()
    table_style = TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#1f4e79')),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.whitesmoke),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('ALIGN', (-1, 1), (-1, -1), 'RIGHT'),
        ('GRID', (0, 0), (-1, -1), 0.5, colors.grey),
        ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, colors.HexColor('#f2f2f2')]),
    ])

    story = [
        Paragraph(REPORT_TITLE, styles['Title']),
        Paragraph(period_label(report_data), styles['Normal']),
    ]
    label = market_label(report_data)
    if label:
        story.append(Paragraph(label, styles['Normal']))
    story.append(Spacer(1, 0.3 * inch))

    story.append(Paragraph('Resumen de campañas', styles['Heading2']))
    rows = campaign_rows(report_data)
    if rows:
        campaigns_table = Table([CAMPAIGN_HEADERS, *rows], repeatRows=1)
        campaigns_table.setStyle(table_style)
        story.append(campaigns_table)
    else:
        story.append(Paragraph('No hay campañas en el período seleccionado.', styles['Normal']))
    story.append(Spacer(1, 0.3 * inch))

    story.append(Paragraph('Totales', styles['Heading2']))
    totals_table = Table([TOTALS_HEADERS, totals_row(report_data)])
    totals_table.setStyle(table_style)
    story.append(totals_table)

    doc.build(story)
    return buffer.getvalue()


def export_excel(report_data) -> bytes:
    from openpyxl import Workbook
    from openpyxl.styles import Font

    workbook = Workbook()
    sheets = (
        (SHEET_CAMPAIGNS, CAMPAIGN_HEADERS, campaign_rows(report_data)),
        (SHEET_PLAYBACKS, PLAYBACK_HEADERS, playback_rows(report_data)),
        (SHEET_SUMMARY, SUMMARY_HEADERS, summary_rows(report_data)),
    )

    # Workbook() starts with one empty sheet; reuse it for the first one
    worksheet = workbook.active
    for index, (title, headers, rows) in enumerate(sheets):
        if index:
            worksheet = workbook.create_sheet()
        worksheet.title = title
        worksheet.append(list(headers))
        for cell in worksheet[1]:
            cell.font = Font(bold=True)
        for row in rows:
            worksheet.append(list(row))
        for column, header in zip(worksheet.iter_cols(min_row=1, max_row=1), headers):
            worksheet.column_dimensions[column[0].column_letter].width = max(12, len(header) + 4)

    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


EXPORTERS = {
    'pdf': (export_pdf, 'pdf'),
    'excel': (export_excel, 'xlsx'),
}
