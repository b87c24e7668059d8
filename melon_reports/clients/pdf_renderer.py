"""WeasyPrint-backed PDF renderer for analytics reports."""

from __future__ import annotations

import io
from html import escape
from typing import Iterator, Optional

from melon_reports.schemas import DistributionEntry, ReportData
from melon_reports.utils.formatting import format_id_datetime

_STYLESHEET = """
@page { size: A4; margin: 40px; }
body { font-family: Helvetica, Arial, sans-serif; font-size: 12px; color: #1f2937; }
.page { position: relative; min-height: 260mm; }
.page + .page { page-break-before: always; }
.header { margin-bottom: 30px; border-bottom: 2px solid #10b981; padding-bottom: 15px; }
.title { font-size: 28px; font-weight: bold; color: #10b981; margin: 0 0 5px 0; }
.subtitle { font-size: 14px; color: #6b7280; margin: 0 0 3px 0; }
.section { margin-bottom: 25px; }
.section-title { font-size: 18px; font-weight: bold; margin-bottom: 12px;
  border-bottom: 1px solid #e5e7eb; padding-bottom: 5px; }
.row { margin-bottom: 8px; }
.label { display: inline-block; width: 40%; font-size: 11px; color: #6b7280; }
.value { display: inline-block; width: 58%; font-size: 11px; font-weight: bold; }
.cards { width: 100%; border-spacing: 15px; margin: 0 -15px; }
.card { width: 50%; padding: 15px; background: #f9fafb; border: 1px solid #e5e7eb;
  border-radius: 8px; }
.card-label { font-size: 10px; color: #6b7280; margin-bottom: 5px; }
.card-value { font-size: 24px; font-weight: bold; color: #10b981; }
.dist-item { padding: 10px; margin-bottom: 5px; background: #f9fafb; border-radius: 4px; }
.dist-label { font-size: 11px; text-transform: capitalize; }
.dist-value { float: right; font-size: 11px; font-weight: bold; color: #10b981; }
table.recent { width: 100%; border-collapse: collapse; margin-top: 10px; }
table.recent th { background: #f3f4f6; font-size: 10px; text-align: left; padding: 8px;
  border-bottom: 1px solid #d1d5db; color: #374151; }
table.recent td { font-size: 10px; padding: 8px; border-bottom: 1px solid #e5e7eb; }
.footer { position: absolute; bottom: 0; left: 0; right: 0; text-align: center;
  font-size: 9px; color: #9ca3af; border-top: 1px solid #e5e7eb; padding-top: 10px; }
"""


class DocumentRenderError(Exception):
    """Raised when the PDF engine fails to produce a document."""


def _text(value: object) -> str:
    if value is None:
        return "-"
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return escape(str(value))


class WeasyPrintRenderer:
    """Turn a ``ReportData`` payload into PDF bytes, yielded in chunks."""

    def __init__(
        self,
        *,
        timezone: str = "Asia/Jakarta",
        chunk_size: int = 64 * 1024,
        app_name: str = "MelonAI",
    ) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self._timezone = timezone
        self._chunk_size = chunk_size
        self._app_name = app_name

    def render_stream(self, data: ReportData) -> Iterator[bytes]:
        """Render the report lazily; nothing happens until iteration starts."""
        html = self.build_html(data)
        try:
            # WeasyPrint pulls in Pango/Cairo bindings; load it only when rendering.
            from weasyprint import HTML

            buffer = io.BytesIO()
            HTML(string=html).write_pdf(target=buffer)
        except Exception as exc:
            raise DocumentRenderError(f"PDF rendering failed: {exc}") from exc

        buffer.seek(0)
        while chunk := buffer.read(self._chunk_size):
            yield chunk

    def build_html(self, data: ReportData) -> str:
        """Build the two-page HTML document for ``data``."""
        year = data.generated_at.year
        pages = [self._summary_page(data, year)]
        if data.recent_analyses:
            pages.append(self._recent_page(data, year))
        return (
            "<!DOCTYPE html><html lang=\"id\"><head><meta charset=\"UTF-8\">"
            f"<title>Laporan Analitik {escape(self._app_name)}</title>"
            f"<style>{_STYLESHEET}</style></head><body>"
            f"{''.join(pages)}</body></html>"
        )

    def _summary_page(self, data: ReportData, year: int) -> str:
        summary = data.summary
        cards = [
            ("Total Analisis", f"{summary.total_analyses}"),
            ("Tingkat Kematangan", f"{summary.maturity_rate}%"),
            ("Rata-rata Kemanisan", f"{summary.average_sweetness}/10"),
            ("Rata-rata Confidence", f"{summary.average_confidence}%"),
        ]
        card_cells = [
            f'<td class="card"><div class="card-label">{label}</div>'
            f'<div class="card-value">{value}</div></td>'
            for label, value in cards
        ]
        card_rows = "".join(
            f"<tr>{''.join(card_cells[index:index + 2])}</tr>" for index in (0, 2)
        )
        generated = format_id_datetime(data.generated_at, self._timezone)
        return (
            '<section class="page">'
            '<div class="header">'
            f'<h1 class="title">Laporan Analitik {escape(self._app_name)}</h1>'
            f'<p class="subtitle">Periode: {_text(data.period.start_date)} - '
            f"{_text(data.period.end_date)}</p>"
            f'<p class="subtitle">Dibuat: {_text(generated)}</p>'
            "</div>"
            '<div class="section"><h2 class="section-title">Informasi Filter</h2>'
            f"{self._filter_row('Lokasi', data.filters.location)}"
            f"{self._filter_row('Jenis Semangka', data.filters.fruit_type)}"
            f"{self._filter_row('Varietas', data.filters.fruit_variety)}"
            "</div>"
            '<div class="section"><h2 class="section-title">Ringkasan</h2>'
            f'<table class="cards">{card_rows}</table></div>'
            f"{self._distribution('Distribusi Jenis Semangka', data.type_distribution)}"
            f"{self._distribution('Distribusi Kualitas Kulit', data.skin_quality_distribution)}"
            f'<p class="footer">Laporan ini dibuat secara otomatis oleh '
            f"{escape(self._app_name)} &#8226; {year}</p>"
            "</section>"
        )

    def _recent_page(self, data: ReportData, year: int) -> str:
        headers = ("Tanggal", "Status", "Confidence", "Kemanisan", "Jenis", "Kualitas")
        rows = []
        for analysis in data.recent_analyses:
            confidence = _text(analysis.confidence)
            sweetness = _text(analysis.sweetness_level)
            rows.append(
                "<tr>"
                f"<td>{_text(analysis.date)}</td>"
                f"<td>{_text(analysis.maturity_status)}</td>"
                f"<td>{confidence}{'%' if analysis.confidence is not None else ''}</td>"
                f"<td>{sweetness}{'/10' if analysis.sweetness_level is not None else ''}</td>"
                f"<td>{_text(analysis.fruit_variety)}</td>"
                f"<td>{_text(analysis.skin_quality)}</td>"
                "</tr>"
            )
        return (
            '<section class="page">'
            '<div class="header"><h1 class="title">Analisis Terbaru</h1>'
            f'<p class="subtitle">{len(data.recent_analyses)} analisis terakhir dalam periode</p>'
            "</div>"
            '<table class="recent"><thead><tr>'
            f"{''.join(f'<th>{header}</th>' for header in headers)}"
            f"</tr></thead><tbody>{''.join(rows)}</tbody></table>"
            f'<p class="footer">Laporan ini dibuat secara otomatis oleh '
            f"{escape(self._app_name)} &#8226; {year} &#8226; Halaman 2</p>"
            "</section>"
        )

    @staticmethod
    def _filter_row(label: str, value: Optional[str]) -> str:
        return (
            f'<div class="row"><span class="label">{label}:</span>'
            f'<span class="value">{_text(value)}</span></div>'
        )

    @staticmethod
    def _distribution(title: str, entries: list[DistributionEntry]) -> str:
        items = "".join(
            '<div class="dist-item">'
            f'<span class="dist-label">{_text(entry.key)}</span>'
            f'<span class="dist-value">{entry.count} ({entry.percentage}%)</span>'
            "</div>"
            for entry in entries
        )
        return f'<div class="section"><h2 class="section-title">{title}</h2>{items}</div>'


__all__ = ["DocumentRenderError", "WeasyPrintRenderer"]
