"""
PDF report generation.
Same content as the text reports: products sorted by ID, and a category analysis.
"""
import io
from datetime import datetime
from xml.sax.saxutils import escape
from typing import List, Optional

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import inch
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle
from reportlab.lib.enums import TA_CENTER

from warehouse.config import settings
from warehouse.models import AnalysisResult, Product


class PDFReportGenerator:
    """Generate PDF inventory reports."""

    def __init__(self):
        self.styles = getSampleStyleSheet()
        self._setup_custom_styles()

    def _setup_custom_styles(self):
        """Setup custom paragraph styles."""
        self.styles.add(ParagraphStyle(
            name='ReportTitle',
            parent=self.styles['Heading1'],
            fontSize=24,
            alignment=TA_CENTER,
            spaceAfter=30,
            textColor=colors.HexColor('#2c3e50')
        ))

        self.styles.add(ParagraphStyle(
            name='ReportSubtitle',
            parent=self.styles['Heading2'],
            fontSize=14,
            alignment=TA_CENTER,
            spaceAfter=20,
            textColor=colors.HexColor('#7f8c8d')
        ))

        self.styles.add(ParagraphStyle(
            name='SectionHeader',
            parent=self.styles['Heading2'],
            fontSize=16,
            spaceBefore=20,
            spaceAfter=10,
            textColor=colors.HexColor('#2980b9')
        ))

        self.styles.add(ParagraphStyle(
            name='NormalText',
            parent=self.styles['Normal'],
            fontSize=10,
            spaceAfter=6
        ))

        self.styles.add(ParagraphStyle(
            name='Footer',
            parent=self.styles['Normal'],
            fontSize=8,
            textColor=colors.gray,
            alignment=TA_CENTER
        ))

    def _new_document(self, buffer: io.BytesIO) -> SimpleDocTemplate:
        return SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=72,
            leftMargin=72,
            topMargin=72,
            bottomMargin=72
        )

    def _header(self, title: str) -> list:
        return [
            Paragraph(escape(title), self.styles['ReportTitle']),
            Paragraph(f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
                      self.styles['ReportSubtitle']),
            Spacer(1, 20),
        ]

    def _footer(self, report_name: str) -> Paragraph:
        return Paragraph(f"{settings.APP_NAME} - {report_name}", self.styles['Footer'])

    def _product_table(self, rows: List[List], header_color: str, col_widths: List[float]) -> Table:
        table = Table(rows, colWidths=col_widths)
        table.setStyle(TableStyle([
            ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor(header_color)),
            ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
            ('ALIGN', (0, 0), (-1, 0), 'CENTER'),
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ('FONTSIZE', (0, 0), (-1, 0), 10),
            ('BOTTOMPADDING', (0, 0), (-1, 0), 12),
            ('BACKGROUND', (0, 1), (-1, -1), colors.white),
            ('TEXTCOLOR', (0, 1), (-1, -1), colors.black),
            ('ALIGN', (0, 1), (0, -1), 'RIGHT'),
            ('ALIGN', (2, 1), (2, -1), 'RIGHT'),
            ('FONTNAME', (0, 1), (-1, -1), 'Helvetica'),
            ('FONTSIZE', (0, 1), (-1, -1), 9),
            ('GRID', (0, 0), (-1, -1), 1, colors.grey),
            ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.whitesmoke, colors.white]),
        ]))
        return table

    def generate_products_report(self, products: List[Product], report_title: str = "Inventory List") -> bytes:
        """
        Products sorted ascending by ID.

        Args:
            products: Products to list, in any order
            report_title: Title of the report

        Returns:
            PDF bytes
        """
        buffer = io.BytesIO()
        doc = self._new_document(buffer)
        story = self._header(report_title)

        total_quantity = sum(p.quantity for p in products)
        summary_text = f"""
        <b>Summary:</b><br/>
        Total Products: {len(products)}<br/>
        Total Quantity: {total_quantity}<br/>
        """
        story.append(Paragraph(summary_text, self.styles['NormalText']))
        story.append(Spacer(1, 20))

        story.append(Paragraph("Products by ID", self.styles['SectionHeader']))
        table_data = [['Product ID', 'Product Name', 'Quantity', 'Category']]
        for product in sorted(products, key=lambda p: p.product_id):
            table_data.append([
                str(product.product_id),
                product.name,
                str(product.quantity),
                product.category,
            ])

        story.append(self._product_table(
            table_data, '#2c3e50', [1*inch, 2.6*inch, 1*inch, 2*inch]
        ))
        story.append(Spacer(1, 30))
        story.append(self._footer("Inventory List"))

        doc.build(story)
        buffer.seek(0)
        return buffer.getvalue()

    def generate_analysis_report(self, category: str, result: AnalysisResult,
                                 report_title: Optional[str] = None) -> bytes:
        """
        Stock analysis of one category.

        Returns:
            PDF bytes
        """
        buffer = io.BytesIO()
        doc = self._new_document(buffer)
        story = self._header(report_title or f"Analysis Report: {category}")

        summary_text = f"""
        <b>Summary:</b><br/>
        Products: {result.product_count}<br/>
        Total quantity: {result.total_quantity}<br/>
        Average quantity: {result.average_quantity:.2f}<br/>
        Max stock product ID: {result.max_stock_product.product_id}, Quantity: {result.max_stock_product.quantity}<br/>
        Min stock product ID: {result.min_stock_product.product_id}, Quantity: {result.min_stock_product.quantity}<br/>
        """
        story.append(Paragraph(summary_text, self.styles['NormalText']))

        sections = [
            ("Low stock products", result.low_stock_products, '#c0392b'),
            ("High stock products", result.high_stock_products, '#27ae60'),
        ]
        for heading, products, color in sections:
            story.append(Paragraph(heading, self.styles['SectionHeader']))
            if not products:
                story.append(Paragraph("None", self.styles['NormalText']))
                continue
            table_data = [['Product ID', 'Product Name', 'Quantity']]
            for product in products:
                table_data.append([str(product.product_id), product.name, str(product.quantity)])
            story.append(self._product_table(table_data, color, [1.2*inch, 3.4*inch, 1.2*inch]))

        story.append(Spacer(1, 30))
        story.append(self._footer("Stock Analysis"))

        doc.build(story)
        buffer.seek(0)
        return buffer.getvalue()
