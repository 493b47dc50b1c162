"""ReportLab PDF Generation Service Implementation

Implements PDF generation using ReportLab library.
"""

from io import BytesIO
from typing import List
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import (
    SimpleDocTemplate,
    Table,
    TableStyle,
    Paragraph,
    Spacer,
)

from src.app.services.pdf_service import PdfService
from src.domain.invoice import Invoice, PaymentStatus
from src.domain.totals import format_currency

STATUS_COLORS = {
    PaymentStatus.PAID: "#27AE60",
    PaymentStatus.UNPAID: "#7F8C8D",
    PaymentStatus.PARTIALLY_PAID: "#F39C12",
    PaymentStatus.OVERDUE: "#E74C3C",
}


def _format_quantity(quantity: float) -> str:
    return f"{quantity:,.6f}".rstrip("0").rstrip(".")


class ReportLabPdfService(PdfService):
    """
    ReportLab implementation of PdfService

    Generates invoice documents using ReportLab.
    """

    def generate_invoice(
        self,
        invoice: Invoice,
        company_name: str,
        company_address: str,
        currency: str = "USD",
    ) -> bytes:
        """
        Render an invoice as a PDF document

        Args:
            invoice: Invoice with its line items loaded
            company_name: Issuer name printed in the header
            company_address: Issuer address printed in the header
            currency: ISO 4217 code used to format amounts

        Returns:
            PDF document as bytes
        """
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=20 * mm,
            leftMargin=20 * mm,
            topMargin=20 * mm,
            bottomMargin=20 * mm,
            title=f"Invoice {invoice.invoice_number}",
        )

        styles = getSampleStyleSheet()
        elements = []

        status = PaymentStatus(invoice.payment_status)

        # Custom styles
        title_style = ParagraphStyle(
            "TitleStyle",
            parent=styles["Heading1"],
            fontSize=24,
            spaceAfter=10,
            textColor=colors.HexColor("#2C3E50"),
        )
        status_style = ParagraphStyle(
            "StatusStyle",
            parent=styles["Heading2"],
            fontSize=14,
            textColor=colors.HexColor(STATUS_COLORS[status]),
            spaceAfter=20,
        )
        header_style = ParagraphStyle(
            "HeaderStyle",
            parent=styles["Normal"],
            fontSize=10,
            textColor=colors.HexColor("#7F8C8D"),
        )
        normal_style = ParagraphStyle(
            "NormalStyle",
            parent=styles["Normal"],
            fontSize=10,
        )
        bold_style = ParagraphStyle(
            "BoldStyle",
            parent=styles["Normal"],
            fontSize=10,
            fontName="Helvetica-Bold",
        )

        # Header - Company Info and status label
        elements.append(Paragraph(escape(company_name), title_style))
        elements.append(Paragraph(escape(company_address), header_style))
        elements.append(Spacer(1, 10 * mm))
        elements.append(Paragraph(f"INVOICE - {status.value.upper()}", status_style))

        # Invoice Details Table
        invoice_info = [
            ["Invoice Number:", invoice.invoice_number],
            ["Issue Date:", invoice.issue_date.strftime("%Y-%m-%d")],
            ["Currency:", currency],
            ["Created:", invoice.created_at.strftime("%Y-%m-%d %H:%M:%S UTC")],
        ]

        invoice_table = Table(invoice_info, colWidths=[40 * mm, 100 * mm])
        invoice_table.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("TEXTCOLOR", (0, 0), (0, -1), colors.HexColor("#7F8C8D")),
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
                ]
            )
        )

        elements.append(invoice_table)
        elements.append(Spacer(1, 10 * mm))

        # Customer Info
        elements.append(Paragraph("Bill To:", bold_style))
        for line in self._customer_lines(invoice):
            elements.append(Paragraph(escape(line), normal_style))
        elements.append(Spacer(1, 10 * mm))

        # Line Items Table
        line_data = [["Description", "Quantity", "Unit Price", "Total"]]
        for item in invoice.line_items:
            line_data.append(
                [
                    Paragraph(escape(item.description), normal_style),
                    _format_quantity(item.quantity),
                    format_currency(item.unit_price, currency),
                    format_currency(item.total, currency),
                ]
            )

        line_table = Table(
            line_data, colWidths=[80 * mm, 25 * mm, 30 * mm, 35 * mm], repeatRows=1
        )
        line_table.setStyle(
            TableStyle(
                [
                    # Header row
                    ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#2C3E50")),
                    ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, 0), 10),
                    ("ALIGN", (0, 0), (-1, 0), "CENTER"),
                    # Data rows
                    ("FONTSIZE", (0, 1), (-1, -1), 9),
                    ("ALIGN", (1, 1), (-1, -1), "RIGHT"),
                    # Grid
                    ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor("#BDC3C7")),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
                    ("TOPPADDING", (0, 0), (-1, -1), 6),
                    # Alternate row colors
                    (
                        "ROWBACKGROUNDS",
                        (0, 1),
                        (-1, -1),
                        [colors.white, colors.HexColor("#F8F9F9")],
                    ),
                ]
            )
        )

        elements.append(line_table)
        elements.append(Spacer(1, 5 * mm))

        # Totals
        totals_data = [
            ["", "", "Subtotal:", format_currency(invoice.subtotal, currency)],
            ["", "", "Tax:", format_currency(invoice.tax, currency)],
            ["", "", "Total:", format_currency(invoice.total, currency)],
        ]
        totals_table = Table(totals_data, colWidths=[80 * mm, 25 * mm, 30 * mm, 35 * mm])
        totals_table.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (2, 0), (-1, -1), "Helvetica"),
                    ("FONTNAME", (2, -1), (-1, -1), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("FONTSIZE", (0, -1), (-1, -1), 11),
                    ("ALIGN", (2, 0), (-1, -1), "RIGHT"),
                    ("LINEABOVE", (2, -1), (-1, -1), 1.5, colors.HexColor("#2C3E50")),
                    ("TOPPADDING", (0, 0), (-1, -1), 4),
                ]
            )
        )

        elements.append(totals_table)

        if invoice.attachments:
            elements.append(Spacer(1, 10 * mm))
            elements.append(
                Paragraph(
                    f"<i>{len(invoice.attachments)} attachment(s) on file</i>",
                    header_style,
                )
            )

        # Build PDF
        doc.build(elements)
        pdf_bytes = buffer.getvalue()
        buffer.close()

        return pdf_bytes

    def _customer_lines(self, invoice: Invoice) -> List[str]:
        lines = [invoice.customer_name]
        if invoice.customer_email:
            lines.append(invoice.customer_email)
        if invoice.customer_address:
            lines.extend(invoice.customer_address.splitlines())
        return lines
