"""ReportLab PDF Generation Service Implementation

Implements invoice rendering using ReportLab library.
"""

from decimal import Decimal
from io import BytesIO
from typing import List, Optional

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
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoice_line import InvoiceLine
from src.domain.money import ZERO
from src.domain.organization import Organization

CURRENCY = "INR"


def _money(amount: Optional[Decimal]) -> str:
    return f"{CURRENCY} {(amount or ZERO):,.2f}"


def _rate(rate: Optional[Decimal]) -> str:
    return f"{(rate or ZERO).normalize():f}%"


class ReportLabPdfService(PdfService):
    """
    ReportLab implementation of PdfService

    Layout: organization header, invoice details, bill-to block, line items
    when present, fee table with GST rows, cumulative fee summary for
    progress invoices.
    """

    def generate_invoice(
        self,
        invoice: Invoice,
        organization: Organization,
        invoice_lines: List[InvoiceLine],
    ) -> bytes:
        """
        Render an invoice PDF

        Args:
            invoice: Invoice entity with billing details
            organization: Issuing organization
            invoice_lines: Line items of the invoice

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
            title=invoice.invoice_number,
        )

        styles = getSampleStyleSheet()
        elements = []

        # Custom styles
        title_style = ParagraphStyle(
            "TitleStyle",
            parent=styles["Heading1"],
            fontSize=24,
            spaceAfter=10,
            textColor=colors.HexColor("#2C3E50"),
        )
        kind_style = ParagraphStyle(
            "KindStyle",
            parent=styles["Heading2"],
            fontSize=14,
            textColor=colors.HexColor("#E74C3C"),
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

        is_proforma = invoice.status == InvoiceStatus.DRAFT

        # Header - Organization and document kind
        elements.append(Paragraph(organization.name, title_style))
        if organization.state:
            elements.append(Paragraph(f"State: {organization.state}", header_style))
        elements.append(Spacer(1, 10 * mm))
        elements.append(
            Paragraph("PROFORMA INVOICE" if is_proforma else "TAX INVOICE", kind_style)
        )

        # Invoice Details Table
        invoice_info = [
            ["Invoice Number:", invoice.invoice_number],
            ["Status:", invoice.effective_status().value],
            ["Issue Date:", invoice.issue_date.strftime("%Y-%m-%d")],
            ["Due Date:", invoice.due_date.strftime("%Y-%m-%d")],
        ]
        if invoice.last_payment_date:
            invoice_info.append(
                ["Paid On:", invoice.last_payment_date.strftime("%Y-%m-%d")]
            )

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

        # Client Info
        elements.append(Paragraph("Bill To:", bold_style))
        elements.append(Paragraph(invoice.client_name or "-", normal_style))
        if invoice.client_address:
            elements.append(Paragraph(invoice.client_address, normal_style))
        if invoice.client_email:
            elements.append(Paragraph(invoice.client_email, normal_style))
        elements.append(Spacer(1, 10 * mm))

        # Line Items Table
        if invoice_lines:
            line_data = [["Description", "Quantity", "Unit Price", "Total"]]
            for line in invoice_lines:
                line_data.append(
                    [
                        line.description,
                        f"{line.quantity:,.6f}".rstrip("0").rstrip("."),
                        _money(line.unit_price),
                        _money(line.total_price),
                    ]
                )

            line_table = Table(
                line_data, colWidths=[75 * mm, 25 * mm, 35 * mm, 35 * mm]
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
                    ]
                )
            )

            elements.append(line_table)
            elements.append(Spacer(1, 5 * mm))

        # Amounts Table
        amount_data = [["Description", "Rate", "Amount"]]
        amount_data.append(
            ["Subtotal" if invoice_lines else "Professional fees", "", _money(invoice.subtotal)]
        )
        amount_data.extend(self._tax_rows(invoice))

        amount_table = Table(amount_data, colWidths=[95 * mm, 30 * mm, 45 * mm])
        amount_table.setStyle(
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
                ]
            )
        )

        elements.append(amount_table)
        elements.append(Spacer(1, 5 * mm))

        # Totals
        total_data = [
            ["", "Total:", _money(invoice.total_amount)],
            ["", "Paid:", _money(invoice.paid_amount)],
            ["", "Balance Due:", _money(invoice.balance_amount)],
        ]
        total_table = Table(total_data, colWidths=[95 * mm, 30 * mm, 45 * mm])
        total_table.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (1, 0), (-1, -1), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 11),
                    ("ALIGN", (1, 0), (-1, -1), "RIGHT"),
                    ("LINEABOVE", (1, 0), (-1, 0), 1.5, colors.HexColor("#2C3E50")),
                    ("TOPPADDING", (0, 0), (-1, -1), 8),
                ]
            )
        )

        elements.append(total_table)
        elements.append(Spacer(1, 10 * mm))

        # Cumulative fee summary
        if invoice.cumulative_fee_amount is not None:
            elements.append(Paragraph("Fee Progress:", bold_style))
            progress_data = [
                ["Previously billed:", _money(invoice.previously_billed_amount)],
                ["This invoice:", _money(invoice.subtotal)],
                [
                    f"Billed to date ({_rate(invoice.cumulative_fee_percentage)} of fee):",
                    _money(invoice.cumulative_fee_amount),
                ],
            ]
            progress_table = Table(progress_data, colWidths=[95 * mm, 45 * mm])
            progress_table.setStyle(
                TableStyle(
                    [
                        ("FONTSIZE", (0, 0), (-1, -1), 10),
                        ("ALIGN", (1, 0), (1, -1), "RIGHT"),
                        ("TEXTCOLOR", (0, 0), (0, -1), colors.HexColor("#7F8C8D")),
                        ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
                    ]
                )
            )
            elements.append(progress_table)
            elements.append(Spacer(1, 10 * mm))

        if invoice.notes:
            elements.append(Paragraph("Notes:", bold_style))
            elements.append(Paragraph(invoice.notes, normal_style))
            elements.append(Spacer(1, 10 * mm))

        if is_proforma:
            footer_note = Paragraph(
                "<i>This is a proforma invoice for preview purposes only. "
                "It is not a legally binding document until officially issued.</i>",
                ParagraphStyle(
                    "FooterNote",
                    parent=styles["Normal"],
                    fontSize=9,
                    textColor=colors.HexColor("#95A5A6"),
                ),
            )
            elements.append(footer_note)

        # Build PDF
        doc.build(elements)
        pdf_bytes = buffer.getvalue()
        buffer.close()

        return pdf_bytes

    def _tax_rows(self, invoice: Invoice) -> List[List[str]]:
        rows = []
        if invoice.cgst_amount or invoice.sgst_amount:
            rows.append(["CGST", _rate(invoice.cgst_rate), _money(invoice.cgst_amount)])
            rows.append(["SGST", _rate(invoice.sgst_rate), _money(invoice.sgst_amount)])
        elif invoice.igst_amount:
            rows.append(["IGST", _rate(invoice.igst_rate), _money(invoice.igst_amount)])
        elif invoice.tax_amount:
            rows.append(["Tax", _rate(invoice.tax_rate), _money(invoice.tax_amount)])
        return rows
