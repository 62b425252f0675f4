from __future__ import annotations

import os
from decimal import Decimal
from io import BytesIO

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen import canvas

from caderninho.db import utcnow
from caderninho.schemas.statement import MonthlyStatement

_DEJAVU_TTF = "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf"


def _pdf_font_name() -> str:
    # DejaVu cobre acentos; Helvetica é o fallback embutido do reportlab
    if os.path.exists(_DEJAVU_TTF):
        if "DejaVu" not in pdfmetrics.getRegisteredFontNames():
            pdfmetrics.registerFont(TTFont("DejaVu", _DEJAVU_TTF))
        return "DejaVu"
    return "Helvetica"


def _brl(value: Decimal | None) -> str:
    if value is None:
        return "-"
    s = f"{Decimal(value):,.2f}"
    return "R$ " + s.replace(",", "_").replace(".", ",").replace("_", ".")


def build_statement_pdf(statement: MonthlyStatement, title: str = "Caderninho Financeiro") -> bytes:
    buf = BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    font = _pdf_font_name()
    width, height = A4
    bottom = 20 * mm

    heading = f"{title} - Extrato {statement.month:02d}/{statement.year}"
    c.setTitle(heading)
    c.setFont(font, 16)
    c.drawString(20 * mm, height - 20 * mm, heading)

    c.setFont(font, 10)
    y = height - 30 * mm
    c.drawString(20 * mm, y, f"Gerado em: {utcnow().isoformat(timespec='seconds')}Z")
    y -= 6 * mm
    c.drawString(
        20 * mm, y,
        f"Total gasto: {_brl(statement.total_expenses)}   Limites: {_brl(statement.total_limits)}   "
        f"Disponível: {_brl(statement.available_balance)}   Uso: {statement.percentage_used}%",
    )
    y -= 10 * mm

    def _ensure_room(y: float, font_size: int) -> float:
        if y >= bottom:
            return y
        c.showPage()
        c.setFont(font, font_size)
        return height - 20 * mm

    for group in statement.expenses_by_type:
        y = _ensure_room(y, 11)
        c.setFont(font, 11)
        flag = "  [ACIMA DO LIMITE]" if group.is_over_limit else ""
        c.drawString(
            20 * mm, y,
            f"{group.establishment_type_name}: {_brl(group.total_spent)} / limite {_brl(group.monthly_limit)}{flag}",
        )
        y -= 6 * mm

        c.setFont(font, 9)
        for tx in group.transactions:
            y = _ensure_room(y, 9)
            info = f" ({tx.installment_info})" if tx.installment_info else ""
            line = (
                f"{tx.date.strftime('%d/%m/%Y')}  {tx.establishment_name[:40]}{info}  "
                f"{tx.payment_type_name}  {_brl(tx.amount)}"
            )
            c.drawString(25 * mm, y, line[:120])
            y -= 5 * mm
        y -= 4 * mm

    c.showPage()
    c.save()
    return buf.getvalue()
