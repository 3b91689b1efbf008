import logging
import os
import subprocess
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from reportlab.lib.colors import HexColor
from reportlab.lib.pagesizes import A6, landscape
from reportlab.pdfgen import canvas

from models import Film, Ticket

logger = logging.getLogger(__name__)


def _stub_name(film: Film, ticket: Ticket, issued: datetime) -> str:
    ticket_part = ticket.id or issued.strftime("%Y%m%d%H%M%S")
    safe_film = "".join(ch for ch in film.id if ch.isalnum() or ch in "-_") or "film"
    return f"film{safe_film}-ticket{ticket_part}.pdf"


def generate_ticket_pdf(
    film: Film,
    ticket: Ticket,
    tickets_dir: Union[str, Path],
    issued: Optional[datetime] = None,
) -> Path:
    """
    Draws an A6 landscape ticket stub for one purchase and returns its path.
    """
    issued = issued or datetime.now()
    tickets_dir = Path(tickets_dir)
    tickets_dir.mkdir(parents=True, exist_ok=True)

    file_path = tickets_dir / _stub_name(film, ticket, issued)

    page_size = landscape(A6)
    width, height = page_size

    c = canvas.Canvas(str(file_path), pagesize=page_size)
    c.setTitle(f"Ticket · {film.title}")

    bg_page = HexColor("#e5e7eb")
    card_bg = HexColor("#ffffff")
    border_color = HexColor("#d1d5db")
    accent = HexColor("#2563eb")
    accent_soft = HexColor("#dbeafe")
    text_main = HexColor("#111827")
    text_muted = HexColor("#6b7280")

    c.setFillColor(bg_page)
    c.rect(0, 0, width, height, fill=1, stroke=0)

    margin = 10
    card_x = margin
    card_y = margin
    card_width = width - margin * 2
    card_height = height - margin * 2

    c.setFillColor(card_bg)
    c.setStrokeColor(border_color)
    c.setLineWidth(1)
    c.roundRect(card_x, card_y, card_width, card_height, 10, fill=1, stroke=1)

    header_height = 24
    header_y = card_y + card_height - header_height
    c.setFillColor(accent_soft)
    c.roundRect(card_x, header_y, card_width, header_height, 10, fill=1, stroke=0)

    c.setFillColor(accent)
    c.setFont("Helvetica-Bold", 11)
    c.drawString(card_x + 14, header_y + 7, "ADMIT ONE")

    c.setFillColor(text_main)
    c.setFont("Helvetica-Bold", 14)
    c.drawRightString(card_x + card_width - 14, header_y + 8, f"#{ticket.id or '-'}")

    left = card_x + 16
    y = header_y - 14

    rows = [
        ("Film", film.title[:40], ("Helvetica-Bold", 12)),
        ("Showtime", film.showtime or "-", ("Helvetica", 11)),
        ("Runtime", f"{film.runtime} minutes", ("Helvetica", 11)),
        ("Seats", str(ticket.number_of_tickets), ("Helvetica", 11)),
    ]
    for caption, value, font in rows:
        c.setFillColor(text_muted)
        c.setFont("Helvetica", 8)
        c.drawString(left, y, caption)
        y -= 13
        c.setFillColor(text_main)
        c.setFont(*font)
        c.drawString(left, y, value)
        y -= 18

    c.setFillColor(text_muted)
    c.setFont("Helvetica", 7)
    c.drawString(left, card_y + 12, f"Issued: {issued:%Y-%m-%d %H:%M}")
    c.drawRightString(card_x + card_width - 16, card_y + 12, "Film Catalog")

    c.showPage()
    c.save()

    logger.info("Ticket stub written to %s", file_path)
    return file_path


def open_with_default_viewer(file_path: Union[str, Path]) -> bool:
    """Opens the file with the system viewer (Windows / macOS / Linux)."""
    path_str = str(file_path)
    try:
        if sys.platform.startswith("win"):
            os.startfile(path_str)
        elif sys.platform == "darwin":
            subprocess.Popen(["open", path_str])
        else:
            subprocess.Popen(["xdg-open", path_str])
    except OSError as e:
        logger.warning("Could not open %s automatically: %s", path_str, e)
        return False
    return True
