"""PDF rendering for people profiles (single profile and bulk export)."""

import logging
import os
from datetime import datetime
from io import BytesIO
from typing import Any, Dict, List, Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.colors import HexColor
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.utils import ImageReader
from reportlab.platypus import (
    SimpleDocTemplate, Paragraph, Spacer, PageBreak, Table, TableStyle, Image as RLImage,
)

from jodi import config

logger = logging.getLogger(__name__)

FIELD_LABELS = {
    "name": "Name",
    "age": "Age",
    "gender": "Gender",
    "dob": "Date of Birth",
    "height": "Height",
    "religion": "Religion",
    "caste": "Caste",
    "gotra": "Gotra",
    "maritalStatus": "Marital Status",
    "state": "State",
    "area": "Area",
    "nativePlace": "Native Place",
    "phoneNumber": "Phone Number",
    "occupation": "Occupation",
    "education": "Education",
    "higherQualification": "Higher Qualification",
    "income": "Income",
    "personalIncome": "Personal Income",
    "budget": "Budget",
    "fatherName": "Father's Name",
    "motherName": "Mother's Name",
    "residence": "Residence",
}

SIBLING_LABELS = {
    "name": "Name",
    "relation": "Relation",
    "age": "Age",
    "profession": "Profession",
    "maritalStatus": "Marital Status",
}

TITLE_COLOR = HexColor("#2c3e50")
SECTION_COLOR = HexColor("#34495e")
RULE_COLOR = HexColor("#3498db")
FOOTER_COLOR = HexColor("#7f8c8d")


def _styles():
    styles = getSampleStyleSheet()
    styles.add(ParagraphStyle(
        name="ProfileTitle", parent=styles["Title"], fontSize=24,
        textColor=TITLE_COLOR, alignment=TA_CENTER, spaceAfter=12,
    ))
    styles.add(ParagraphStyle(
        name="PersonName", parent=styles["Heading1"], fontSize=20, textColor=TITLE_COLOR,
    ))
    styles.add(ParagraphStyle(
        name="Section", parent=styles["Heading2"], fontSize=16, textColor=SECTION_COLOR,
    ))
    return styles


def format_date(value: Any) -> str:
    if not value:
        return "-"
    if isinstance(value, datetime):
        return value.strftime("%d/%m/%Y")
    try:
        return datetime.fromisoformat(str(value)).strftime("%d/%m/%Y")
    except ValueError:
        return "-"


def format_value(field: str, value: Any) -> str:
    if field == "dob":
        return format_date(value)
    if value is None or value == "":
        return "-"
    if isinstance(value, bool):
        return "Yes" if value else "No"
    return str(value)


def _selected(fields: Optional[List[str]]) -> List[str]:
    if not fields:
        return list(FIELD_LABELS)
    return [field for field in fields if field in FIELD_LABELS]


def _details_table(person: Dict[str, Any], fields: List[str], styles) -> Optional[Table]:
    rows = [
        [Paragraph(f"<b>{FIELD_LABELS[field]}:</b>", styles["Normal"]),
         Paragraph(escape(format_value(field, person.get(field))), styles["Normal"])]
        for field in fields
        if field in person
    ]
    if not rows:
        return None
    table = Table(rows, colWidths=[150, 330])
    table.setStyle(TableStyle([
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("TEXTCOLOR", (0, 0), (-1, -1), TITLE_COLOR),
        ("LINEBELOW", (0, 0), (-1, -1), 0.25, colors.lightgrey),
    ]))
    return table


def _photo(person: Dict[str, Any]) -> Optional[RLImage]:
    photos = person.get("photos") or []
    if not photos:
        return None
    path = os.path.join(config.UPLOAD_DIR, os.path.basename(photos[0]))
    if not os.path.exists(path):
        return None
    try:
        ImageReader(path).getSize()
    except Exception as e:
        logger.warning("⚠️ Failed to add photo to PDF: %s", e)
        return None
    return RLImage(path, width=100, height=120)


def _siblings(person: Dict[str, Any], styles) -> list:
    siblings = person.get("siblings") or []
    if not siblings:
        return []
    story = [Spacer(1, 10), Paragraph("Family Details", styles["Section"])]
    for index, sibling in enumerate(siblings, start=1):
        story.append(Paragraph(f"<b>Sibling {index}:</b>", styles["Normal"]))
        for key, label in SIBLING_LABELS.items():
            if sibling.get(key):
                story.append(Paragraph(f"&nbsp;&nbsp;&nbsp;{label}: {escape(str(sibling[key]))}", styles["Normal"]))
        story.append(Spacer(1, 6))
    return story


def _footer(canvas, doc):
    canvas.saveState()
    canvas.setFont("Helvetica", 9)
    canvas.setFillColor(FOOTER_COLOR)
    width = A4[0]
    canvas.drawCentredString(width / 2, 30, f"Page {doc.page}")
    canvas.drawCentredString(width / 2, 18, f"Generated on {datetime.now().strftime('%d/%m/%Y at %H:%M')}")
    canvas.restoreState()


def _rule():
    rule = Table([[""]], colWidths=[480], rowHeights=[2])
    rule.setStyle(TableStyle([("LINEBELOW", (0, 0), (-1, -1), 1, RULE_COLOR)]))
    return rule


def _build(story: list) -> bytes:
    buffer = BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=A4, leftMargin=50, rightMargin=50, topMargin=50, bottomMargin=50)
    doc.build(story, onFirstPage=_footer, onLaterPages=_footer)
    return buffer.getvalue()


def render_person_pdf(person: Dict[str, Any], fields: Optional[List[str]] = None) -> bytes:
    styles = _styles()
    story = [Paragraph("JODI - Profile Details", styles["ProfileTitle"]), _rule(), Spacer(1, 12)]

    photo = _photo(person)
    if photo is not None:
        story.append(photo)
        story.append(Spacer(1, 8))

    story.append(Paragraph(escape(person.get("name") or "N/A"), styles["PersonName"]))
    story.append(Paragraph("Personal Information", styles["Section"]))
    table = _details_table(person, _selected(fields), styles)
    if table is not None:
        story.append(table)
    story.extend(_siblings(person, styles))
    return _build(story)


def render_bulk_pdf(people: List[Dict[str, Any]], fields: Optional[List[str]] = None) -> bytes:
    styles = _styles()
    selected = _selected(fields)
    story = [
        Paragraph("JODI - Bulk Profile Export", styles["ProfileTitle"]),
        Paragraph(f"{len(people)} Profile(s)", styles["Section"]),
    ]
    for index, person in enumerate(people, start=1):
        story.append(PageBreak())
        story.append(Paragraph(f"Profile {index}: {escape(person.get('name') or 'N/A')}", styles["PersonName"]))
        story.append(_rule())
        story.append(Spacer(1, 8))
        table = _details_table(person, selected, styles)
        if table is not None:
            story.append(table)
    return _build(story)


def pdf_filename(name: Optional[str]) -> str:
    safe = "".join(ch if ch.isascii() and ch.isalnum() else "_" for ch in (name or "profile"))
    return f"{safe}_profile.pdf"
