"""PDF generation for pet parent guides and readiness reports."""

from io import BytesIO
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from readiness.answers import AssessmentAnswers

BRAND = colors.HexColor("#171739")
ACCENT = colors.HexColor("#FFD447")

PRIORITY_MARK = {"high": "HIGH", "medium": "MEDIUM", "low": "LOW"}


def _styles() -> dict:
    styles = getSampleStyleSheet()
    return {
        "title": ParagraphStyle(
            "PetraTitle",
            parent=styles["Heading1"],
            fontSize=20,
            spaceAfter=6,
            alignment=TA_CENTER,
            textColor=BRAND,
        ),
        "subtitle": ParagraphStyle(
            "PetraSubtitle",
            parent=styles["Normal"],
            fontSize=10,
            alignment=TA_CENTER,
            textColor=colors.grey,
        ),
        "heading": ParagraphStyle(
            "PetraHeading",
            parent=styles["Heading2"],
            fontSize=14,
            spaceBefore=14,
            spaceAfter=6,
            textColor=BRAND,
        ),
        "tip_title": ParagraphStyle(
            "PetraTipTitle",
            parent=styles["Heading4"],
            fontSize=11,
            spaceBefore=6,
            spaceAfter=2,
        ),
        "body": styles["Normal"],
        "score": ParagraphStyle(
            "PetraScore",
            parent=styles["Heading1"],
            fontSize=36,
            alignment=TA_CENTER,
            textColor=BRAND,
            spaceAfter=12,
        ),
    }


def _build(story: list, title: str) -> bytes:
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=0.8 * inch,
        leftMargin=0.8 * inch,
        topMargin=0.8 * inch,
        bottomMargin=0.8 * inch,
        title=title,
        author="Pet.Ra's",
    )
    doc.build(story)
    return buffer.getvalue()


def render_guide_pdf(guide: dict, pet_name: str | None = None, owner_name: str | None = None) -> bytes:
    """
    Render a pet parent guide ({"sections": [{title, description, contents: [...]}]}) as PDF bytes.
    Premium tips are included; the paywall is enforced before this is called.
    """
    s = _styles()
    story = []

    title = f"{pet_name}'s Pet Parent Guide" if pet_name else "Your Pet Parent Guide"
    story.append(Paragraph(escape(title), s["title"]))
    if owner_name:
        story.append(Paragraph(f"Prepared for {escape(owner_name)}", s["subtitle"]))
    story.append(Spacer(1, 0.25 * inch))

    for section in guide.get("sections", []):
        story.append(Paragraph(escape(section.get("title", "")), s["heading"]))
        if section.get("description"):
            story.append(Paragraph(f"<i>{escape(section['description'])}</i>", s["body"]))
        contents = sorted(section.get("contents", []), key=lambda c: c.get("order") or 0)
        for tip in contents:
            label = escape(tip.get("title", ""))
            if tip.get("difficulty"):
                label += f" <font color='grey' size='8'>({escape(tip['difficulty'])})</font>"
            story.append(Paragraph(label, s["tip_title"]))
            story.append(Paragraph(escape(tip.get("content", "")), s["body"]))

    story.append(Spacer(1, 0.3 * inch))
    story.append(Paragraph("Pet.Ra's · Kerala · thepetra.in", s["subtitle"]))
    return _build(story, title)


def render_assessment_pdf(result: dict, answers=None) -> bytes:
    """Render a readiness report: score card, category breakdown and preparation checklist."""
    s = _styles()
    story = []

    story.append(Paragraph("Pet Readiness Report", s["title"]))
    a = AssessmentAnswers.from_dict(answers or {})
    if a.considering_pet_types:
        pets = ", ".join(sorted(a.considering_pet_types))
        story.append(Paragraph(f"Considering: {escape(pets)}", s["subtitle"]))
    story.append(Spacer(1, 0.2 * inch))

    story.append(Paragraph(f"{result.get('score', 0)}/100", s["score"]))
    story.append(Paragraph(f"<b>{escape(result.get('message', ''))}</b>", s["body"]))
    if result.get("description"):
        story.append(Paragraph(escape(result["description"]), s["body"]))

    categories = result.get("categories") or {}
    if categories:
        story.append(Paragraph("Score Breakdown", s["heading"]))
        rows = [["Area", "Points", "Out of"]]
        for cat in categories.values():
            rows.append([cat.get("label", ""), str(cat.get("points", 0)), str(cat.get("max_points", 0))])
        table = Table(rows, colWidths=[3.2 * inch, 1.2 * inch, 1.2 * inch])
        table.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, 0), BRAND),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("ALIGN", (1, 0), (-1, -1), "CENTER"),
            ("GRID", (0, 0), (-1, -1), 0.4, colors.lightgrey),
            ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.HexColor("#FFF9F1")]),
        ]))
        story.append(table)

    checklist = result.get("checklist") or []
    story.append(Paragraph("Preparation Checklist", s["heading"]))
    if not checklist:
        story.append(Paragraph("Nothing outstanding. You are well prepared.", s["body"]))
    for item in checklist:
        mark = PRIORITY_MARK.get(item.get("priority"), "")
        story.append(Paragraph(f"• <b>[{mark}]</b> {escape(item.get('task', ''))}", s["body"]))

    return _build(story, "Pet Readiness Report")
