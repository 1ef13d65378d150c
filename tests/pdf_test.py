"""PDF rendering for guides and readiness reports."""

from petra.guide import static_guide
from petra.pdf_generator import render_assessment_pdf, render_guide_pdf
from readiness import score_answers


def test_render_guide_pdf_returns_pdf_bytes():
    pdf = render_guide_pdf(static_guide({"breed": "Beagle"}, "direct"), pet_name="Bruno", owner_name="Anu")
    assert pdf.startswith(b"%PDF")
    assert len(pdf) > 1000


def test_render_guide_pdf_escapes_markup():
    guide = {"sections": [{"title": "A & B <tips>", "contents": [{"title": "Use <b>", "content": "x < y & z"}]}]}
    assert render_guide_pdf(guide).startswith(b"%PDF")


def test_render_guide_pdf_empty_guide():
    assert render_guide_pdf({"sections": []}).startswith(b"%PDF")


def test_render_assessment_pdf():
    answers = {"outdoorAccess": ["none"], "consideringPetTypes": ["dog", "cat"], "monthlyBudget": "up-to-1k"}
    pdf = render_assessment_pdf(score_answers(answers), answers)
    assert pdf.startswith(b"%PDF")


def test_render_assessment_pdf_without_answers():
    pdf = render_assessment_pdf(score_answers({"outdoorAccess": ["balcony"]}))
    assert pdf.startswith(b"%PDF")
