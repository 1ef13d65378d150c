"""Petra services - breed recommendations, pet parent guides, PDFs, payments and leads."""

from petra.guide import generate_guide, static_guide
from petra.pdf_generator import render_assessment_pdf, render_guide_pdf
from petra.recommend import profile_from_answers, recommend

__all__ = [
    "generate_guide",
    "static_guide",
    "render_assessment_pdf",
    "render_guide_pdf",
    "profile_from_answers",
    "recommend",
]
