"""Pet readiness assessment: questionnaire, answers record and deterministic scoring."""

from readiness.answers import AssessmentAnswers
from readiness.questions import expand_questions, record_answer
from readiness.scoring import build_checklist, score_answers, tier_for_score

__all__ = [
    "AssessmentAnswers",
    "expand_questions",
    "record_answer",
    "score_answers",
    "tier_for_score",
    "build_checklist",
]
