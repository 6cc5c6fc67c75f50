"""Local rule-based diagnostic engine."""

from symptom_intake.engine.analyzer import analyze
from symptom_intake.engine.refinement import refine

__all__ = [
    "analyze",
    "refine",
]
