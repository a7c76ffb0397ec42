"""Derived views projected from the canonical screenplay model."""

from __future__ import annotations

from .fountain_export import export_fountain
from .llm_analysis import LLMAnalysisData, project_llm_analysis
from .web_display import WebDisplayData, project_web_display

__all__ = [
    "LLMAnalysisData",
    "WebDisplayData",
    "export_fountain",
    "project_llm_analysis",
    "project_web_display",
]
