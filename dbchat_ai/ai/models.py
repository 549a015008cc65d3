"""Structured answers the SQL generator asks models for.

Models are told to answer with camelCase JSON; ``CamelModel`` accepts it
directly and serializes back the same way. Every field has a default so a
model leaving out an optional part still parses.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from dbchat_ai.core.models.base import CamelModel


class AIQuery(CamelModel):
    """Plain natural-language-to-SQL answer."""

    summary: str = ""
    query: str = ""


class EnterpriseAIQuery(CamelModel):
    """SQL plus the analysis produced in enterprise mode."""

    query: str = ""
    analysis: str = ""
    optimizations: List[str] = Field(default_factory=list)
    estimated_performance: str = ""
    recommendations: List[str] = Field(default_factory=list)
    complexity_score: int = 0
    security_considerations: List[str] = Field(default_factory=list)
    scalability_notes: str = ""
    validation_errors: List[str] = Field(default_factory=list)


class PerformanceMetrics(CamelModel):
    estimated_execution_time: str = ""
    estimated_memory_usage: str = ""
    complexity_reduction: int = 0


class QueryOptimization(CamelModel):
    """Rewritten statement and the reasoning behind it."""

    optimized_query: str = ""
    analysis: str = ""
    recommendations: List[str] = Field(default_factory=list)
    estimated_improvement: float = 0.0
    optimization_strategies: List[str] = Field(default_factory=list)
    performance_metrics: PerformanceMetrics = Field(default_factory=PerformanceMetrics)
    security_recommendations: List[str] = Field(default_factory=list)
    scalability_notes: str = ""


class PerformanceImpact(CamelModel):
    estimated_improvement: float = 0.0
    implementation_effort: str = ""
    risk_level: str = ""


class SchemaAnalysis(CamelModel):
    """Design review of a whole schema."""

    recommendations: List[str] = Field(default_factory=list)
    insights: List[str] = Field(default_factory=list)
    opportunities: List[str] = Field(default_factory=list)
    indexing_strategies: List[str] = Field(default_factory=list)
    security_recommendations: List[str] = Field(default_factory=list)
    scalability_recommendations: List[str] = Field(default_factory=list)
    performance_impact: PerformanceImpact = Field(default_factory=PerformanceImpact)


class QueryValidationReport(CamelModel):
    """Security and compliance review of one statement."""

    is_valid: bool = True
    security_issues: List[str] = Field(default_factory=list)
    performance_concerns: List[str] = Field(default_factory=list)
    compliance_issues: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    risk_level: Optional[str] = None
    validation_score: float = 0.0


class QueryPatternAnalysis(CamelModel):
    """Patterns and trends found in a set of past queries."""

    patterns: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    trends: List[str] = Field(default_factory=list)
    opportunities: List[str] = Field(default_factory=list)
