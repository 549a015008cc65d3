"""System prompts of the SQL generator.

Each builder returns the full system prompt for one task: the role, the
schema (one line per table), the database type, task-specific instructions
and the JSON document the answer must consist of.
"""

from __future__ import annotations

from typing import Dict, List, Sequence

COMPLEXITY_INSTRUCTIONS: Dict[str, List[str]] = {
    "expert": [
        "EXPERT MODE: Generate highly optimized queries with:",
        "- Advanced JOIN optimization strategies",
        "- Subquery and CTE optimization",
        "- Window functions and analytical queries",
        "- Performance monitoring considerations",
        "- Resource usage optimization",
    ],
    "advanced": [
        "ADVANCED MODE: Generate optimized queries with:",
        "- Efficient JOIN strategies",
        "- Index-aware query design",
        "- Query plan optimization",
    ],
    "intermediate": [
        "INTERMEDIATE MODE: Generate balanced queries with:",
        "- Basic optimization techniques",
        "- Standard JOIN patterns",
    ],
}
BASIC_COMPLEXITY_INSTRUCTIONS = ["BASIC MODE: Generate simple, readable queries"]

OPTIMIZATION_STRATEGY_INSTRUCTIONS: Dict[str, str] = {
    "performance": "Focus on execution speed and query plan optimization",
    "memory": "Focus on memory usage and resource efficiency",
    "comprehensive": "Provide balanced optimization across all aspects",
}

SQL_QUERY_FORMAT = """{
  "summary": "short description of what the query returns",
  "query": "SQL query"
}"""

ENTERPRISE_QUERY_FORMAT = """{
  "query": "optimized SQL query",
  "analysis": "detailed performance analysis",
  "optimizations": ["optimization1", "optimization2"],
  "estimatedPerformance": "performance estimate",
  "recommendations": ["recommendation1", "recommendation2"],
  "complexityScore": 85,
  "securityConsiderations": ["security1", "security2"],
  "scalabilityNotes": "scalability considerations"
}"""

OPTIMIZATION_FORMAT = """{
  "optimizedQuery": "optimized version",
  "analysis": "detailed performance analysis",
  "recommendations": ["rec1", "rec2"],
  "estimatedImprovement": 25.5,
  "optimizationStrategies": ["strategy1", "strategy2"],
  "performanceMetrics": {
    "estimatedExecutionTime": "time estimate",
    "estimatedMemoryUsage": "memory estimate",
    "complexityReduction": 15
  },
  "securityRecommendations": ["security1", "security2"],
  "scalabilityNotes": "scalability considerations"
}"""

SCHEMA_ANALYSIS_FORMAT = """{
  "recommendations": ["rec1", "rec2"],
  "insights": ["insight1", "insight2"],
  "opportunities": ["opp1", "opp2"],
  "indexingStrategies": ["index1", "index2"],
  "securityRecommendations": ["security1", "security2"],
  "scalabilityRecommendations": ["scalability1", "scalability2"],
  "performanceImpact": {
    "estimatedImprovement": 35.5,
    "implementationEffort": "medium",
    "riskLevel": "low"
  }
}"""

VALIDATION_FORMAT = """{
  "isValid": true,
  "securityIssues": ["issue1", "issue2"],
  "performanceConcerns": ["concern1", "concern2"],
  "complianceIssues": ["compliance1", "compliance2"],
  "recommendations": ["rec1", "rec2"],
  "riskLevel": "low",
  "validationScore": 85.5
}"""

QUERY_PATTERN_FORMAT = """{
  "patterns": ["pattern1", "pattern2"],
  "recommendations": ["rec1", "rec2"],
  "trends": ["trend1", "trend2"],
  "opportunities": ["opp1", "opp2"]
}"""


def _schema_lines(schema_raw: Sequence[str]) -> List[str]:
    return ["Database Schema:", *schema_raw]


def _json_answer(json_format: str) -> List[str]:
    return ["Provide response in this JSON format:", json_format]


def build_sql_query_prompt(schema_raw: Sequence[str], database_type: str) -> str:
    """System prompt turning a question into one SQL statement."""
    lines = [
        "You are a helpful, expert SQL assistant. Translate the user's question into a single SQL query",
        f"that runs on {database_type} and only uses the tables and columns of the schema below.",
        "Only generate read-only queries unless the user explicitly asks to change data.",
        *_schema_lines(schema_raw),
        f"Database Type: {database_type}",
        "Answer with JSON only, no markdown, no explanation outside the JSON document.",
        *_json_answer(SQL_QUERY_FORMAT),
    ]
    return "\n".join(lines)


def build_enterprise_query_prompt(schema_raw: Sequence[str], database_type: str, complexity_level: str) -> str:
    """System prompt of enterprise query generation at a given complexity level."""
    lines = [
        "You are an enterprise-level database query optimizer and SQL generator with expertise in:",
        "1. Complex multi-table joins and subqueries",
        "2. Performance optimization and query execution plans",
        "3. Advanced SQL features (CTEs, window functions, recursive queries)",
        "4. Database-specific optimizations and best practices",
        "5. Security considerations and query validation",
        "6. Scalability and resource management",
        *_schema_lines(schema_raw),
        f"Database Type: {database_type}",
        f"Complexity Level: {complexity_level}",
        *COMPLEXITY_INSTRUCTIONS.get((complexity_level or "").lower(), BASIC_COMPLEXITY_INSTRUCTIONS),
        *_json_answer(ENTERPRISE_QUERY_FORMAT),
    ]
    return "\n".join(lines)


def build_optimization_prompt(
    schema_raw: Sequence[str], database_type: str, sql_query: str, optimization_strategy: str
) -> str:
    """System prompt asking for an optimized rewrite of a statement."""
    lines = [
        "You are an enterprise database performance optimization expert. "
        "Analyze and optimize the following SQL query:",
        "1. Identify performance bottlenecks and optimization opportunities",
        "2. Provide multiple optimization strategies",
        "3. Consider database-specific optimizations",
        "4. Analyze query execution plans and resource usage",
        "5. Provide security and scalability recommendations",
        *_schema_lines(schema_raw),
        f"Database Type: {database_type}",
        f"Optimization Strategy: {optimization_strategy}",
        f"Query to Optimize: {sql_query}",
    ]
    strategy_instruction = OPTIMIZATION_STRATEGY_INSTRUCTIONS.get((optimization_strategy or "").lower())
    if strategy_instruction:
        lines.append(strategy_instruction)
    lines.extend(_json_answer(OPTIMIZATION_FORMAT))
    return "\n".join(lines)


def build_schema_analysis_prompt(schema_raw: Sequence[str], database_type: str, analysis_scope: str) -> str:
    """System prompt asking for a design review of a schema."""
    lines = [
        "You are an enterprise database architect and performance expert. "
        "Analyze the following database schema and provide:",
        "1. Schema design recommendations and improvements",
        "2. Performance optimization opportunities",
        "3. Indexing strategies and recommendations",
        "4. Data modeling and normalization analysis",
        "5. Security and compliance considerations",
        "6. Scalability and maintenance recommendations",
        *_schema_lines(schema_raw),
        f"Database Type: {database_type}",
        f"Analysis Scope: {analysis_scope}",
        *_json_answer(SCHEMA_ANALYSIS_FORMAT),
    ]
    return "\n".join(lines)


def build_validation_prompt(schema_raw: Sequence[str], database_type: str, sql_query: str) -> str:
    """System prompt asking for a security and compliance review of a statement."""
    lines = [
        "You are an enterprise database security and validation expert. Analyze the following SQL query for:",
        "1. Security vulnerabilities and SQL injection risks",
        "2. Performance and resource usage concerns",
        "3. Compliance and best practice violations",
        "4. Data access and privacy considerations",
        "5. Scalability and maintenance issues",
        *_schema_lines(schema_raw),
        f"Database Type: {database_type}",
        f"Query to Validate: {sql_query}",
        *_json_answer(VALIDATION_FORMAT),
    ]
    return "\n".join(lines)


def build_query_pattern_prompt(
    schema_raw: Sequence[str], database_type: str, historical_queries: Sequence[str], timeframe_days: int
) -> str:
    """System prompt asking for patterns across past queries."""
    lines = [
        "You are a query pattern analyst. Analyze the following historical queries and provide:",
        "1. Identified query patterns",
        "2. Performance trends",
        "3. Optimization opportunities",
        "4. Recommendations for query improvement",
        *_schema_lines(schema_raw),
        f"Database Type: {database_type}",
        f"Analysis Timeframe: {timeframe_days} days",
        "Historical Queries:",
        *(f"- {query}" for query in historical_queries),
        *_json_answer(QUERY_PATTERN_FORMAT),
    ]
    return "\n".join(lines)
