"""Local heuristics over generated SQL.

Nothing here talks to a model or a database: ``validate_query`` flags risky
or slow constructs and ``calculate_complexity`` scores how involved a
statement is. Keywords are matched as whole words, case-insensitively, so
a column such as ``updated_at`` does not count as ``UPDATE``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Tuple

DANGEROUS_KEYWORDS: Tuple[str, ...] = ("DROP", "DELETE", "TRUNCATE", "ALTER", "CREATE", "INSERT", "UPDATE")

SQL_SERVER_TYPES = ("MSSQL", "SQLSERVER")

# (pattern, points) - each pattern scores once, however often it occurs
COMPLEXITY_WEIGHTS: Tuple[Tuple[str, int], ...] = (
    (r"\bJOIN\b", 10),
    (r"\bWHERE\b", 5),
    (r"\bGROUP\s+BY\b", 15),
    (r"\bORDER\s+BY\b", 5),
    (r"\bHAVING\b", 10),
    (r"\(", 20),
    (r"\bUNION\b", 15),
    (r"\bWITH\b", 25),
)


@dataclass
class QueryValidationResult:
    """Outcome of the local validation of one statement."""

    is_valid: bool = True
    errors: List[str] = field(default_factory=list)


def _contains(pattern: str, upper_sql: str) -> bool:
    return re.search(pattern, upper_sql) is not None


def validate_query(sql: str, database_type: str = "") -> QueryValidationResult:
    """Check a statement for dangerous operations and common performance traps.

    Args:
        sql: SQL text to check
        database_type: Target database type; SQL Server adds a NOLOCK check

    Returns:
        QueryValidationResult; valid when no message was produced
    """
    if not sql or not sql.strip():
        return QueryValidationResult(is_valid=False, errors=["SQL query is empty"])

    upper_sql = sql.upper()
    errors: List[str] = []

    for keyword in DANGEROUS_KEYWORDS:
        if _contains(rf"\b{keyword}\b", upper_sql):
            errors.append(f"Query contains potentially dangerous operation: {keyword}")

    if _contains(r"\bSELECT\s+\*", upper_sql):
        errors.append("Consider using specific column names instead of SELECT * for better performance")

    if _contains(r"\bCROSS\s+JOIN\b", upper_sql) and not _contains(r"\bWHERE\b", upper_sql):
        errors.append("CROSS JOIN without WHERE clause may cause performance issues")

    if (database_type or "").strip().upper() in SQL_SERVER_TYPES and _contains(r"\bNOLOCK\b", upper_sql):
        errors.append("NOLOCK hint may lead to dirty reads and data inconsistency")

    return QueryValidationResult(is_valid=not errors, errors=errors)


def calculate_complexity(sql: str) -> int:
    """Score the structural complexity of a statement."""
    upper_sql = (sql or "").upper()
    return sum(points for pattern, points in COMPLEXITY_WEIGHTS if _contains(pattern, upper_sql))
