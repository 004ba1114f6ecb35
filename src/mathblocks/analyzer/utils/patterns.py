"""Regular expressions for recognising equations and problem statements.

All patterns are case-insensitive and operate on flattened element text.
Variables are single letters; numbers are runs of digits and dots, as
written in lesson content ("2x", "0.5y", "3").
"""

from __future__ import annotations

import re

# ─────────────────────────────────────────────────────────────────────────────
# Equation shapes (tried in this order)
# ─────────────────────────────────────────────────────────────────────────────

# y = 2x + 1  |  2x + 3 = 7
LINEAR_EQUATION_PATTERN = re.compile(
    r"([a-z])\s*=\s*([0-9.]*[a-z])\s*[+\-]\s*([0-9.]+)"
    r"|([0-9.]*[a-z])\s*[+\-]\s*([0-9.]+)\s*=\s*([0-9.]+)",
    re.IGNORECASE,
)

# y = x^2 + 2x + 1  |  x² - 3x + 4 = 0
QUADRATIC_EQUATION_PATTERN = re.compile(
    r"([a-z])\s*=\s*([a-z])(\^2|²)\s*[+\-]\s*([0-9.]*[a-z])\s*[+\-]\s*([0-9.]+)"
    r"|([a-z])(\^2|²)\s*[+\-]\s*([0-9.]*[a-z])\s*[+\-]\s*([0-9.]+)\s*=\s*([0-9.]+)",
    re.IGNORECASE,
)

# y = 3*(x-1)/2
GENERAL_EQUATION_PATTERN = re.compile(r"([a-z])\s*=\s*([0-9.a-z+\-*/^()]+)", re.IGNORECASE)

# Variable extraction
ASSIGNED_VARIABLE_PATTERN = re.compile(r"([a-z])\s*=", re.IGNORECASE)
LEADING_TERM_PATTERN = re.compile(r"([0-9.]*[a-z])", re.IGNORECASE)
SQUARED_TERM_PATTERN = re.compile(r"([a-z])(\^2|²)", re.IGNORECASE)
LETTER_PATTERN = re.compile(r"[a-z]", re.IGNORECASE)

# ─────────────────────────────────────────────────────────────────────────────
# Problem statements
# ─────────────────────────────────────────────────────────────────────────────

PROBLEM_CUE_PATTERNS = (
    re.compile(r"solve\s+for\s+([a-z])\s*:\s*(.*)", re.IGNORECASE),
    re.compile(r"find\s+the\s+value\s+of\s+([a-z])\b", re.IGNORECASE),
    re.compile(r"calculate\s+the\s+([a-z])\b", re.IGNORECASE),
    re.compile(r"determine\s+([a-z])\b", re.IGNORECASE),
    re.compile(r"([a-z0-9.]+[a-z])\s*[+\-*/]\s*([0-9.]+)\s*=\s*([0-9.]+)", re.IGNORECASE),
)

# coefficient, variable, sign, constant, right-hand side: "2x + 3 = 7"
# The right-hand side must be a lone number: "3x + 2 = 2x + 5" does not match.
SOLVABLE_LINEAR_PATTERN = re.compile(
    r"(?<![a-z0-9.])([0-9.]*)\s*([a-z])\s*([+\-])\s*([0-9.]+)\s*=\s*(-?[0-9.]+)"
    r"(?![a-z0-9.(^²*/])(?!\s*[+\-*/^]\s*[a-z0-9.(])",
    re.IGNORECASE,
)

# ─────────────────────────────────────────────────────────────────────────────
# Solution steps
# ─────────────────────────────────────────────────────────────────────────────

# Operator-bearing run: "2x = 4", "x = (7 - 3) / 2"
STEP_EXPRESSION_PATTERN = re.compile(
    r"[a-z0-9.()²]+(?:\s*[=+\-*/^]\s*[a-z0-9.()²]+)+",
    re.IGNORECASE,
)
# Any run of letters, digits and operators
STEP_TOKEN_PATTERN = re.compile(r"[a-z0-9.=+\-*/^()]+", re.IGNORECASE)
