"""End-user help text for the query language."""

SEARCH_SYNTAX_HELP = """
Search Syntax:
  term              Simple term search
  "exact phrase"    Match exact phrase
  term1 AND term2   Both terms must match (AND is optional)
  term1 OR term2    Either term matches
  NOT term          Exclude specs with term
  (a OR b) AND c    Parentheses group expressions

Field Filters:
  status:in-progress    Filter by status (planned, in-progress, complete, archived)
  tag:api               Filter by tag
  priority:high         Filter by priority (low, medium, high, critical)
  assignee:marvin       Filter by assignee
  title:dashboard       Search in title only
  name:oauth            Search in spec name

Date Filters:
  created:>2025-11-01             Created after date
  created:<2025-11-15             Created before date
  created:2025-11-01..2025-11-15  Created in date range
  updated:>=2025-11-01            Updated on or after date
  created:2025-11-01              Created on date

Fuzzy Matching:
  authetication~     Matches "authentication" (typo-tolerant)

Examples:
  api authentication                 Find specs with both terms
  tag:api status:planned             API specs that are planned
  "user session" OR "token refresh"  Either phrase
  dashboard NOT deprecated           Dashboard specs, exclude deprecated
  authetication~                     Find despite typo
""".strip()


def get_search_syntax_help() -> str:
    """Get the query syntax reference shown to users."""
    return SEARCH_SYNTAX_HELP
