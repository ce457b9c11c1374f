"""Pytest configuration and shared fixtures."""

import os

import pytest

from specsearch.search.models import SearchableDocument


@pytest.fixture(autouse=True)
def isolate_environment():
    """Isolate environment variables for each test.

    This prevents test pollution where one test's environment
    changes affect other tests.
    """
    original_env = os.environ.copy()

    yield

    os.environ.clear()
    os.environ.update(original_env)


OAUTH_CONTENT = """\
## Overview
This spec describes the complete authentication flow including token refresh.
The OAuth2 flow supports authorization code grant with PKCE.

## Implementation
- Token generation
- Refresh token handling
- Session management"""

JWT_CONTENT = """\
## Overview
JWT authentication flow with RS256 signing.
Provides token validation and refresh capabilities."""

SESSION_CONTENT = """\
## Overview
Manage user sessions across multiple devices.
Support for session expiration and renewal."""

RATE_LIMIT_CONTENT = """\
## Overview
Implement rate limiting to prevent abuse.
Uses token bucket algorithm.
The legacy limiter is deprecated."""


@pytest.fixture
def sample_records() -> list[dict]:
    """Raw spec records as the surrounding tool would provide them."""
    return [
        {
            "path": "042-oauth2-implementation",
            "name": "042-oauth2-implementation",
            "status": "in-progress",
            "priority": "high",
            "tags": ["api", "security", "auth"],
            "title": "OAuth2 Authentication Flow",
            "description": "Implement OAuth2 authentication with token refresh",
            "content": OAUTH_CONTENT,
            "created": "2025-09-15",
            "updated": "2025-11-02",
            "assignee": "alice",
        },
        {
            "path": "038-jwt-token-service",
            "name": "038-jwt-token-service",
            "status": "complete",
            "priority": "medium",
            "tags": ["api", "auth"],
            "title": "JWT Token Service",
            "description": "JWT-based authentication service",
            "content": JWT_CONTENT,
            "created": "2025-10-01",
            "updated": "2025-10-20",
            "assignee": "bob",
        },
        {
            "path": "051-user-session-management",
            "name": "051-user-session-management",
            "status": "planned",
            "priority": "medium",
            "tags": ["api", "users"],
            "title": "User Session Management",
            "description": "Handle user sessions and authentication state",
            "content": SESSION_CONTENT,
            "created": "2025-11-05",
        },
        {
            "path": "025-api-rate-limiting",
            "name": "025-api-rate-limiting",
            "status": "complete",
            "priority": "high",
            "tags": ["api", "security"],
            "title": "API Rate Limiting",
            "description": "Rate limiting for API endpoints",
            "content": RATE_LIMIT_CONTENT,
            "created": "2025-08-20",
            "updated": "2025-09-01",
            "assignee": "alice",
        },
    ]


@pytest.fixture
def sample_specs(sample_records) -> list[SearchableDocument]:
    """Sample spec documents with diverse metadata for search testing."""
    return [SearchableDocument(**record) for record in sample_records]


@pytest.fixture
def cross_field_specs() -> list[SearchableDocument]:
    """Specs whose query terms are spread across different fields."""
    return [
        SearchableDocument(
            path="123-ai-coding-agent-integration",
            name="123-ai-coding-agent-integration",
            status="planned",
            priority="high",
            tags=["ai", "agent", "integration"],
            title="AI Coding Agent Integration",
            description="Integrate AI coding agents into the workflow",
            content=(
                "## Overview\n"
                "This spec describes how to orchestrate multiple coding agents.\n"
                "The system will manage agent communication and task distribution."
            ),
        ),
        SearchableDocument(
            path="099-simple-api-docs",
            name="099-simple-api-docs",
            status="complete",
            priority="low",
            tags=["docs", "api"],
            title="Simple API Documentation",
            description="Document the REST API",
            content="## API Documentation\nBasic endpoint documentation.",
        ),
    ]
