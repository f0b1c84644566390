"""
Common test constants shared across all test files.
"""

# Test user credentials
TEST_PASSWORD = (
    "testpass123"  # noqa: S105  # nosec B105 - Test password, not a security issue
)
