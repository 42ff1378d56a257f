"""
Test suite for request dependencies.

System role: Verification of caller identity and credential extraction
"""

import pytest

from chat_backend.api.deps import get_access_token, get_user_id


class TestRequestDependencies:
    """Test suite for header-derived dependencies."""

    @pytest.mark.parametrize(
        "header,expected",
        [
            ("Bearer abc.def", "abc.def"),
            ("bearer   abc ", "abc"),
            ("Basic dXNlcjpwYXNz", None),
            ("Bearer ", None),
            (None, None),
            ("", None),
        ],
    )
    def test_get_access_token_should_parse_bearer_scheme(self, header, expected) -> None:
        """Test only non-empty Bearer credentials are accepted."""
        assert get_access_token(authorization=header) == expected

    def test_get_user_id_should_default_to_anonymous(self) -> None:
        """Test a missing header maps to the anonymous user."""
        assert get_user_id(x_user_id=None) == "anonymous"
        assert get_user_id(x_user_id="user-9") == "user-9"
