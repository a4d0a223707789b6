"""Test utilities for viewkit applications::

    from viewkit.testing import TestClient, assert_hx_trigger, assert_is_fragment
"""

from viewkit.testing.assertions import (
    assert_hx_push_url,
    assert_hx_redirect,
    assert_hx_reswap,
    assert_hx_retarget,
    assert_hx_trigger,
    assert_is_error_fragment,
    assert_is_fragment,
    hx_headers,
)
from viewkit.testing.client import TestClient

__all__ = [
    "TestClient",
    "assert_hx_push_url",
    "assert_hx_redirect",
    "assert_hx_reswap",
    "assert_hx_retarget",
    "assert_hx_trigger",
    "assert_is_error_fragment",
    "assert_is_fragment",
    "hx_headers",
]
