from __future__ import annotations

import pytest

from ecom_api.infrastructure.logging import resolve_log_level


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("debug", "DEBUG"),
        (" warning ", "WARNING"),
        ("", "INFO"),
        ("verbose", "INFO"),
        ("notset", "INFO"),
    ],
)
def test_resolve_log_level_normalizes_and_falls_back_to_info(raw: str, expected: str) -> None:
    assert resolve_log_level(raw) == expected
