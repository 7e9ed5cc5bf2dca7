from __future__ import annotations

import pytest

from tilegen.layout import ReferenceLayout, build_reference_layout


@pytest.fixture(scope="session")
def layout() -> ReferenceLayout:
    return build_reference_layout()
