from __future__ import annotations


def test_sanity_import() -> None:
    import orbit_sandbox as osb
    import numpy as np

    assert isinstance(osb.__version__, str)
    assert np.add(1.0, 2.0) == 3.0
