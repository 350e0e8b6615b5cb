from __future__ import annotations

import numpy as np
import pytest

from orbit_sandbox.core.profiles import (
    NAME_BANK,
    PROFILES,
    get_profile,
    kind_names,
    roll_kind,
    roll_profile,
)


def test_kinds_and_weights() -> None:
    assert kind_names() == ["ROCKY", "OCEAN", "GAS"]
    assert np.isclose(sum(p.weight for p in PROFILES.values()), 1.0)
    assert get_profile("gas").kind == "GAS"
    with pytest.raises(ValueError, match="unknown body kind"):
        get_profile("COMET")


def test_roll_kind_follows_weights() -> None:
    rng = np.random.default_rng(5)
    rolls = [roll_kind(rng) for _ in range(4000)]
    share = rolls.count("ROCKY") / len(rolls)
    assert 0.35 < share < 0.45
    assert set(rolls) == set(kind_names())


def test_roll_profile_within_size_range() -> None:
    rng = np.random.default_rng(11)
    for _ in range(50):
        rolled = roll_profile(rng, "OCEAN")
        assert rolled.kind == "OCEAN"
        assert 7.0 <= rolled.size <= 10.0
        assert rolled.name in {name.upper() for name in NAME_BANK}
