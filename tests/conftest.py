import os, sys
import numpy as np
import pytest

# Ensure `src/` is importable
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from fcakit.context import FormalContextBuilder, context_from_matrix


LIVING_OBJECTS = ["leech", "bream", "frog", "dog", "spike_weed", "reed", "bean", "maize"]
LIVING_ATTRIBUTES = [
    "needs_water", "lives_in_water", "lives_on_land", "has_limbs",
    "monocotyledon", "dicotyledon", "can_move",
]
LIVING_MATRIX = [
    [1, 1, 1, 0, 0, 0, 1],  # leech
    [1, 1, 0, 1, 0, 0, 1],  # bream
    [1, 1, 1, 1, 0, 0, 1],  # frog
    [1, 0, 1, 1, 0, 0, 1],  # dog
    [1, 1, 0, 0, 1, 0, 0],  # spike_weed
    [1, 1, 1, 0, 1, 0, 0],  # reed
    [1, 0, 1, 0, 0, 1, 0],  # bean
    [1, 0, 1, 0, 1, 0, 0],  # maize
]

INTEGRITY_LEVELS = {
    "L0": [],
    "L1": ["unit_test", "code_review"],
    "L2": ["unit_test", "code_review", "integration_test", "static_analysis"],
    "L3": ["unit_test", "code_review", "integration_test", "static_analysis",
           "formal_review", "coverage_80", "fault_injection"],
}


@pytest.fixture
def living_beings():
    return context_from_matrix(
        LIVING_OBJECTS, LIVING_ATTRIBUTES, np.array(LIVING_MATRIX, dtype=bool),
        id="living", name="Living beings and water",
    )


@pytest.fixture
def integrity_ctx():
    b = FormalContextBuilder(id="integrity", name="Integrity levels")
    for attrs in INTEGRITY_LEVELS.values():
        for m in attrs:
            b.add_attribute(m)
    for g, attrs in INTEGRITY_LEVELS.items():
        b.add_object_attributes(g, attrs)
    return b.build()


@pytest.fixture
def scenario_ctx():
    # L0 = {}, L1 = {a}, L2 = {a, b}
    return (
        FormalContextBuilder(id="scenario", name="Scenario")
        .add_attribute("a")
        .add_attribute("b")
        .add_object("L0")
        .add_object_attributes("L1", ["a"])
        .add_object_attributes("L2", ["a", "b"])
        .build()
    )


@pytest.fixture
def random_contexts():
    rng = np.random.default_rng(7)
    out = []
    for k in range(6):
        n_g = int(rng.integers(1, 7))
        n_m = int(rng.integers(1, 6))
        mat = rng.random((n_g, n_m)) < 0.5
        out.append(context_from_matrix(
            [f"g{i}" for i in range(n_g)],
            [f"m{j}" for j in range(n_m)],
            mat,
            id=f"rand{k}",
        ))
    return out
