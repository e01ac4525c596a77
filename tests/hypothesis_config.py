"""
Hypothesis configuration for property-based testing.

Profiles are registered once on import; test modules use the shared
settings objects below.
"""

import hypothesis
from hypothesis import HealthCheck, Phase, settings

hypothesis.settings.register_profile(
    "default",
    settings(
        database=None,  # No example database between runs
        print_blob=True,
        max_examples=100,
        deadline=None,  # Parsing time varies with the generated source
        phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
        derandomize=True,
        suppress_health_check=[HealthCheck.too_slow],
    ),
)

hypothesis.settings.register_profile(
    "ci",
    settings(
        max_examples=300,
        deadline=None,
        print_blob=True,
        derandomize=True,
        suppress_health_check=[HealthCheck.too_slow],
    ),
)

hypothesis.settings.load_profile("default")

DEFAULT_SETTINGS = settings(
    max_examples=100,
    deadline=None,
    print_blob=True,
    derandomize=True,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.filter_too_much],
)

# Whole-pipeline properties parse every example twice
PIPELINE_SETTINGS = settings(
    max_examples=50,
    deadline=None,
    print_blob=True,
    derandomize=True,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.filter_too_much],
)
