import os

from hypothesis import HealthCheck, settings

# HYPOTHESIS_PROFILE=ci runs more examples without deadlines
settings.register_profile(
    "ci", max_examples=500, deadline=None, suppress_health_check=[HealthCheck.too_slow]
)
settings.register_profile("dev", max_examples=100)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))
