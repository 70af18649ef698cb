"""
Decision-package synthesis from normalized site signals.

Resolvers (each a pure function of signals + rule table):
    - cost_drivers.py: signals -> priced cost drivers
    - pm_actions.py: elevated signals -> owner-assigned actions
    - contingency.py: aggregate severity -> contingency band
    - bid_assumptions.py: baseline + triggered bid qualifications
    - confidence.py: data availability + warnings -> confidence score
    - implications.py: headline implications for high-severity signals

engine.analyze_site ties them together with the Monte Carlo estimator.
"""

from site_intel_internal.synthesis.config import ConfigurationError, RulesConfig, get_rules_config, load_rules_config
from site_intel_internal.synthesis.engine import analyze_site

__all__ = [
    "ConfigurationError",
    "RulesConfig",
    "get_rules_config",
    "load_rules_config",
    "analyze_site",
]
