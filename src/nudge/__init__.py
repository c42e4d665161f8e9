"""Core domain package for nudge.

Core contains message sanitization, catalog ordering, eligibility and
experiment-aware selection without any storage or UI-specific code, keeping
the selection logic portable across hosts.
"""
