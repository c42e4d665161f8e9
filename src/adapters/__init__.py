"""Adapters that connect the nudge core to storage, config files and evaluators."""
