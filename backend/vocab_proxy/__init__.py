"""Learned-vocabulary proxy for the Duolingo private API."""
