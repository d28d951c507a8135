"""Helpers - pure functions shared by services."""

from helpers import dates, fingerprint, formulas

__all__ = ["dates", "fingerprint", "formulas"]
