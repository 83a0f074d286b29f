"""Tracking module."""

from .registry import IdentityRegistry
from .tracker import AssignmentResult, Tracker
from .assigner import IdentityAssigner

__all__ = ["AssignmentResult", "IdentityAssigner", "IdentityRegistry", "Tracker"]
