"""Raft quorum configurations, vote tallying, commit index computation and the unstable log."""

__version__ = "0.1.0"
__all__ = ["errors", "quorum", "majority", "joint", "log_unstable"]