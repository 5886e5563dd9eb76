"""Service-layer helpers (generation orchestration, AI tailoring)."""

__all__ = [
    "enhancement",
    "policy_generator",
]
