"""Steering file generation from BMAD planning artifacts."""

from .generator import SteeringGenerator, generate_steering

__all__ = ["SteeringGenerator", "generate_steering"]
