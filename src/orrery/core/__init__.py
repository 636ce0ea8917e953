"""Simulation core: kinematics, physics clock, focus tracking and camera."""
