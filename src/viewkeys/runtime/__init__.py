"""Telemetry and settings shared by the engine."""
