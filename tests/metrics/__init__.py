"""
Tests for the step metrics subsystem.
"""
