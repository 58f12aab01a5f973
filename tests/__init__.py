"""Tests - Test suite for the constraint system."""
