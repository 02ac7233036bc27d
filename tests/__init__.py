"""Tests for universal-init."""
