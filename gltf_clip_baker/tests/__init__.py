"""Tests for the glTF Clip Baker addon."""
