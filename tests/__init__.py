"""
Tests for the encounter phase segmentation package.
"""
