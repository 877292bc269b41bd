"""Test suite for the exercise tracker."""
