"""Logging and metrics for change-tracker."""
