"""Command-line interface for Repository Tracker."""
