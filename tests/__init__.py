"""Test package for staff_records."""
