"""Bulk provisioning of resource accounts from CSV files."""
