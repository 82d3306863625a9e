"""Public-holiday schedule fetching, reconciliation and writing."""
