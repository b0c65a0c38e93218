"""Role-specific dashboards."""
