"""Clinic staff portal: authentication, role-based access control and staff administration."""
