"""GUI-agnostic core of OrgTree Toolkit: models, loading and services."""
