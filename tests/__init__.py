"""Test package for django-gqlgraph."""
