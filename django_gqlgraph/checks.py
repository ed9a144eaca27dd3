"""System checks validating the configured type graph."""

from __future__ import annotations

from django.conf import settings
from django.core.checks import Error, register
from django.core.exceptions import ImproperlyConfigured

from . import conf
from .types import TypeGraphError


@register("graphql")
def check_type_graph(app_configs=None, **kwargs):
    if getattr(settings, "GQLGRAPH", None) is None:
        return []

    conf.reset_schema_cache()
    try:
        conf.get_type_map()
    except TypeGraphError as exc:
        return [
            Error(
                str(exc),
                hint="Fix the type definitions listed in settings.GQLGRAPH.",
                obj=type(exc).__name__,
                id="gqlgraph.E001",
            )
        ]
    except ImproperlyConfigured as exc:
        return [Error(str(exc), obj="settings.GQLGRAPH", id="gqlgraph.E002")]
    return []
