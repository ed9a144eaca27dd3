from django.apps import AppConfig


class GqlGraphConfig(AppConfig):
    name = "django_gqlgraph"
    verbose_name = "Django GraphQL type graph"

    def ready(self) -> None:  # pragma: no cover - import side effects
        from . import checks  # noqa: F401
