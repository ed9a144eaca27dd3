from django.core.exceptions import ImproperlyConfigured
from django.core.management.base import BaseCommand, CommandError

import django_gqlgraph.conf as conf
from django_gqlgraph.schema import compile_schema, publish_schema
from django_gqlgraph.types import TypeGraphError


class Command(BaseCommand):
    help = "Print the GraphQL schema built from settings.GQLGRAPH"

    def add_arguments(self, parser):
        parser.add_argument(
            "--digest", action="store_true", help="Print only the SHA256 digest of the schema"
        )
        parser.add_argument(
            "--publish",
            action="store_true",
            help="Hand the schema to the configured artifact writer",
        )

    def handle(self, *args, **options):
        conf.reset_schema_cache()
        try:
            schema = conf.get_schema()
            if options["publish"]:
                digest = publish_schema(conf.get_artifact_writer(), schema=schema)
                self.stdout.write(self.style.SUCCESS(f"Schema published ({digest})"))
                return
        except (TypeGraphError, ImproperlyConfigured) as exc:
            raise CommandError(str(exc)) from exc

        sdl, digest = compile_schema(schema)
        self.stdout.write(digest if options["digest"] else sdl)
