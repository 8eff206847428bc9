import json

from django.core.management.base import BaseCommand, CommandError
from django.core.serializers.json import DjangoJSONEncoder

from rail_rest.core.registry import metadata_registry
from rail_rest.schema import SchemaGenerator


class Command(BaseCommand):
    help = "Export the OpenAPI document of the registered resources as JSON."

    def add_arguments(self, parser):
        parser.add_argument(
            "--out",
            dest="output_file",
            help="Output file path (default: stdout).",
        )
        parser.add_argument(
            "--indent",
            type=int,
            default=2,
            help="Indentation level for JSON output (default: 2).",
        )
        parser.add_argument(
            "--resource",
            action="append",
            dest="resources",
            default=[],
            help="Short name of a resource to document (repeatable).",
        )
        parser.add_argument("--title", help="Document title.")
        parser.add_argument("--api-version", dest="api_version", help="API version.")
        parser.add_argument("--base-path", dest="base_path", help="Server base path.")

    def handle(self, *args, **options):
        generator = SchemaGenerator()
        resource_types = None
        if options["resources"]:
            resource_types = []
            for name in options["resources"]:
                entity_class = metadata_registry.find(name, generator.settings.resources)
                if entity_class is None:
                    raise CommandError(f"Unknown resource '{name}'.")
                resource_types.append(entity_class)

        document = generator.generate(
            resource_types,
            title=options["title"],
            version=options["api_version"],
            base_path=options["base_path"],
        )
        output = json.dumps(document, indent=options["indent"], cls=DjangoJSONEncoder)

        if options["output_file"]:
            with open(options["output_file"], "w", encoding="utf-8") as f:
                f.write(output)
            self.stdout.write(
                self.style.SUCCESS(f"OpenAPI document written to {options['output_file']}")
            )
        else:
            self.stdout.write(output)
