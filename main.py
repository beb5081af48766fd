#!/usr/bin/env python3
"""aepmeta - Entry point."""
import logging
import sys
import os
from pathlib import Path

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import click
from colorama import Fore, init

from config import AppConfig, load_config
from aepmeta import __version__
from aepmeta.api.pattern_builder import PatternBuilder
from aepmeta.cli.console import print_banner, print_diagnostics, print_header, print_summary
from aepmeta.errors import AepError, PreconditionError
from aepmeta.exporter.json_exporter import JsonExporter
from aepmeta.introspection import GraphAnalyzer, GraphDocumentLoader
from aepmeta.schema.registry import ResourceRegistry
from aepmeta.validation_pass import ValidationPass
from aepmeta.validator.resource_validator import ResourceValidator

# Initialize colorama
init(autoreset=True)


def configure_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def load_graph(source: str, app_config: AppConfig):
    """Load and analyze a service graph document."""
    loader = GraphDocumentLoader(
        source,
        api_key=app_config.loader.api_key or None,
        timeout=app_config.loader.timeout,
    )
    registry = ResourceRegistry()
    graph = GraphAnalyzer(registry).analyze(loader.load())
    return graph, registry


@click.group()
@click.version_option(version=__version__)
@click.pass_context
def cli(ctx):
    """aepmeta - Derive AEP metadata for resource-oriented APIs."""
    try:
        ctx.obj = load_config()
    except AepError as e:
        click.echo(f"{Fore.RED}Error: {e}")
        sys.exit(1)


@cli.command()
@click.argument("source")
@click.option(
    "--output",
    type=click.Path(dir_okay=False),
    help="Where to write the derived metadata (JSON)",
)
@click.option("--verbose", is_flag=True, help="Enable debug logging")
@click.pass_obj
def derive(app_config, source, output, verbose):
    """Derive operation IDs, tags and examples for SOURCE."""
    configure_logging(verbose)
    print_banner()

    try:
        graph, registry = load_graph(source, app_config)
        context = ValidationPass(registry, app_config.derivation).run(graph)
    except PreconditionError as e:
        print_diagnostics(e.diagnostics)
        sys.exit(1)
    except AepError as e:
        click.echo(f"{Fore.RED}Error: {e}")
        sys.exit(1)

    print_diagnostics(context.diagnostics)
    print_summary(graph, context)

    output_file = Path(output) if output else Path(app_config.output_dir) / "aep-metadata.json"
    JsonExporter(app_config.derivation.extension_name).export(output_file, graph, context)
    click.echo(f"\n{Fore.GREEN}✅ Metadata written to {output_file}")


@cli.command()
@click.argument("source")
@click.pass_obj
def patterns(app_config, source):
    """List the resource pattern of every resource in SOURCE."""
    try:
        graph, registry = load_graph(source, app_config)
        builder = PatternBuilder(registry, app_config.derivation.max_parent_depth)
        for service in graph.services:
            print_header(f"Service: {service.title}")
            for model in registry.resources(service.namespace.all_models()):
                click.echo(f"  {model.qualified_name:30} {builder.build_pattern(model)}")
    except PreconditionError as e:
        print_diagnostics(e.diagnostics)
        sys.exit(1)
    except AepError as e:
        click.echo(f"{Fore.RED}Error: {e}")
        sys.exit(1)


@cli.command()
@click.argument("source")
@click.pass_obj
def check(app_config, source):
    """Run precondition checks on SOURCE without deriving anything."""
    try:
        graph, registry = load_graph(source, app_config)
    except AepError as e:
        click.echo(f"{Fore.RED}Error: {e}")
        sys.exit(1)

    validator = ResourceValidator(registry, app_config.derivation.max_parent_depth)
    diagnostics = [d for service in graph.services for d in validator.validate(service)]
    print_diagnostics(diagnostics)

    if any(d.is_error for d in diagnostics):
        sys.exit(1)
    click.echo(f"{Fore.GREEN}✅ No errors found ({len(diagnostics)} warnings)")


if __name__ == "__main__":
    cli()
