"""Console output for the aepmeta CLI."""
from typing import Iterable

import click
from colorama import Fore, Style

from aepmeta.context import DerivationContext
from aepmeta.schema.models import ServiceGraph
from aepmeta.validator.diagnostics import Diagnostic


def print_banner():
    """Print application banner."""
    click.echo(f"{Fore.CYAN}{'=' * 44}")
    click.echo(f"{Fore.CYAN}║   {Fore.WHITE}aepmeta{Fore.CYAN}                              ║")
    click.echo(f"{Fore.CYAN}║   {Fore.WHITE}AEP metadata for resource APIs{Fore.CYAN}       ║")
    click.echo(f"{Fore.CYAN}{'=' * 44}{Style.RESET_ALL}")
    click.echo()


def print_header(title: str):
    """Print a section header."""
    click.echo(f"\n{Fore.CYAN}{'━' * 45}")
    click.echo(f"{Fore.CYAN}{title}")
    click.echo(f"{Fore.CYAN}{'━' * 45}{Style.RESET_ALL}\n")


def print_diagnostics(diagnostics: Iterable[Diagnostic]):
    """Print diagnostics, errors in red and warnings in yellow."""
    for diagnostic in diagnostics:
        color = Fore.RED if diagnostic.is_error else Fore.YELLOW
        click.echo(f"{color}{diagnostic}{Style.RESET_ALL}")


def print_summary(graph: ServiceGraph, context: DerivationContext):
    """Print derived operation IDs grouped by service and tag."""
    for service in graph.services:
        print_header(f"Service: {service.title}")

        tags = context.get_tags(service)
        click.echo(f"Tags: {', '.join(tags) if tags else '(none)'}")

        namespace = service.namespace
        operations = [
            op for interface in namespace.all_interfaces() for op in interface.operations
        ] + namespace.all_operations()

        for operation in operations:
            metadata = context.get_operation(operation)
            if metadata is None:
                continue
            if metadata.operation_id:
                click.echo(
                    f"  {Fore.GREEN}{metadata.operation_id:30}{Style.RESET_ALL} "
                    f"{operation.qualified_name} [{metadata.tag}] "
                    f"({len(metadata.error_examples)} error examples)"
                )
            else:
                click.echo(
                    f"  {Fore.YELLOW}{'(unresolved)':30}{Style.RESET_ALL} "
                    f"{operation.qualified_name} "
                    f"({len(metadata.error_examples)} error examples)"
                )
