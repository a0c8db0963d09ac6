import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn

from tidegen.codegen.codegen import Codegen
from tidegen.config import DocumentConfig, default_output_dir, get_config
from tidegen.exceptions import TidegenError

console = Console()
app = typer.Typer(
    name='tidegen',
    help='Generate TypeScript client code from OpenAPI documents',
    no_args_is_help=True,
)


def _package_version() -> str:
    from tidegen import __version__

    return __version__


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(message)s',
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _version_callback(value: bool) -> None:
    if value:
        console.print(f'tidegen version {_package_version()}')
        raise typer.Exit()


@app.callback()
def main(
    show_version: Annotated[
        bool,
        typer.Option(
            '--version',
            '-v',
            help='Show the version and exit.',
            callback=_version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool, typer.Option('--verbose', help='Log every generation step.')
    ] = False,
) -> None:
    configure_logging(verbose)


@app.command()
def generate(
    file: Annotated[
        str | None,
        typer.Option('--file', '-f', help='Path or URL of the API document.'),
    ] = None,
    output: Annotated[
        str | None,
        typer.Option('--output', '-o', help='Output directory.'),
    ] = None,
    force: Annotated[
        bool,
        typer.Option('--force', help='Remove the output directory before writing.'),
    ] = False,
    config: Annotated[
        str | None,
        typer.Option(
            '--config', '-c', help='Path to configuration file (YAML or JSON)'
        ),
    ] = None,
) -> None:
    """Generate TypeScript client code.

    With --file a single document is generated; otherwise the documents
    listed in the configuration file are used.

    Examples:
        tidegen generate -f openapi.yaml -o src/api --force
        tidegen generate --config tidegen.yaml
    """
    try:
        if file:
            documents = [
                DocumentConfig(
                    source=file, output=output or default_output_dir(), force=force
                )
            ]
        else:
            documents = get_config(config).documents
            if force:
                documents = [doc.model_copy(update={'force': True}) for doc in documents]

        for document_config in documents:
            with Progress(
                SpinnerColumn(),
                TextColumn('[progress.description]{task.description}'),
                console=console,
            ) as progress:
                task = progress.add_task(
                    f'Generating code for {document_config.source} in {document_config.output}...',
                    total=None,
                )

                codegen = Codegen(document_config)
                result = codegen.generate()

                progress.update(
                    task,
                    description=f'Code generation completed for {document_config.source}!',
                )

            console.print('[dim]Generated files:[/dim]')
            for generated in result.files:
                console.print(f'  - {document_config.output}/{generated.path}')
            if result.skipped:
                console.print(f'[yellow]Skipped {len(result.skipped)} item(s)[/yellow]')

        console.print('[green]Successfully generated code[/green]')

    except TidegenError as e:
        console.print(f'[red]Error:[/red] {e}')
        raise typer.Exit(1)


@app.command()
def version() -> None:
    """Show the version of tidegen."""
    console.print(f'tidegen version {_package_version()}')


if __name__ == '__main__':
    app()
