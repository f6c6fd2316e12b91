"""CLI entry point for audience tagger."""

import asyncio
import signal
from pathlib import Path
from typing import Optional

import typer

from audience_tagger.adapters.library import YamlLibrary
from audience_tagger.config import API_KEY_ENV, get_settings
from audience_tagger.core import AudienceTaggerError, TaggingSummary
from audience_tagger.logging_setup import init_logging
from audience_tagger.use_cases import ManualTaggingTask, ModelsService, TaggingService

cli = typer.Typer(help="Tag media items with their target audience (kids, teens, adults).")


@cli.command()
def run(
    config: Path = typer.Option(Path("config.yaml"), "--config", "-c", help="YAML config file"),
    library: Optional[Path] = typer.Option(None, "--library", "-l", help="YAML library file"),
    overwrite: Optional[bool] = typer.Option(
        None, "--overwrite/--no-overwrite", help="Replace existing audience tags"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Also write logs to this file"),
) -> None:
    """Classify every movie in the library and add audience tags."""
    init_logging(verbose=verbose, log_file=log_file)
    try:
        summary = asyncio.run(async_run(config, library, overwrite))
    except AudienceTaggerError as e:
        print(f"\n❌ {e}")
        raise typer.Exit(code=1)

    print("\n" + "=" * 60)
    print("✅ CANCELLED" if summary.cancelled else "✅ DONE")
    print("=" * 60)
    print(f"  • Processed: {summary.processed}")
    print(f"  • Tagged:    {summary.tagged}")
    print(f"  • Skipped:   {summary.skipped}")
    if summary.failed:
        print(f"  • Failed:    {summary.failed}")
    print()


async def async_run(
    config_path: Path, library_path: Optional[Path], overwrite: Optional[bool]
) -> TaggingSummary:
    """Async implementation of run command."""
    settings = get_settings(config_path)
    if library_path is not None:
        settings.library.path = library_path
    if overwrite is not None:
        settings.tagging.overwrite_existing_tags = overwrite

    print("\n" + "=" * 60)
    print("🎬 AUDIENCE TAGGER")
    print("=" * 60)
    if settings.api_key:
        print(f"  ✓ {API_KEY_ENV} is set")
    else:
        print(f"  ✗ {API_KEY_ENV} not found (nothing will be tagged)")
    print(f"  • Provider: {settings.provider.name} ({settings.provider.model_name})")
    print(f"  • Library:  {settings.library_path}")
    print(f"  • Overwrite existing tags: {settings.tagging.overwrite_existing_tags}")

    service = TaggingService(
        repository=YamlLibrary(settings.library_path),
        item_kind=settings.library.item_kind,
    )
    task = ManualTaggingTask(service, settings.snapshot)

    cancel_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, cancel_event.set)
    except (NotImplementedError, RuntimeError):
        pass

    def report(percent: float) -> None:
        print(f"  └─ {percent:5.1f}%")

    try:
        return await task.execute(progress=report, cancel_event=cancel_event)
    finally:
        try:
            loop.remove_signal_handler(signal.SIGINT)
        except (NotImplementedError, RuntimeError):
            pass


@cli.command()
def models(
    provider: str = typer.Argument(..., help="gemini, openai or localai"),
    api_key: Optional[str] = typer.Option(None, "--api-key", envvar=API_KEY_ENV),
    endpoint: Optional[str] = typer.Option(None, "--endpoint", help="Base URL for localai"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Also write logs to this file"),
) -> None:
    """List the models a provider offers."""
    init_logging(verbose=verbose, log_file=log_file)
    try:
        names = asyncio.run(ModelsService().get_models(provider, api_key=api_key, endpoint=endpoint))
    except AudienceTaggerError as e:
        print(f"❌ {e}")
        raise typer.Exit(code=2)

    if not names:
        print("No models found")
        return
    for name in names:
        print(name)


def app() -> None:
    """CLI entry point."""
    cli()


if __name__ == "__main__":
    app()
