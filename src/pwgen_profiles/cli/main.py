"""Main CLI entry point for pwgen-profiles.

Manages stored password generation profiles and previews their output from
the command line.
"""

from typing import Any
import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.progress import BarColumn, Progress, TextColumn
from rich.table import Table

from pwgen_profiles import __version__
from pwgen_profiles.charsets.charset import CATEGORY_ORDER
from pwgen_profiles.engine.password_engine import PasswordEngine
from pwgen_profiles.engine.preview_runner import PreviewRunner
from pwgen_profiles.engine.profile_manager import ProfileManager, PseudoProfile, SaveOutcome
from pwgen_profiles.exceptions import GeneratorError, PwGenProfilesError
from pwgen_profiles.generators.registry import CustomGeneratorRegistry
from pwgen_profiles.profiles.base import GenerationProfile, GeneratorType
from pwgen_profiles.profiles.loader import load_store, save_store
from pwgen_profiles.settings import STORE_ENV_VAR, Settings

console = Console()
err_console = Console(stderr=True)


@click.group()
@click.version_option(version=__version__, prog_name="pwgen-profiles")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option(
    "--store",
    type=click.Path(dir_okay=False),
    envvar=STORE_ENV_VAR,
    help="Profile store file",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, store: str | None) -> None:
    """pwgen-profiles - Manage and preview password generation profiles.

    Profiles describe how passwords are generated: from a character set,
    from a pattern, or with a pluggable custom algorithm.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["settings"] = Settings.from_env(store)


def _open_session(ctx: click.Context) -> tuple[ProfileManager, CustomGeneratorRegistry]:
    settings: Settings = ctx.obj["settings"]
    registry = CustomGeneratorRegistry()
    store = load_store(settings.store_path)
    return ProfileManager(store, registry), registry


def _save_session(ctx: click.Context, manager: ProfileManager) -> None:
    settings: Settings = ctx.obj["settings"]
    save_store(manager.store, settings.store_path)


def _select(manager: ProfileManager, profile_name: str | None) -> None:
    if profile_name is None:
        return
    if not manager.select_profile(profile_name):
        raise click.ClickException(f"Profile '{profile_name}' not found")


def _fail(ctx: click.Context, message: str, error: Exception) -> None:
    console.print(f"[red]{message}: {escape(str(error))}[/red]")
    if ctx.obj.get("verbose", False):
        import traceback
        console.print(traceback.format_exc())
    sys.exit(1)


@cli.command()
@click.pass_context
def list_profiles(ctx: click.Context) -> None:
    """List selectable profiles."""
    try:
        manager, _ = _open_session(ctx)
    except PwGenProfilesError as e:
        _fail(ctx, "Error loading profiles", e)

    table = Table(title="Profiles")
    table.add_column("Name", style="cyan")
    table.add_column("Mode", style="green")
    table.add_column("Settings")

    auto = manager.store.auto_generated
    table.add_row(PseudoProfile.AUTO_GENERATED.label, auto.generator_type.value, _summarize(auto, manager))
    for profile in manager.store.user_profiles:
        table.add_row(escape(profile.name), profile.generator_type.value, _summarize(profile, manager))

    console.print(table)


@cli.command()
@click.pass_context
def list_generators(ctx: click.Context) -> None:
    """List available custom generators."""
    registry = CustomGeneratorRegistry()

    table = Table(title="Custom Generators")
    table.add_column("Name", style="cyan")
    table.add_column("Identifier")
    table.add_column("Options", justify="center")

    for generator in registry:
        table.add_row(
            generator.name,
            generator.identifier,
            "[green]Yes[/green]" if generator.supports_options else "[red]No[/red]",
        )

    console.print(table)


@cli.command()
@click.argument("profile_name")
@click.pass_context
def show(ctx: click.Context, profile_name: str) -> None:
    """Show the settings of a profile.

    PROFILE_NAME is a stored profile name or a reserved label such as
    "(Automatically generated passwords)".
    """
    try:
        manager, _ = _open_session(ctx)
        _select(manager, profile_name)
    except PwGenProfilesError as e:
        _fail(ctx, "Error loading profiles", e)

    profile = manager.export_active_profile()
    categories = [c.value for c in CATEGORY_ORDER if manager.category_enabled(c)]
    algorithm = manager.custom_algorithm

    console.print(Panel.fit(
        f"Mode: [cyan]{profile.generator_type.value}[/cyan]\n"
        f"Length: {profile.length}\n"
        f"Categories: {', '.join(categories) or '-'}\n"
        f"Custom characters: {escape(manager.custom_characters) or '-'}\n"
        f"Pattern: {escape(profile.pattern) or '-'}"
        f"{' (permuted)' if profile.pattern_permute else ''}\n"
        f"Custom algorithm: {algorithm.name if algorithm else '-'}\n"
        f"Custom options: {escape(profile.custom_algorithm_options) or '-'}\n"
        f"Exclude look-alike: {'yes' if profile.exclude_look_alike else 'no'}\n"
        f"No repeating characters: {'yes' if profile.no_repeating_characters else 'no'}\n"
        f"Exclude characters: {escape(profile.exclude_characters) or '-'}\n"
        f"Collect extra entropy: {'yes' if profile.collect_user_entropy else 'no'}",
        title=escape(profile_name),
    ))


@cli.command()
@click.argument("profile_name", required=False)
@click.option("--count", "-n", type=click.IntRange(min=1), help="Number of passwords")
@click.option("--seed", "-s", type=int, help="Random seed (for reproducible samples only)")
@click.pass_context
def preview(
    ctx: click.Context,
    profile_name: str | None,
    count: int | None,
    seed: int | None,
) -> None:
    """Preview passwords generated with a profile.

    PROFILE_NAME defaults to the last used settings.
    """
    settings: Settings = ctx.obj["settings"]

    try:
        manager, registry = _open_session(ctx)
        _select(manager, profile_name)
    except PwGenProfilesError as e:
        _fail(ctx, "Error loading profiles", e)

    profile = manager.export_active_profile()
    engine = PasswordEngine(registry, seed=seed)
    runner = PreviewRunner(registry)
    count = count or settings.preview_count

    lines = []
    with Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("{task.percentage:>3.0f}%"),
        console=err_console,
        transient=True,
    ) as progress:
        task = progress.add_task("Generating preview...", total=100)

        for outcome in runner.run(
            profile,
            count,
            engine,
            on_progress=lambda percent: progress.update(task, completed=percent),
        ):
            if outcome.ok:
                lines.append((outcome.reveal(), None))
            else:
                lines.append((str(outcome.error), "red"))

    for text, style in lines:
        console.print(text, style=style, markup=False, highlight=False)


@cli.command()
@click.argument("profile_name", required=False)
@click.option("--entropy", is_flag=True, help="Prompt for additional entropy")
@click.pass_context
def generate(ctx: click.Context, profile_name: str | None, entropy: bool) -> None:
    """Generate one password with a profile.

    PROFILE_NAME defaults to the last used settings. The settings used are
    remembered as the last used ones.
    """
    try:
        manager, registry = _open_session(ctx)
        _select(manager, profile_name)
        profile = manager.accept()

        extra = None
        if entropy or profile.collect_user_entropy:
            extra = click.prompt("Random keystrokes", hide_input=True).encode("utf-8")

        password = PasswordEngine(registry).generate(profile, extra)
        manager.close()
        _save_session(ctx, manager)
    except GeneratorError as e:
        _fail(ctx, "Error generating password", e)
    except PwGenProfilesError as e:
        _fail(ctx, "Error", e)

    click.echo(password)


@cli.command()
@click.argument("name")
@click.option("--from", "source", help="Start from this profile instead of the last used settings")
@click.option("--mode", type=click.Choice([t.value for t in GeneratorType]), help="Generation mode")
@click.option("--length", "-l", type=click.IntRange(min=0), help="Password length")
@click.option(
    "--category", "-c",
    multiple=True,
    type=click.Choice([c.value for c in CATEGORY_ORDER]),
    help="Character category to include (replaces the current ones)",
)
@click.option("--chars", help="Additional characters")
@click.option("--pattern", "-p", help="Pattern")
@click.option("--permute/--no-permute", default=None, help="Permute pattern output")
@click.option("--exclude", help="Characters to exclude")
@click.option("--exclude-look-alike/--allow-look-alike", default=None, help="Exclude look-alike characters")
@click.option("--no-repeat/--allow-repeat", default=None, help="Use each character at most once")
@click.option("--algorithm", help="Custom algorithm name")
@click.option("--options", "options_blob", help="Custom algorithm options")
@click.option("--edit-options", is_flag=True, help="Edit custom algorithm options interactively")
@click.pass_context
def save(
    ctx: click.Context,
    name: str,
    source: str | None,
    mode: str | None,
    length: int | None,
    category: tuple[str, ...],
    chars: str | None,
    pattern: str | None,
    permute: bool | None,
    exclude: str | None,
    exclude_look_alike: bool | None,
    no_repeat: bool | None,
    algorithm: str | None,
    options_blob: str | None,
    edit_options: bool,
) -> None:
    """Save settings as a named profile.

    NAME is the profile name. Saving under an existing name replaces that
    profile; "(Automatically generated passwords)" replaces the settings for
    automatically generated passwords.
    """
    try:
        manager, _ = _open_session(ctx)
        _select(manager, source)

        _apply_edits(
            manager,
            mode=mode,
            length=length,
            category=category,
            chars=chars,
            pattern=pattern,
            permute=permute,
            exclude=exclude,
            exclude_look_alike=exclude_look_alike,
            no_repeat=no_repeat,
        )

        if algorithm is not None and not manager.select_custom_algorithm(algorithm):
            raise click.ClickException(f"Custom algorithm '{algorithm}' not found")
        if options_blob is not None:
            if manager.custom_algorithm is None:
                raise click.ClickException("--options requires a custom algorithm")
            manager.set_options_for(manager.custom_algorithm.identifier, options_blob)
        if edit_options and not manager.edit_custom_options():
            raise click.ClickException("The selected custom algorithm has no options")

        outcome = manager.save_active_profile_as(name)
        _save_session(ctx, manager)
    except PwGenProfilesError as e:
        _fail(ctx, "Error saving profile", e)

    messages = {
        SaveOutcome.APPENDED: f"Added profile '{escape(name)}'",
        SaveOutcome.REPLACED_EXISTING: f"Replaced profile '{escape(name)}'",
        SaveOutcome.REPLACED_RESERVED: "Updated settings for automatically generated passwords",
    }
    console.print(f"[green]{messages[outcome]}[/green]")


@cli.command()
@click.argument("name")
@click.pass_context
def remove(ctx: click.Context, name: str) -> None:
    """Remove a stored profile.

    NAME is the profile name. Reserved entries cannot be removed.
    """
    try:
        manager, _ = _open_session(ctx)
        removed = manager.remove_profile(name)
        if removed:
            _save_session(ctx, manager)
    except PwGenProfilesError as e:
        _fail(ctx, "Error removing profile", e)

    if not removed:
        console.print(f"[red]Profile '{escape(name)}' cannot be removed[/red]")
        sys.exit(1)

    console.print(f"[green]Removed profile '{escape(name)}'[/green]")


def _apply_edits(manager: ProfileManager, **edits: Any) -> None:
    """Apply command-line edits to the active settings."""
    if edits["mode"] is not None:
        manager.set_generator_type(edits["mode"])
    if edits["length"] is not None:
        manager.set_length(edits["length"])
    if edits["category"]:
        for c in CATEGORY_ORDER:
            manager.set_category(c, c.value in edits["category"])
    if edits["chars"] is not None:
        manager.set_custom_characters(edits["chars"])
    if edits["pattern"] is not None:
        manager.set_pattern(edits["pattern"])
    if edits["permute"] is not None:
        manager.set_pattern_permute(edits["permute"])
    if edits["exclude"] is not None:
        manager.set_exclude_characters(edits["exclude"])
    if edits["exclude_look_alike"] is not None:
        manager.set_exclude_look_alike(edits["exclude_look_alike"])
    if edits["no_repeat"] is not None:
        manager.set_no_repeating_characters(edits["no_repeat"])


def _summarize(profile: GenerationProfile, manager: ProfileManager) -> str:
    """One-line description of the settings that drive a profile."""
    if profile.generator_type == GeneratorType.PATTERN:
        return f"pattern {escape(profile.pattern)}"
    if profile.generator_type == GeneratorType.CUSTOM:
        algorithm = manager.registry.find_by_id(profile.custom_algorithm_id)
        return f"algorithm {algorithm.name if algorithm else '(unknown)'}"
    return f"{profile.length} characters from {len(profile.char_set)}"


if __name__ == "__main__":
    cli()
