"""CLI entry point for CallCoach."""

import json
import logging
import os
from pathlib import Path

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from callcoach.analysis.analyzer import ANALYSIS_TYPES, TranscriptAnalyzer
from callcoach.analysis.parsing import is_parse_error
from callcoach.analysis.prompts import COACHING_CATEGORY_KEYS
from callcoach.config import Settings
from callcoach.errors import CallCoachError
from callcoach.llm.client import create_client as create_llm_client
from callcoach.scraper.colors import generate_color_palette, is_light_color
from callcoach.scraper.website import scrape_company_website
from callcoach.storage.config_store import ConfigStore
from callcoach.storage.scenarios import ScenarioRepository
from callcoach.voice.retell import RetellClient
from callcoach.voice.voices import CURATED_VOICES

console = Console(force_terminal=True)


def _settings(ctx) -> Settings:
    return ctx.obj["settings"]


def _stores(ctx) -> tuple[ConfigStore, ScenarioRepository]:
    settings = _settings(ctx)
    config_store = ConfigStore(settings.config_path)
    return config_store, ScenarioRepository(settings.scenarios_path, config_store)


def _analyzer(ctx) -> TranscriptAnalyzer:
    return TranscriptAnalyzer(create_llm_client(_settings(ctx).anthropic_api_key))


def _print_json(data):
    console.print_json(json.dumps(data))


@click.group()
@click.option(
    "--data-dir",
    default=None,
    help="Directory holding config.json and scenarios.json",
    type=click.Path(file_okay=False),
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, data_dir, verbose):
    """CallCoach - AI phone-call training for customer service reps."""
    ctx.ensure_object(dict)
    load_dotenv()

    ctx.obj["settings"] = Settings.from_env(data_dir)

    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.INFO, format="%(message)s")


@cli.command()
@click.option("--host", default="0.0.0.0", help="Bind address")
@click.option("--port", default=None, type=int, help="Port (default: $PORT or 3001)")
@click.option("--reload", is_flag=True, help="Reload on code changes")
@click.pass_context
def serve(ctx, host, port, reload):
    """Run the HTTP API."""
    import uvicorn

    settings = _settings(ctx)
    port = port or settings.port
    console.print(f"[green]CallCoach API[/green] on http://{host}:{port} ({settings.env})")
    console.print(f"  Data: {settings.data_dir}")
    # The app factory runs in uvicorn and reads its settings from the environment
    os.environ["CALLCOACH_DATA_DIR"] = str(settings.data_dir)
    uvicorn.run(
        "callcoach.web.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------


@cli.group(name="scenarios")
def scenarios_group():
    """Inspect training scenarios."""
    pass


@scenarios_group.command(name="list")
@click.pass_context
def scenarios_list(ctx):
    """List scenarios with company placeholders resolved."""
    _, repo = _stores(ctx)
    scenarios = repo.list_all()
    if not scenarios:
        console.print("[yellow]No scenarios defined.[/yellow]")
        return

    table = Table(title="Scenarios")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="bold")
    table.add_column("Difficulty")
    table.add_column("Voice")
    table.add_column("Custom", justify="center")

    for s in scenarios:
        table.add_row(
            s.get("id", ""),
            s.get("name", ""),
            s.get("difficulty") or "",
            s.get("voiceId") or "",
            "[green]✓[/green]" if s.get("isCustom") else "",
        )
    console.print(table)


@scenarios_group.command(name="show")
@click.argument("scenario_id")
@click.option("--raw", is_flag=True, help="Show placeholders unresolved")
@click.pass_context
def scenarios_show(ctx, scenario_id, raw):
    """Print one scenario as JSON."""
    _, repo = _stores(ctx)
    try:
        scenario = repo.get_raw(scenario_id) if raw else repo.get(scenario_id)
    except CallCoachError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise SystemExit(1)
    _print_json(scenario)


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


@cli.group(name="config")
def config_group():
    """View or reset the company configuration."""
    pass


@config_group.command(name="show")
@click.pass_context
def config_show(ctx):
    config_store, _ = _stores(ctx)
    _print_json(config_store.load())


@config_group.command(name="reset")
@click.confirmation_option(prompt="Reset the configuration to defaults?")
@click.pass_context
def config_reset(ctx):
    config_store, _ = _stores(ctx)
    config = config_store.reset()
    console.print(f"[green]Configuration reset[/green] ({config['company']['name']})")


# ---------------------------------------------------------------------------
# Claude-backed commands
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("url")
@click.option("--apply", "apply_", is_flag=True, help="Save extracted company data to the config")
@click.pass_context
def scrape(ctx, url, apply_):
    """Scrape a company website and extract its profile."""
    try:
        analyzer = _analyzer(ctx)
        console.print(f"[bold]Scraping {url}...[/bold]")
        data = scrape_company_website(url, analyzer)
    except (ValueError, CallCoachError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    meta = data["metadata"]
    console.print(f"[bold]{meta['title'] or data['url']}[/bold]")
    console.print(f"  Logo: {data['logo'] or '-'}")
    palette = generate_color_palette(data["colors"]["primary"])
    swatches = " ".join(
        f"[{'black' if is_light_color(hex_value) else 'white'} on {hex_value}] {name} {hex_value} [/]"
        for name, hex_value in palette.items()
    )
    console.print(f"  Palette: {swatches}")
    console.print(f"  Text: {len(data['textContent']):,} chars")

    extracted = data["extracted"]
    _print_json(extracted)

    if apply_:
        if is_parse_error(extracted) or not isinstance(extracted, dict):
            console.print("[yellow]Extraction is not a company profile; nothing applied.[/yellow]")
            return
        config_store, _ = _stores(ctx)
        company_data = {k: v for k, v in extracted.items() if v is not None}
        company_data["website"] = data["url"]
        company_data["colors"] = {k: data["colors"][k] for k in ("primary", "secondary", "accent")}
        if data["logo"]:
            company_data["logo"] = data["logo"]
        config_store.apply_company(company_data)
        console.print("[green]Company profile applied.[/green]")


@cli.command()
@click.argument("transcript_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--type", "analysis_type",
    type=click.Choice(list(ANALYSIS_TYPES)),
    default="coaching",
    help="Kind of analysis",
)
@click.option("--scenario", "scenario_id", default=None, help="Scenario ID for coaching context")
@click.pass_context
def analyze(ctx, transcript_file, analysis_type, scenario_id):
    """Analyze a transcript file with Claude."""
    config_store, repo = _stores(ctx)
    context = {"company": config_store.company()}
    try:
        if scenario_id:
            context["scenario"] = repo.get(scenario_id)
        analyzer = _analyzer(ctx)
        console.print(f"[bold]Running {analysis_type} analysis...[/bold]")
        result = analyzer.analyze(transcript_file.read_text(), analysis_type, context)
    except (ValueError, CallCoachError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    _print_json(result)

    if analysis_type == "coaching" and isinstance(result, dict) and not is_parse_error(result):
        _print_scorecard(result)


def _print_scorecard(analysis: dict):
    categories = analysis.get("categories") or {}
    table = Table(title=f"Overall: {analysis.get('overallScore', '-')}")
    table.add_column("Category", style="cyan")
    table.add_column("Score", justify="right")
    for key in COACHING_CATEGORY_KEYS:
        score = (categories.get(key) or {}).get("score")
        table.add_row(key, "-" if score is None else str(score))
    console.print(table)


@cli.command()
@click.option("--remote", is_flag=True, help="Query Retell for every available voice")
@click.pass_context
def voices(ctx, remote):
    """List voices usable for scenario customers."""
    if remote:
        client = RetellClient(_settings(ctx).retell_api_key)
        try:
            voice_list = [
                {"id": v.get("voice_id"), "name": v.get("voice_name"), "gender": v.get("gender")}
                for v in client.list_voices()
            ]
        except CallCoachError as e:
            console.print(f"[red]Error:[/red] {e}")
            raise SystemExit(1)
        finally:
            client.close()
    else:
        voice_list = CURATED_VOICES

    table = Table(title="Voices")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Gender")
    for v in voice_list:
        table.add_row(v.get("id") or "", v.get("name") or "", v.get("gender") or "")
    console.print(table)


if __name__ == "__main__":
    cli()
