"""CLI entry point for the weekly digest pipeline."""

import asyncio
from datetime import date
from pathlib import Path
from typing import Any, Optional

import typer

from weekly_digest.adapters.markdown import MarkdownWeeklyGenerator
from weekly_digest.config import Settings, get_settings, setup_logging
from weekly_digest.core import ChangelogSnapshot, Failure, WeeklyContext
from weekly_digest.core.snapshot import load_json, load_snapshot, resolve_snapshot_path
from weekly_digest.use_cases import WeeklyService
from weekly_digest.weekly import WeeklyOrchestrator, github_store_factory

app = typer.Typer(
    help="Weekly multi-provider changelog digests published as GitHub Discussions.",
    no_args_is_help=True,
)

DateOption = typer.Option(None, "--date", help="Target date YYYY-MM-DD (default: today)")
OwnerOption = typer.Option(None, "--owner", help="Repository owner")
RepoOption = typer.Option(None, "--repo", help="Repository name")
CategoryOption = typer.Option(None, "--category", help="Discussion category name")
ChangelogOption = typer.Option(
    None, "--changelog-file", help="Snapshot JSON path (default: derived from --date)"
)
SummariesOption = typer.Option(None, "--summaries-file", help="Summaries JSON path")
OutputOption = typer.Option(None, "--output", help="Write the result as JSON to this path")
LimitOption = typer.Option(None, "--limit", help="Past discussions per provider")
DryRunOption = typer.Option(False, "--dry-run", help="Do not post, only report")
AutoCloseOption = typer.Option(False, "--auto-close", help="Close discussions after posting")
ConfigOption = typer.Option(Path("config.yaml"), "--config", help="YAML config file")


def build_service(settings: Settings) -> WeeklyService:
    """Wire the orchestrator with the GitHub store and markdown renderer."""
    renderer = MarkdownWeeklyGenerator(
        title_prefix=settings.weekly.title_prefix,
        mention_user=settings.mention_user,
    )
    orchestrator = WeeklyOrchestrator.create(
        renderer,
        store_factory=github_store_factory(settings.github.api_url, settings.github.timeout),
        discussion_scan=settings.weekly.discussion_scan,
    )
    return WeeklyService(orchestrator)


def _fail(message: str) -> None:
    typer.echo(f"❌ {message}", err=True)
    raise typer.Exit(code=1)


def _load_settings(config: Path) -> Settings:
    settings = get_settings(config)
    setup_logging(settings)
    return settings


def _require_token(settings: Settings, dry_run: bool = False) -> str:
    if settings.github_token:
        return settings.github_token
    if dry_run:
        return ""
    _fail("GITHUB_TOKEN environment variable is required")
    return ""


def _target_date(value: Optional[str]) -> str:
    if value is None:
        return date.today().isoformat()
    try:
        return date.fromisoformat(value).isoformat()
    except ValueError:
        _fail(f"Invalid --date: {value} (expected YYYY-MM-DD)")
        return ""


def _load_snapshot(
    settings: Settings, changelog_file: Optional[str], target: str
) -> ChangelogSnapshot:
    path = resolve_snapshot_path(changelog_file or target, settings.changelog_dir)
    try:
        return load_snapshot(path)
    except (OSError, ValueError) as e:
        _fail(f"Could not load changelog snapshot {path}: {e}")
        raise


def _load_summaries(summaries_file: Optional[Path]) -> Any:
    if summaries_file is None:
        _fail("--summaries-file is required")
    try:
        return load_json(summaries_file)
    except (OSError, ValueError) as e:
        _fail(f"Could not load summaries {summaries_file}: {e}")
        raise


def _build_context(
    settings: Settings,
    token: str,
    target: str,
    owner: Optional[str],
    repo: Optional[str],
    category: Optional[str],
    snapshot: Optional[ChangelogSnapshot] = None,
    dry_run: bool = False,
    auto_close: bool = False,
) -> WeeklyContext:
    owner = owner or settings.github.owner
    repo = repo or settings.github.repo
    if not owner or not repo:
        _fail("--owner and --repo are required (or set github.owner/github.repo in config)")

    common = dict(
        auth_token=token,
        owner=owner,
        repo=repo,
        category_name=category or settings.github.category,
        dry_run=dry_run,
        auto_close=auto_close,
    )
    # Weekly snapshots carry their own period
    if snapshot is not None and snapshot.is_weekly:
        return WeeklyContext(start_date=snapshot.start_date, end_date=snapshot.end_date, **common)
    return WeeklyContext.for_week(target, period_days=settings.weekly.period_days, **common)


# Every sub-command accepts the full flag set; flags a command has no use for are ignored.


@app.command("fetch-past-all")
def fetch_past_all(
    date_: Optional[str] = DateOption,
    owner: Optional[str] = OwnerOption,
    repo: Optional[str] = RepoOption,
    category: Optional[str] = CategoryOption,
    changelog_file: Optional[str] = ChangelogOption,
    summaries_file: Optional[Path] = SummariesOption,
    output: Optional[Path] = OutputOption,
    limit: Optional[int] = LimitOption,
    dry_run: bool = DryRunOption,
    auto_close: bool = AutoCloseOption,
    config: Path = ConfigOption,
) -> None:
    """Fetch past weekly discussions for all providers (parallel)."""
    settings = _load_settings(config)
    token = _require_token(settings)
    target = _target_date(date_)
    # An explicit snapshot decides the period
    snapshot = _load_snapshot(settings, changelog_file, target) if changelog_file else None
    ctx = _build_context(settings, token, target, owner, repo, category, snapshot)

    service = build_service(settings)
    asyncio.run(service.fetch_past_all(ctx, limit or settings.history_limit, output))


@app.command("prepare-summarize")
def prepare_summarize(
    date_: Optional[str] = DateOption,
    owner: Optional[str] = OwnerOption,
    repo: Optional[str] = RepoOption,
    category: Optional[str] = CategoryOption,
    changelog_file: Optional[str] = ChangelogOption,
    summaries_file: Optional[Path] = SummariesOption,
    output: Optional[Path] = OutputOption,
    limit: Optional[int] = LimitOption,
    dry_run: bool = DryRunOption,
    auto_close: bool = AutoCloseOption,
    config: Path = ConfigOption,
) -> None:
    """Prepare summarize requests for every provider with entries."""
    settings = _load_settings(config)
    token = _require_token(settings)
    target = _target_date(date_)
    snapshot = _load_snapshot(settings, changelog_file, target)
    ctx = _build_context(settings, token, target, owner, repo, category, snapshot)

    service = build_service(settings)
    asyncio.run(service.prepare_summarize(snapshot, ctx, limit or settings.history_limit, output))


@app.command("render-prompt")
def render_prompt(
    provider_id: str = typer.Argument(..., help="Provider ID, e.g. github"),
    date_: Optional[str] = DateOption,
    owner: Optional[str] = OwnerOption,
    repo: Optional[str] = RepoOption,
    category: Optional[str] = CategoryOption,
    changelog_file: Optional[str] = ChangelogOption,
    summaries_file: Optional[Path] = SummariesOption,
    output: Optional[Path] = OutputOption,
    limit: Optional[int] = LimitOption,
    dry_run: bool = DryRunOption,
    auto_close: bool = AutoCloseOption,
    config: Path = ConfigOption,
) -> None:
    """Render the summarize prompt for one provider."""
    settings = _load_settings(config)
    token = _require_token(settings)
    target = _target_date(date_)
    snapshot = _load_snapshot(settings, changelog_file, target)
    ctx = _build_context(settings, token, target, owner, repo, category, snapshot)

    service = build_service(settings)
    result = asyncio.run(
        service.render_prompt(provider_id, snapshot, ctx, limit or settings.history_limit, output)
    )
    if isinstance(result, Failure):
        _fail(result.error)


@app.command("post-all")
def post_all(
    date_: Optional[str] = DateOption,
    owner: Optional[str] = OwnerOption,
    repo: Optional[str] = RepoOption,
    category: Optional[str] = CategoryOption,
    changelog_file: Optional[str] = ChangelogOption,
    summaries_file: Optional[Path] = SummariesOption,
    output: Optional[Path] = OutputOption,
    limit: Optional[int] = LimitOption,
    dry_run: bool = DryRunOption,
    auto_close: bool = AutoCloseOption,
    config: Path = ConfigOption,
) -> None:
    """Post discussions for all summarized providers (parallel)."""
    settings = _load_settings(config)
    summaries = _load_summaries(summaries_file)
    if not isinstance(summaries, dict):
        _fail("Summaries file must contain a JSON object keyed by provider ID")

    token = _require_token(settings, dry_run)
    target = _target_date(date_)
    snapshot = _load_snapshot(settings, changelog_file, target)
    ctx = _build_context(
        settings, token, target, owner, repo, category, snapshot, dry_run, auto_close
    )

    service = build_service(settings)
    result = asyncio.run(service.post_all(snapshot, summaries, ctx, output))
    if result.has_failures:
        raise typer.Exit(code=1)


@app.command("post-provider")
def post_provider(
    provider_id: str = typer.Argument(..., help="Provider ID, e.g. github"),
    date_: Optional[str] = DateOption,
    owner: Optional[str] = OwnerOption,
    repo: Optional[str] = RepoOption,
    category: Optional[str] = CategoryOption,
    changelog_file: Optional[str] = ChangelogOption,
    summaries_file: Optional[Path] = SummariesOption,
    output: Optional[Path] = OutputOption,
    limit: Optional[int] = LimitOption,
    dry_run: bool = DryRunOption,
    auto_close: bool = AutoCloseOption,
    config: Path = ConfigOption,
) -> None:
    """Post one provider's discussion from a single summary file."""
    settings = _load_settings(config)
    summary = _load_summaries(summaries_file)
    token = _require_token(settings, dry_run)
    target = _target_date(date_)
    snapshot = _load_snapshot(settings, changelog_file, target) if changelog_file else None
    ctx = _build_context(
        settings, token, target, owner, repo, category, snapshot, dry_run, auto_close
    )

    service = build_service(settings)
    result = asyncio.run(service.post_provider(provider_id, summary, ctx, snapshot, output))
    if isinstance(result, Failure):
        raise typer.Exit(code=1)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
