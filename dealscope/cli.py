# dealscope/cli.py
"""
DEALSCOPE CLI -- Click commands with a rich terminal UI.

Provides the ``dealscope`` console entry-point declared in pyproject.toml as
``dealscope.cli:cli``.  Commands call into the pipeline modules:

- memo:      extract_deal -- investment memo to deal record
- strategy:  extract_strategy -- strategy document to blueprint components
- grade:     grade_strategy -- blueprint components to a letter grade
- config:    DealscopeConfig display
"""

from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Any, Optional

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape as _esc
from rich.padding import Padding

from . import __version__
from . import cli_theme as theme
from .config import get_config
from .envelope import build_envelope, wrap_payload
from .errors import ExtractionError
from .invoker import ModelInvoker, build_dspy_invoker, build_invoker
from .pipelines import extract_deal, extract_strategy, grade_strategy
from .schemas import (
    CatalogEntry,
    DealExtraction,
    ExtractionRequest,
    GradeResult,
    GradingContext,
    Matched,
    ProposedNew,
    ProposedWithClosest,
    StrategyExtraction,
    coerce_catalog,
)
from .utils.logging import get_logger, setup_logging
from .vocab import BLUEPRINT_COMPONENTS, COMPONENT_IDS

console = Console()
logger = get_logger(__name__)


def _print_version(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    theme.print_version(__version__, console)
    ctx.exit()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_invoker() -> ModelInvoker:
    """Build the model invoker from config, failing fast without credentials."""
    cfg = get_config()
    if not cfg.api_key and not cfg.api_base:
        raise click.ClickException(
            "No API key configured. Set DEALSCOPE_API_KEY or DEALSCOPE_API_BASE."
        )
    if cfg.backend == "dspy":
        return build_dspy_invoker(cfg)
    return build_invoker(cfg)


def _read_text(path: Path) -> str:
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        raise click.ClickException(f"{path} is not a UTF-8 text file.")
    if not text.strip():
        raise click.ClickException(f"Document is empty: {path}")
    return text


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise click.ClickException(f"{path} is not valid JSON: {exc}")


def _load_catalog(path: Optional[Path]) -> Optional[list[CatalogEntry]]:
    """Read a JSON list of ``{"id", "name", "definition"}`` objects."""
    if path is None:
        return None
    data = _read_json(path)
    if not isinstance(data, list):
        raise click.ClickException(f"{path} must contain a JSON list of catalog entries.")
    try:
        return coerce_catalog(data)
    except ValidationError as exc:
        raise click.ClickException(f"Invalid catalog entry in {path}: {exc.errors()[0]['msg']}")


def _grading_input(data: Any) -> tuple[dict[str, str], GradingContext]:
    """Accept a saved strategy record or a bare ``{"components": {...}}`` object.

    Component values may be plain strings or ``{"content": ...}`` objects.
    """
    if not isinstance(data, dict) or not isinstance(data.get("components"), dict):
        raise click.ClickException('Grading input must be a JSON object with a "components" object.')

    components: dict[str, str] = {}
    for cid, value in data["components"].items():
        if isinstance(value, dict):
            value = value.get("content")
        if isinstance(value, str):
            components[str(cid)] = value

    try:
        context = GradingContext.model_validate(data)
    except ValidationError:
        logger.warning("Ignoring malformed strategy context in grading input")
        context = GradingContext()
    return components, context


def _run(pipeline: str, label: str, fn: Any) -> tuple[Any, float]:
    started = time.perf_counter()
    try:
        with theme.spinner(label, console):
            result = fn()
    except ExtractionError as exc:
        logger.error("%s failed: %s", pipeline, exc.detail)
        raise click.ClickException(exc.user_message)
    return result, time.perf_counter() - started


def _save(output: Path, payload: dict[str, Any], pipeline: str, duration: float, warnings: list[str], source: Path) -> None:
    envelope = build_envelope(
        pipeline=pipeline,
        model=get_config().lm,
        duration_s=duration,
        warnings=warnings,
        document={"filename": source.name},
    )
    if not output.suffix:
        output = output.with_suffix(".json")
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(
        json.dumps(wrap_payload(payload, envelope), indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
    console.print(theme.ok(f"Saved to {output}"))


def _render_warnings(warnings: list[str]) -> None:
    if not warnings:
        return
    theme.section("Defaulted Fields", console)
    for warning in warnings:
        console.print(theme.warn(_esc(warning)))


def _render_deal(record: DealExtraction) -> None:
    theme.section("Deal", console, "01")
    t = theme.make_kv_table()
    t.add_row("Name", _esc(record.name))
    t.add_row("Stage", theme.badge(record.stage))
    t.add_row("Readiness", record.readiness_state)
    t.add_row("Constraint", record.dominant_constraint)
    t.add_row("Summary", _esc(record.summary))
    if record.investment_value:
        t.add_row("Investment", _esc(record.investment_value))
    if record.suggested_location_text:
        t.add_row("Location", _esc(record.suggested_location_text))
    t.add_row("LGAs", ", ".join(record.suggested_lga_ids) or "[dim]none[/dim]")
    console.print(Padding(t, (0, 0, 0, 2)))

    decision = record.suggested_opportunity_type
    theme.section("Opportunity Type", console, "02")
    t = theme.make_kv_table()
    t.add_row("Decision", theme.badge(decision.kind))
    if isinstance(decision, Matched):
        t.add_row("Existing", decision.existing_id)
    elif isinstance(decision, (ProposedWithClosest, ProposedNew)):
        t.add_row("Proposed", _esc(decision.proposed_name))
        if decision.proposed_definition:
            t.add_row("Definition", _esc(decision.proposed_definition))
        if isinstance(decision, ProposedWithClosest):
            t.add_row("Closest", decision.closest_existing_id)
    t.add_row("Confidence", decision.confidence)
    t.add_row("Reasoning", _esc(decision.reasoning))
    console.print(Padding(t, (0, 0, 0, 2)))


def _render_strategy(record: StrategyExtraction) -> None:
    theme.section("Strategy", console, "01")
    t = theme.make_kv_table()
    t.add_row("Title", _esc(record.title))
    t.add_row("Summary", _esc(record.summary))
    if record.priority_sector_names:
        t.add_row("Sectors", _esc(", ".join(record.priority_sector_names)))
    console.print(Padding(t, (0, 0, 0, 2)))

    theme.section("Blueprint Components", console, "02")
    t = theme.make_clean_table()
    t.add_column("#", style=f"bold {theme.TEAL}", no_wrap=True)
    t.add_column("Component", no_wrap=True)
    t.add_column("Confidence", justify="right")
    t.add_column("Content", style=theme.MUTED, ratio=1)
    for component in BLUEPRINT_COMPONENTS:
        extracted = record.components[component.id]
        preview = extracted.content[:120] + ("..." if len(extracted.content) > 120 else "")
        t.add_row(
            component.id,
            component.short_title,
            f"{extracted.confidence:.2f}",
            _esc(preview) or "[dim]empty[/dim]",
        )
    console.print(Padding(t, (0, 0, 0, 2)))


def _render_grade(result: GradeResult) -> None:
    theme.section("Grade", console, "01")
    t = theme.make_kv_table()
    t.add_row("Grade", theme.grade_badge(result.grade_letter))
    t.add_row("Rationale", _esc(result.grade_rationale_short))
    if result.scope_discipline_notes:
        t.add_row("Scope", _esc(result.scope_discipline_notes))
    console.print(Padding(t, (0, 0, 0, 2)))

    theme.section("Evidence", console, "02")
    t = theme.make_clean_table()
    t.add_column("#", style=f"bold {theme.TEAL}", no_wrap=True)
    t.add_column("Component", no_wrap=True)
    t.add_column("Assessment", style=theme.MUTED, ratio=1)
    for component in BLUEPRINT_COMPONENTS:
        note = result.evidence_notes_by_component[component.id]
        t.add_row(component.id, component.short_title, _esc(note) or "[dim]none[/dim]")
    console.print(Padding(t, (0, 0, 0, 2)))

    if result.missing_elements:
        theme.section("Missing Elements", console, "03")
        for element in result.missing_elements:
            console.print(theme.info(f"Component {element.component_id}: {_esc(element.reason)}"))


# ---------------------------------------------------------------------------
# Main CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.option(
    "--version",
    is_flag=True,
    callback=_print_version,
    expose_value=False,
    is_eager=True,
    help="Show version and exit.",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log at DEBUG level to stderr as well as the session log.")
def cli(verbose: bool) -> None:
    """DEALSCOPE -- deal extraction and strategy grading."""
    cfg = get_config()
    try:
        setup_logging(
            level="DEBUG" if verbose else None,
            log_dir=cfg.log_dir,
            console_output=verbose,
        )
    except OSError as exc:
        console.print(theme.warn(f"Session logging disabled: {exc}"))


# ---------------------------------------------------------------------------
# memo
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--label", type=str, default=None, help="Memo label for the record's memo reference (default: file name).")
@click.option("--opportunity-types", "opportunity_types_path", type=click.Path(exists=True, dir_okay=False, path_type=Path), default=None, help="JSON list of known opportunity types.")
@click.option("--lgas", "lgas_path", type=click.Path(exists=True, dir_okay=False, path_type=Path), default=None, help="JSON list of known LGAs.")
@click.option("--output", "-o", type=click.Path(path_type=Path), default=None, help="Save the deal record as JSON.")
def memo(
    file: Path,
    label: Optional[str],
    opportunity_types_path: Optional[Path],
    lgas_path: Optional[Path],
    output: Optional[Path],
) -> None:
    """Extract a structured deal from an investment memo.

    \b
    Examples:
      dealscope memo memo.txt --lgas lgas.json --opportunity-types types.json
      dealscope memo memo.txt -o deal.json
    """
    request = ExtractionRequest(
        document_text=_read_text(file),
        label=label or file.name,
        opportunity_types=_load_catalog(opportunity_types_path),
        lgas=_load_catalog(lgas_path),
    )
    console.print(theme.info(f"{file.name} · {len(request.document_text):,} chars"))
    invoker = _make_invoker()
    record, duration = _run(
        "memo",
        "Analysing memo...",
        lambda: extract_deal(request, invoker=invoker, default_lga_id=get_config().default_lga_id),
    )
    console.print(theme.ok(f"Extracted in {duration:.1f}s"))

    _render_deal(record)
    _render_warnings(record.warnings)
    if output is not None:
        _save(output, record.to_payload(), "memo", duration, record.warnings, file)


# ---------------------------------------------------------------------------
# strategy
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--output", "-o", type=click.Path(path_type=Path), default=None, help="Save the strategy record as JSON (usable as `grade` input).")
def strategy(file: Path, output: Optional[Path]) -> None:
    """Extract blueprint components from a sector strategy document."""
    text = _read_text(file)
    console.print(theme.info(f"{file.name} · {len(text):,} chars"))
    invoker = _make_invoker()
    record, duration = _run(
        "strategy",
        "Extracting blueprint components...",
        lambda: extract_strategy(text, invoker=invoker),
    )
    console.print(theme.ok(f"Extracted in {duration:.1f}s"))

    _render_strategy(record)
    _render_warnings(record.warnings)
    if output is not None:
        _save(output, record.to_payload(), "strategy", duration, record.warnings, file)


# ---------------------------------------------------------------------------
# grade
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--output", "-o", type=click.Path(path_type=Path), default=None, help="Save the grade as JSON.")
def grade(file: Path, output: Optional[Path]) -> None:
    """Grade a strategy against the six-component blueprint.

    FILE is a JSON strategy record (as written by ``dealscope strategy -o``)
    or an object of the form ``{"components": {"1": "...", ...}}``.
    """
    components, context = _grading_input(_read_json(file))
    present = sum(1 for cid in COMPONENT_IDS if components.get(cid, "").strip())
    console.print(theme.info(f"{file.name} · {present}/{len(COMPONENT_IDS)} components with content"))
    invoker = _make_invoker()
    result, duration = _run(
        "grading",
        "Grading strategy...",
        lambda: grade_strategy(components, context, invoker=invoker),
    )
    console.print(theme.ok(f"Graded in {duration:.1f}s"))

    _render_grade(result)
    _render_warnings(result.warnings)
    if output is not None:
        _save(output, result.to_payload(), "grading", duration, result.warnings, file)


# ---------------------------------------------------------------------------
# config
# ---------------------------------------------------------------------------


@cli.command("config")
def config_show() -> None:
    """Show the resolved configuration (flags > env > .env > defaults)."""
    cfg = get_config()

    theme.section("Language Model", console, "01")
    t = theme.make_kv_table()
    t.add_row("backend", cfg.backend)
    t.add_row("lm", cfg.lm)
    t.add_row("api_base", cfg.api_base or "[dim]default[/dim]")
    t.add_row("lm_temperature", str(cfg.lm_temperature))
    t.add_row("max_tokens", str(cfg.max_tokens))
    if cfg.api_key:
        masked = cfg.api_key[:4] + "···" + cfg.api_key[-4:] if len(cfg.api_key) > 8 else "***"
    else:
        masked = "[dim]not set[/dim]"
    t.add_row("api_key", masked)
    console.print(Padding(t, (0, 0, 0, 2)))

    theme.section("Classification & Paths", console, "02")
    t = theme.make_kv_table()
    t.add_row("default_lga_id", cfg.default_lga_id)
    t.add_row("home_dir", str(cfg.home_dir))
    t.add_row("log_dir", str(cfg.log_dir))
    console.print(Padding(t, (0, 0, 0, 2)))


if __name__ == "__main__":
    cli()
