"""
Command-line interface for Etymolens.

Resolves text from the terminal and prints every word coloured by its origin,
followed by the origin statistics.
"""

import asyncio
import json
import sys
from pathlib import Path
from typing import List, Optional, Tuple

import click
from click_help_colors import HelpColorsCommand, HelpColorsGroup
from click_option_group import OptionGroup, optgroup

from etymolens import __version__
from etymolens.agents.batch_agent import (
    calculate_origin_stats,
    create_batch_processor,
    get_active_languages
)
from etymolens.cache.origin_cache import JsonFileStore, MemoryStore, OriginCache
from etymolens.config import CACHE_CONFIG, CACHE_DIR, LANGUAGE_COLORS
from etymolens.models.origin_models import CompoundOrigin, OriginLabel, ProcessedWord
from etymolens.utils.logging_config import setup_logging


def _rgb(origin: OriginLabel) -> Tuple[int, int, int]:
    color = LANGUAGE_COLORS.get(origin.value, LANGUAGE_COLORS["Unknown"]).lstrip("#")
    return int(color[0:2], 16), int(color[2:4], 16), int(color[4:6], 16)


def render_words(results: List[ProcessedWord]) -> str:
    """Colour each word by origin; compound words get one colour per part."""
    rendered = []
    for item in results:
        if isinstance(item.origin, CompoundOrigin):
            first, second = item.origin.parts
            split = item.word.lower().rfind(second.text.lower()) if second.text else -1
            if split > 0:
                rendered.append(
                    click.style(item.word[:split], fg=_rgb(first.origin))
                    + click.style(item.word[split:], fg=_rgb(second.origin))
                )
                continue
            rendered.append(click.style(item.word, fg=_rgb(first.origin)))
        else:
            rendered.append(click.style(item.word, fg=_rgb(item.origin.label)))
    return " ".join(rendered)


def _open_cache(cache_dir: Optional[str], no_cache: bool) -> OriginCache:
    if no_cache:
        return OriginCache(store=MemoryStore())
    directory = Path(cache_dir) if cache_dir else CACHE_DIR
    return OriginCache(store=JsonFileStore(directory / CACHE_CONFIG["file_name"]))


class ColorGroup(HelpColorsGroup):
    def get_help(self, ctx):
        """Override to add custom formatting to help text."""
        return click.style("""
╭────────────────────────────────────────────╮
│        Etymolens word origin explorer      │
╰────────────────────────────────────────────╯
        """, fg='blue') + super().get_help(ctx)


@click.group(
    cls=ColorGroup,
    help_headers_color='yellow',
    help_options_color='green'
)
def cli():
    """
    Etymolens word origin explorer

    Looks up every word of a text on Wiktionary and reports which language
    it came from.

    Examples:

    \b
    Colour a sentence:
        $ etymolens analyze "The quick brown fox jumps over the lazy dog"

    \b
    Machine-readable output:
        $ etymolens analyze --json "Democracy is government by the people"
    """
    pass


@cli.command(
    cls=HelpColorsCommand,
    help_headers_color='yellow',
    help_options_color='green'
)
@click.argument('text', nargs=-1, required=True)
@optgroup.group('Output', cls=OptionGroup)
@optgroup.option(
    '--json', 'as_json',
    is_flag=True,
    help='Print results as JSON'
)
@optgroup.group('Cache Options')
@optgroup.option(
    '--cache-dir',
    type=click.Path(file_okay=False),
    help='Directory holding the origin cache'
)
@optgroup.option(
    '--no-cache',
    is_flag=True,
    help='Keep the cache in memory for this run only'
)
@optgroup.group('Logging Options')
@optgroup.option(
    '--log-level',
    type=click.Choice(
        ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        case_sensitive=False
    ),
    default='WARNING',
    help='Console logging level'
)
@optgroup.option(
    '--log-file',
    type=click.Path(dir_okay=False),
    help='Path to log file (optional)'
)
def analyze(
    text: Tuple[str, ...],
    as_json: bool,
    cache_dir: Optional[str],
    no_cache: bool,
    log_level: str,
    log_file: Optional[str]
) -> None:
    """Resolve the origin of every word in TEXT."""
    setup_logging(log_path=log_file, console_level=log_level)

    processor = create_batch_processor(cache=_open_cache(cache_dir, no_cache))
    batch = asyncio.run(processor.process_text(" ".join(text)))

    if batch.has_network_error:
        if as_json:
            click.echo(json.dumps({"results": [], "has_network_error": True}))
        click.echo(click.style(
            "\nCan't reach Wiktionary. Check your connection and run the command again to retry.",
            fg='red'
        ), err=True)
        sys.exit(1)

    stats = calculate_origin_stats(batch.results)
    languages = get_active_languages(batch.results)

    if as_json:
        click.echo(json.dumps({
            "results": [word.to_dict() for word in batch.results],
            "stats": [stat.to_dict() for stat in stats],
            "active_languages": [language.value for language in languages],
            "has_network_error": False,
        }, indent=2, ensure_ascii=False))
        return

    click.echo(render_words(batch.results))
    click.echo()
    for stat in stats:
        click.echo(
            click.style("■ ", fg=_rgb(stat.origin))
            + f"{stat.origin.value:<12} {stat.count:>4}  {stat.percentage:>5}%"
        )


@cli.command('cache-stats')
@click.option('--cache-dir', type=click.Path(file_okay=False), help='Directory holding the origin cache')
def cache_stats(cache_dir: Optional[str]) -> None:
    """Show origin cache statistics."""
    stats = _open_cache(cache_dir, no_cache=False).stats()
    click.echo(f"Entries: {stats['entries']}")
    click.echo(f"Date:    {stats['date']}")
    click.echo(f"Size:    {stats['size']} bytes")


@cli.command('cache-clear')
@click.option('--cache-dir', type=click.Path(file_okay=False), help='Directory holding the origin cache')
def cache_clear(cache_dir: Optional[str]) -> None:
    """Remove every cached origin."""
    _open_cache(cache_dir, no_cache=False).clear()
    click.echo(click.style("Origin cache cleared", fg='green'))


@cli.command()
def version():
    """Show the version of Etymolens."""
    click.echo(click.style(f"Etymolens v{__version__}", fg='blue'))


if __name__ == '__main__':
    cli()
