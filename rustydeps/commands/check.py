"""Check (and optionally update) command implementation for rustydeps.

Orchestrates the core components for one run:

1. **ManifestReader**: reads ``[dependencies]`` from ``Cargo.toml``.
2. **VersionResolver**: fetches the latest version of every dependency
   from the crates.io sparse index, concurrently.
3. **filter_outdated**: narrows the set when ``--outdated`` or
   ``--update`` is given.
4. **render_table**: prints the aligned, highlighted table (or JSON).
5. **UpdateExecutor**: runs ``cargo add`` for ``--update``.

Typical usage::

    # Show every dependency with its latest version
    $ cargo rusty-deps

    # Only the outdated ones
    $ cargo rusty-deps --outdated

    # Bump all outdated dependencies to their latest versions
    $ cargo rusty-deps --update
"""

from __future__ import annotations

from pathlib import Path

from rustydeps.config import RustyDepsConfig
from rustydeps.context import RustyDepsContext
from rustydeps.models import DependencySet
from rustydeps.core import (
    CratesIndexClient,
    ManifestReader,
    UpdateExecutor,
    VersionResolver,
    filter_outdated,
    render_table,
    update_requests,
)
from rustydeps.utils import (
    HTTPClient,
    get_logger,
    print_json,
    print_renderable,
    print_success,
    print_warning,
)

logger = get_logger("commands.check")

OUTPUT_FORMATS = ("table", "json")


async def run_check(
    ctx: RustyDepsContext,
    manifest_path: Path,
    *,
    update: bool = False,
    outdated: bool = False,
    output_format: str = "table",
) -> DependencySet:
    """Resolve, display and optionally update the manifest's dependencies.

    Args:
        ctx: Context carrying the loaded configuration.
        manifest_path: Path to ``Cargo.toml``.
        update: Apply updates to outdated dependencies.
        outdated: Only report outdated dependencies.
        output_format: ``table`` or ``json``.

    Returns:
        The dependencies that were displayed (and updated, with ``update``).

    Raises:
        ManifestError: The manifest is missing or malformed.
        VersionParseError: A declared version is not a single version.
        RegistryError: Any registry fetch failed; nothing is displayed.
        UpdateExecutionError: ``cargo add`` failed; the manifest is restored.
    """
    config = ctx.config or RustyDepsConfig()
    as_table = output_format == "table"

    # ── Step 1: Read manifest ─────────────────────────────────────────
    logger.info("Reading %s", manifest_path)
    entries = ManifestReader().read(manifest_path)
    dependencies = DependencySet.from_entries(entries)

    if not dependencies:
        if as_table:
            print_warning(f"No dependencies found in {manifest_path}")
        else:
            print_json([])
        return dependencies

    # ── Step 2: Resolve latest versions ───────────────────────────────
    async with HTTPClient(
        timeout=config.timeout,
        max_retries=config.max_retries,
        max_concurrency=config.max_concurrency,
    ) as http:
        resolver = VersionResolver(CratesIndexClient(http, index_url=config.index_url))
        await resolver.resolve(dependencies)

    # ── Step 3: Filter ────────────────────────────────────────────────
    if update or outdated:
        dependencies = filter_outdated(dependencies)

    # ── Step 4: Display ───────────────────────────────────────────────
    if not as_table:
        print_json(dependencies.to_json())
    elif dependencies:
        print_renderable(render_table(dependencies))
    else:
        print_success("All dependencies are up to date!")

    # ── Step 5: Update ────────────────────────────────────────────────
    if update and dependencies:
        executor = UpdateExecutor(manifest_path, cargo_command=config.cargo_command)
        executor.apply(update_requests(dependencies))
        if as_table:
            print_success(f"Updated {len(dependencies)} dependencies")

    return dependencies
