"""Corpus build: merge the YAML source files into enriched couplet documents.

Layout of the data directory:

    data/
      divisions.yml   divisions: {1: {name, translation, transliteration}, ...}
      sections.yml    sections:  {...}
      chapters.yml    chapters:  {...}
      couplets/*.yml  couplet: {number, division_number, ...}
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, List

import click
import yaml
from pydantic import ValidationError

from config import load_config
from database import CoupletStore
from errors import StoreError
from schemas import Couplet, CoupletSource, HierarchyName

logger = logging.getLogger(__name__)

HIERARCHY_FILES = {
    "division": "divisions.yml",
    "section": "sections.yml",
    "chapter": "chapters.yml",
}


class BuildError(Exception):
    pass


def _read_yaml(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as f:
        try:
            return yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise BuildError(f"Invalid YAML in {path}: {e}") from e


def load_hierarchy(data_dir: Path) -> Dict[str, Dict[int, HierarchyName]]:
    """Read the division/section/chapter name tables keyed by number."""
    tables = {}
    for level, filename in HIERARCHY_FILES.items():
        path = data_dir / filename
        if not path.exists():
            raise BuildError(f"Missing metadata file: {path}")
        raw = _read_yaml(path) or {}
        try:
            entries = raw.get(f"{level}s") or {}
            tables[level] = {int(k): HierarchyName(**v) for k, v in entries.items()}
        except (ValidationError, ValueError, TypeError, AttributeError) as e:
            raise BuildError(f"Invalid {level} table in {path}: {e}") from e
        logger.info("Loaded %d %s entries", len(tables[level]), level)
    return tables


def load_couplet_source(path: Path) -> CoupletSource:
    raw = _read_yaml(path)
    if not isinstance(raw, dict) or not raw.get("couplet"):
        raise BuildError(f"Invalid couplet data in {path}: missing couplet root object")
    try:
        return CoupletSource(**raw["couplet"])
    except ValidationError as e:
        raise BuildError(f"Invalid couplet data in {path}: {e}") from e


def enrich(source: CoupletSource, hierarchy: Dict[str, Dict[int, HierarchyName]]) -> Couplet:
    """Replace the *_number fields with the full division/section/chapter entries."""
    refs = {}
    for level in HIERARCHY_FILES:
        number = getattr(source, f"{level}_number")
        names = hierarchy[level].get(number)
        if names is None:
            raise BuildError(f"Unknown {level} number {number} in couplet {source.number}")
        refs[level] = {"number": number, **names.model_dump()}

    data = source.model_dump(exclude={"division_number", "section_number", "chapter_number"})
    return Couplet(**data, **refs)


def build_documents(data_dir: Path) -> List[Dict[str, Any]]:
    hierarchy = load_hierarchy(data_dir)
    couplets_dir = data_dir / "couplets"
    files = sorted(couplets_dir.glob("*.yml"))
    logger.info("Found %d couplet files in %s", len(files), couplets_dir)

    documents: Dict[int, Dict[str, Any]] = {}
    for path in files:
        couplet = enrich(load_couplet_source(path), hierarchy)
        if couplet.number in documents:
            raise BuildError(f"Duplicate couplet number {couplet.number} in {path}")
        documents[couplet.number] = couplet.model_dump(exclude_none=True)

    return [documents[n] for n in sorted(documents)]


def build_database(store: CoupletStore, data_dir: Path) -> int:
    documents = build_documents(data_dir)
    inserted = store.replace_all(documents)
    store.ensure_indexes()
    logger.info("Stored %d couplets", inserted)
    return inserted


@click.group()
@click.option("--log-level", default=None, help="Override LOG_LEVEL")
@click.pass_context
def cli(ctx, log_level):
    """Build the couplet collection from YAML sources."""
    settings = load_config()
    logging.basicConfig(
        level=(log_level or settings.log_level).upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj.setdefault("settings", settings)


def _open_store(ctx) -> CoupletStore:
    store = ctx.obj.get("store")
    if store is None:
        store = CoupletStore.connect(ctx.obj["settings"])
    return store


def _data_dir(ctx, data_dir) -> Path:
    return Path(data_dir or ctx.obj["settings"].data_dir)


@cli.command()
@click.option("--data-dir", type=click.Path(file_okay=False), default=None, help="Source data directory")
@click.pass_context
def build(ctx, data_dir):
    """Rebuild the collection from scratch."""
    store = _open_store(ctx)
    try:
        count = build_database(store, _data_dir(ctx, data_dir))
    except (BuildError, StoreError) as e:
        logger.error("Error building database: %s", getattr(e, "detail", e))
        sys.exit(1)
    finally:
        store.close()
    click.echo(f"Database built successfully ({count} couplets)")


@cli.command()
@click.option("--data-dir", type=click.Path(file_okay=False), default=None, help="Source data directory")
@click.pass_context
def ensure(ctx, data_dir):
    """Build the collection only if it is empty."""
    store = _open_store(ctx)
    try:
        if store.count() > 0:
            click.echo("Database already exists")
            return
        logger.info("Database not found, building...")
        count = build_database(store, _data_dir(ctx, data_dir))
    except (BuildError, StoreError) as e:
        logger.error("Error building database: %s", getattr(e, "detail", e))
        sys.exit(1)
    finally:
        store.close()
    click.echo(f"Database built successfully ({count} couplets)")


if __name__ == "__main__":
    cli()
