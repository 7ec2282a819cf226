"""
Catalog Builder - Loads the step/option catalog from CSV and validates it.

Provides:
- Strict parsing of steps.csv and options.csv into an immutable Catalog
- Build report generation (input hashes, metrics, warnings, errors)
"""
import pandas as pd
import json
import hashlib
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Optional
from pathlib import Path

from loguru import logger

from ..config.settings import get_settings, Settings
from ..engine.models import Catalog, Step, Option
from ..errors import CatalogError


STEP_COLUMNS = ['position', 'id', 'title', 'description', 'multi_select', 'is_timeline']
OPTION_COLUMNS = ['step_id', 'option_id', 'name', 'base_price', 'description', 'multiplier']


def get_file_hash(path: Path) -> str:
    """Get SHA256 hash of a file."""
    if not path.exists():
        return ""
    with open(path, 'rb') as f:
        return hashlib.sha256(f.read()).hexdigest()[:12]


def parse_bool(value: str) -> bool:
    """Parse a boolean from CSV string."""
    return value.lower() in ('true', '1', 'yes', 'on')


def _read_csv(path: Path, required: list[str]) -> pd.DataFrame:
    if not path.exists():
        raise CatalogError(f"Catalog file not found: {path}")

    try:
        df = pd.read_csv(path, dtype=str, keep_default_na=False)
    except (pd.errors.EmptyDataError, pd.errors.ParserError, UnicodeDecodeError) as e:
        raise CatalogError(f"{path.name} could not be parsed: {e}") from e
    for col in df.columns:
        df[col] = df[col].astype(str).str.strip()

    missing = [c for c in required if c not in df.columns]
    if missing:
        raise CatalogError(f"{path.name} is missing columns: {', '.join(missing)}")
    return df


def _parse_int(value: str, what: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise CatalogError(f"{what} must be an integer, got '{value}'") from None


def _parse_option(row: dict, is_timeline: bool) -> Option:
    option_id = row['option_id']
    if not option_id:
        raise CatalogError(f"Option without id in step {row['step_id']}")

    base_price = _parse_int(row['base_price'], f"base_price of option '{option_id}'")
    if base_price < 0:
        raise CatalogError(f"base_price of option '{option_id}' is negative ({base_price})")

    multiplier = None
    if row['multiplier']:
        if not is_timeline:
            raise CatalogError(
                f"Option '{option_id}' has a multiplier but step {row['step_id']} is not the timeline step"
            )
        try:
            multiplier = Decimal(row['multiplier'])
        except InvalidOperation:
            raise CatalogError(
                f"multiplier of option '{option_id}' is not a number: '{row['multiplier']}'"
            ) from None
        if not multiplier.is_finite() or multiplier < 0:
            raise CatalogError(f"multiplier of option '{option_id}' must be a non-negative number")

    return Option(
        id=option_id,
        name=row['name'],
        base_price=base_price,
        description=row['description'],
        multiplier=multiplier,
    )


def load_catalog(steps_csv: Path, options_csv: Path) -> Catalog:
    """
    Build an immutable Catalog from the two CSV source files.

    Args:
        steps_csv: One row per step; ``position`` gives the zero-based order
        options_csv: One row per option, linked to its step by ``step_id``

    Returns:
        Catalog with steps in position order

    Raises:
        CatalogError: on missing files, missing columns or invalid values
    """
    steps_df = _read_csv(Path(steps_csv), STEP_COLUMNS)
    options_df = _read_csv(Path(options_csv), OPTION_COLUMNS)

    steps_df['position'] = [_parse_int(v, "Step position") for v in steps_df['position']]
    steps_df['id'] = [_parse_int(v, "Step id") for v in steps_df['id']]

    if steps_df['position'].duplicated().any():
        raise CatalogError("Duplicate step positions in steps.csv")
    if steps_df['id'].duplicated().any():
        raise CatalogError("Duplicate step ids in steps.csv")

    steps_df = steps_df.sort_values('position')
    if list(steps_df['position']) != list(range(len(steps_df))):
        raise CatalogError("Step positions must run 0..n-1 without gaps")

    steps_df['is_timeline'] = steps_df['is_timeline'].map(parse_bool)
    if steps_df['is_timeline'].sum() > 1:
        raise CatalogError("More than one step is marked as the timeline step")

    known_ids = set(steps_df['id'])
    options_df['step_id'] = [_parse_int(v, "Option step_id") for v in options_df['step_id']]
    orphans = sorted(set(options_df['step_id']) - known_ids)
    if orphans:
        raise CatalogError(f"Options reference unknown step ids: {orphans}")

    steps = []
    for step_row in steps_df.to_dict(orient='records'):
        step_options = options_df[options_df['step_id'] == step_row['id']]
        if step_options['option_id'].duplicated().any():
            dupes = step_options[step_options['option_id'].duplicated()]['option_id'].tolist()
            raise CatalogError(f"Duplicate option ids in step {step_row['id']}: {dupes}")

        options = tuple(
            _parse_option(row, step_row['is_timeline'])
            for row in step_options.to_dict(orient='records')
        )
        steps.append(Step(
            id=int(step_row['id']),
            title=step_row['title'],
            description=step_row['description'],
            multi_select=parse_bool(step_row['multi_select']),
            is_timeline=bool(step_row['is_timeline']),
            options=options,
        ))

    return Catalog(steps=tuple(steps))


def load_default_catalog(settings: Optional[Settings] = None) -> Catalog:
    """Load the catalog from the paths configured in settings."""
    settings = settings or get_settings()
    catalog = load_catalog(settings.steps_csv, settings.options_csv)
    logger.info(f"Loaded catalog: {len(catalog)} steps, {catalog.option_count} options")
    return catalog


def build_catalog_report(settings: Optional[Settings] = None, save: bool = True) -> dict:
    """
    Validate the catalog source files and produce a build report.

    Args:
        settings: Optional settings override
        save: Write the report as JSON to ``settings.build_report``

    Returns:
        Build report dictionary
    """
    settings = settings or get_settings()

    report = {
        "timestamp": datetime.now().isoformat(),
        "status": "pending",
        "input_files": {},
        "metrics": {},
        "warnings": [],
        "errors": []
    }

    for key, path in (("steps", settings.steps_csv), ("options", settings.options_csv)):
        report["input_files"][key] = {
            "path": str(path),
            "hash": get_file_hash(Path(path))
        }

    try:
        catalog = load_catalog(settings.steps_csv, settings.options_csv)
    except CatalogError as e:
        report["errors"].append(str(e))
        report["status"] = "failed"
        logger.error(f"Catalog build failed: {e}")
    else:
        prices = [opt.base_price for step in catalog.steps for opt in step.options]
        report["metrics"] = {
            "step_count": len(catalog),
            "option_count": catalog.option_count,
            "options_per_step": {step.title: len(step.options) for step in catalog.steps},
            "price_range": [min(prices), max(prices)] if prices else None,
        }

        for step in catalog.steps:
            if not step.options:
                report["warnings"].append(f"Step '{step.title}' has no options")
        if catalog.timeline_index is None:
            report["warnings"].append("No timeline step defined; totals will never be adjusted")

        report["status"] = "success"
        logger.info(f"Catalog OK: {len(catalog)} steps, {catalog.option_count} options")

    if save:
        report_path = Path(settings.build_report)
        report_path.parent.mkdir(parents=True, exist_ok=True)
        with open(report_path, 'w') as f:
            json.dump(report, f, indent=2)
        logger.info(f"Build report saved to: {report_path}")

    return report


if __name__ == "__main__":
    build_catalog_report()
