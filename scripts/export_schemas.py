"""Write JSON schemas of the public API views, for frontend type generation."""

import argparse
import json
from pathlib import Path

from pydantic import BaseModel

from backend.app.models import (
    CatalogActivityView,
    CityView,
    PublicTripView,
    SectionPreview,
    TripBudgetReport,
    TripView,
)

EXPORTED_VIEWS: tuple[type[BaseModel], ...] = (
    TripView,
    SectionPreview,
    TripBudgetReport,
    PublicTripView,
    CityView,
    CatalogActivityView,
)


def export_schemas(out_dir: Path) -> list[Path]:
    """Write one ``<Model>.schema.json`` per exported view into ``out_dir``."""
    out_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for model in EXPORTED_VIEWS:
        path = out_dir / f"{model.__name__}.schema.json"
        path.write_text(json.dumps(model.model_json_schema(), indent=2) + "\n")
        written.append(path)
    return written


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--out", type=Path, default=Path("docs/schemas"))
    args = parser.parse_args()

    for path in export_schemas(args.out):
        print(f"Exported {path.stem.removesuffix('.schema')} schema to {path}")


if __name__ == "__main__":
    main()
