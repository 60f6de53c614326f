#!/usr/bin/env python3
"""
CLI tool for matching a coordinate against service zones.

Runs the same pipeline as POST /api/geo-matching/match and prints the JSON
response (camelCase keys).

Usage:
    python scripts/match_coordinate.py --seed tests/fixtures/geo_seed.json --lat 51.5074 --lon -0.1278
    python scripts/match_coordinate.py --seed tests/fixtures/geo_seed.json --lat 51.5 --lon -0.12 \
        --radius 10 --limit 20 --demand high,medium --category plumbing
    python scripts/match_coordinate.py --lat 51.5 --lon -0.12 --radius 5 --preview

Store selection:
    --seed FILE    In-memory stores seeded from FILE ({"zones": [...], "services": [...]})
    (no --seed)    Stores selected by GEO_STORE_BACKEND / GEO_SEED_FILE (.env supported)

Exit codes:
    0 - Success
    1 - Invalid latitude/longitude, unreadable seed file or store failure
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from redis.exceptions import RedisError

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.application.commands.match_coordinate import MatchCoordinateCommand
from src.application.exceptions import UpstreamStoreError
from src.application.queries.preview_coverage_window import (
    PreviewCoverageWindowQuery,
    PreviewCoverageWindowQueryHandler,
)
from src.application.services.geo_matching_use_case import GeoMatchingUseCase
from src.domain.shared.exceptions import InvalidCoordinateError
from src.infrastructure.geometry.shapely_geometry_kernel import ShapelyGeometryKernel
from src.infrastructure.persistence.redis import close_connections
from src.infrastructure.persistence.store_factory import (
    GeoStores,
    build_memory_stores,
    get_geo_stores,
)

logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Match a coordinate against configured service zones",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Match with default radius (25 km) and limit (15)
  python scripts/match_coordinate.py --seed tests/fixtures/geo_seed.json --lat 51.5074 --lon -0.1278

  # Only high-demand zones, plumbing services
  python scripts/match_coordinate.py --seed tests/fixtures/geo_seed.json --lat 51.5 --lon -0.12 \\
      --demand high --category plumbing

  # Preview the 10 km search window
  python scripts/match_coordinate.py --lat 51.5 --lon -0.12 --radius 10 --preview
        """,
    )

    parser.add_argument("--seed", type=Path, help="Seed JSON file for in-memory stores")
    parser.add_argument("--lat", required=True, help="Latitude in degrees")
    parser.add_argument("--lon", required=True, help="Longitude in degrees")
    parser.add_argument("--radius", help="Search radius in km (default 25, max 200)")
    parser.add_argument("--limit", help="Requested services (default 15, max 100)")
    parser.add_argument(
        "--demand",
        default="",
        help="Comma-separated demand levels to keep (high,medium,low)",
    )
    parser.add_argument(
        "--category",
        action="append",
        default=[],
        help="Service category to keep (repeatable, or comma-separated)",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Print the search window polygon instead of matching",
    )
    parser.add_argument("--verbose", action="store_true", help="Log at INFO level")

    return parser.parse_args(argv)


def _split_csv(values: list[str]) -> list[str]:
    return [item.strip() for value in values for item in value.split(",") if item.strip()]


def build_payload(args: argparse.Namespace) -> dict[str, Any]:
    """Request payload equivalent to the HTTP body."""
    return {
        "latitude": args.lat,
        "longitude": args.lon,
        "radiusKm": args.radius,
        "limit": args.limit,
        "demandLevels": _split_csv([args.demand]),
        "categories": _split_csv(args.category),
    }


async def resolve_stores(seed: Optional[Path]) -> GeoStores:
    if seed is not None:
        return build_memory_stores(seed)
    return await get_geo_stores()


async def main(argv: Optional[list[str]] = None) -> int:
    """Run the CLI; returns the process exit code."""
    load_dotenv()
    args = parse_args(argv)
    if args.verbose:
        logging.getLogger().setLevel(logging.INFO)

    payload = build_payload(args)
    geometry = ShapelyGeometryKernel()

    try:
        if args.preview:
            query = PreviewCoverageWindowQuery.from_payload(payload)
            polygon = await PreviewCoverageWindowQueryHandler(geometry).handle(query)
            print(json.dumps({"geometry": polygon}, indent=2))
            return 0

        command = MatchCoordinateCommand.from_payload(payload)
        stores = await resolve_stores(args.seed)
        use_case = GeoMatchingUseCase(
            zone_store=stores.zone_store,
            service_store=stores.service_store,
            geometry=geometry,
        )
        response = await use_case.execute(command)
    except InvalidCoordinateError as e:
        logger.error(f"Invalid {e.field}: {e.message}")
        return 1
    except (OSError, ValueError) as e:
        logger.error(f"Cannot load stores: {e}")
        return 1
    except (UpstreamStoreError, RedisError) as e:
        logger.error(f"Store failure: {e}")
        return 1
    finally:
        await close_connections()

    print(response.model_dump_json(by_alias=True, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
