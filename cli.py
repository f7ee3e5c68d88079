#!/usr/bin/env python
"""
Command-line interface for osmshapes

Usage:
    python cli.py parse --input overpass.json --output shapes.geojson
    python cli.py query --query-file trails.overpassql --group-by name
"""

import os
import sys
import json
import argparse

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from loguru import logger
from osmshapes import ComplexityError, ElementPipeline, get_config
from osmshapes.geojson import geojson_to_elements, to_feature_collection
from osmshapes.osm import OverpassAPIClient
from osmshapes.sorting import SORT_OPTIONS, sort_geometries


def setup_logging(verbose: bool = False):
    """Configure logging"""
    logger.remove()
    level = "DEBUG" if verbose else "INFO"
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{message}</cyan>",
        level=level
    )


def load_elements(path: str, input_format: str = "auto"):
    """Load elements from an Overpass JSON or GeoJSON file"""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if input_format == "auto":
        is_geojson = isinstance(data, dict) and data.get("type") in ("FeatureCollection", "Feature")
        input_format = "geojson" if is_geojson else "overpass"

    if input_format == "geojson":
        return geojson_to_elements(data)
    if isinstance(data, list):
        return data
    return data.get("elements", [])


def run_pipeline(elements, args) -> int:
    """Parse elements, log warnings and write GeoJSON output"""
    pipeline = ElementPipeline()

    try:
        result = pipeline.run(elements, group_by_tag=args.group_by)
    except ComplexityError as e:
        logger.error(e.message)
        for node in e.details.top_complex_nodes:
            logger.error(f"  {node.coords}: {node.connection_count} connections "
                         f"(ways: {', '.join(str(i) for i in node.way_ids)})")
        logger.error(e.details.suggestion)
        return 2

    for warning in result.warnings:
        logger.warning(warning.message)

    geometries = sort_geometries(result.geometries, args.sort)
    collection = to_feature_collection(geometries)

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            json.dump(collection, f, indent=2, ensure_ascii=False)
        logger.info(f"✓ Wrote {len(geometries)} geometries to {args.output}")
    else:
        json.dump(collection, sys.stdout, ensure_ascii=False)
        sys.stdout.write("\n")

    if geometries:
        bounds = result.global_bounds()
        logger.info(f"  Bounds: lon {bounds.min_lon:.6f}..{bounds.max_lon:.6f}, "
                    f"lat {bounds.min_lat:.6f}..{bounds.max_lat:.6f}")
    elif result.warnings:
        logger.warning("No valid geometries found. All results were filtered out (see warnings above).")
    else:
        logger.warning("No results found.")

    return 0


def cmd_parse(args):
    """Parse a saved Overpass response or GeoJSON file"""
    setup_logging(args.verbose)

    if not os.path.exists(args.input):
        logger.error(f"Input file not found: {args.input}")
        return 1

    try:
        elements = load_elements(args.input, args.format)
    except (ValueError, OSError) as e:
        logger.error(f"Failed to read {args.input}: {e}")
        return 1

    logger.info(f"Loaded {len(elements)} elements from {args.input}")
    return run_pipeline(elements, args)


def cmd_query(args):
    """Run an Overpass query and parse the result"""
    setup_logging(args.verbose)

    query = args.query
    if args.query_file:
        if not os.path.exists(args.query_file):
            logger.error(f"Query file not found: {args.query_file}")
            return 1
        with open(args.query_file, "r", encoding="utf-8") as f:
            query = f.read()

    client = OverpassAPIClient(overpass_url=args.url)
    logger.info(f"Querying {client.overpass_url}")

    try:
        data = client.query(query)
    except (ValueError, RuntimeError) as e:
        logger.error(f"Query failed: {e}")
        return 1

    elements = data.get("elements", [])
    logger.info(f"Received {len(elements)} elements")
    return run_pipeline(elements, args)


def add_output_arguments(parser):
    config = get_config()
    parser.add_argument("--group-by", "-g", default=config.group_by_tag,
                        help="Tag key to group open ways by before merging (disables the complexity check)")
    parser.add_argument("--sort", choices=SORT_OPTIONS, default=config.sort_by, help="Output order")
    parser.add_argument("--output", "-o", help="Output GeoJSON file (stdout if not specified)")


def main():
    parser = argparse.ArgumentParser(
        description="osmshapes CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Parse a saved Overpass response:
    python cli.py parse --input overpass.json --output shapes.geojson

  Merge imported GeoJSON lines by name:
    python cli.py parse --input trails.geojson --group-by name

  Query Overpass directly:
    python cli.py query --query-file trails.overpassql --sort size-desc
        """
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Parse command
    parse_parser = subparsers.add_parser("parse", help="Parse an Overpass JSON or GeoJSON file")
    parse_parser.add_argument("--input", "-i", required=True, help="Input JSON file")
    parse_parser.add_argument("--format", "-f", choices=["auto", "overpass", "geojson"], default="auto",
                              help="Input format")
    add_output_arguments(parse_parser)
    parse_parser.set_defaults(func=cmd_parse)

    # Query command
    query_parser = subparsers.add_parser("query", help="Run an Overpass query")
    source = query_parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--query", "-q", help="Overpass QL query")
    source.add_argument("--query-file", help="File containing an Overpass QL query")
    query_parser.add_argument("--url", help="Overpass API URL")
    add_output_arguments(query_parser)
    query_parser.set_defaults(func=cmd_query)

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
