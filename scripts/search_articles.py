#!/usr/bin/env python3
"""
Search the parts catalog by article number:
- search articles across all number types
- print matches (brand, number, name)
- optionally print EAN / OE numbers / attributes and linked vehicles per match

Uses config/tecdoc.yml and TECDOC_* environment variables (a .env file is read).
Pass --recorded DIR to replay <operation>.xml envelopes instead of calling the service.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

load_dotenv()

from tecdoc import Catalog, CatalogError
from tecdoc.clients.mocks import RecordedTransport
from tecdoc.utils.config_loader import load_catalog_config


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def print_details(article) -> None:
    print(f"    EAN: {article.ean_number or '-'}")
    for oe in article.oe_numbers:
        print(f"    OE:  {oe.brand_name} {oe.oe_number}")
    for attribute in article.attributes:
        unit = f" {attribute.unit}" if attribute.unit else ""
        print(f"    {attribute.name}: {attribute.value}{unit}")


def print_vehicles(article) -> None:
    vehicles = article.linked_vehicles
    print(f"    Linked vehicles: {len(vehicles)}")
    for vehicle in vehicles:
        print(f"      [{vehicle.id}] {vehicle.manufacturer_name} {vehicle.model_name} {vehicle.type_name}")


def main() -> int:
    parser = argparse.ArgumentParser(description="Search catalog articles by number")
    parser.add_argument("article_number", help="Article / OE / EAN number to search for")
    parser.add_argument("--number-type", type=int, default=10, help="0 article, 1 OE, ... 6 EAN, 10 any (default)")
    parser.add_argument("--exact", action="store_true", help="Exact instead of similar search")
    parser.add_argument("--sort-type", type=int, default=1, choices=(1, 2), help="1 brand, 2 product group")
    parser.add_argument("--brand-no", type=int, default=None)
    parser.add_argument("--lang", default=None, help="ISO 639 language (default from config)")
    parser.add_argument("--country", default=None, help="ISO 3166 country (default from config)")
    parser.add_argument("--details", action="store_true", help="Print EAN, OE numbers and attributes")
    parser.add_argument("--vehicles", action="store_true", help="Print linked vehicles")
    parser.add_argument("--recorded", type=Path, default=None, help="Directory of recorded <operation>.xml responses")
    parser.add_argument("--config", type=Path, default=None, help="Config file (default config/tecdoc.yml)")
    parser.add_argument("--verbose", "-v", action="store_true")
    args = parser.parse_args()

    setup_logging(args.verbose)
    config = load_catalog_config(args.config)
    transport = RecordedTransport.from_directory(args.recorded) if args.recorded else None

    with Catalog.from_config(config, transport=transport) as catalog:
        try:
            articles = catalog.search_articles(
                article_number=args.article_number,
                number_type=args.number_type,
                search_exact=args.exact,
                sort_type=args.sort_type,
                brand_no=args.brand_no,
                lang=args.lang,
                country=args.country,
            )
            print(f"\n### {len(articles)} article(s) for {args.article_number!r}\n")
            for article in articles:
                print(f"[{article.id}] {article.brand_name} {article.number} - {article.name}")
                if args.details:
                    print_details(article)
                if args.vehicles:
                    print_vehicles(article)
        except CatalogError as e:
            logging.getLogger(__name__).error(f"Catalog request failed: {e}")
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
