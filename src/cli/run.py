import argparse
import asyncio
import logging
import time
from typing import List, Optional, Sequence

from core.entities import DataItem, HashtagStat
from core.schemas import FilterCriteria
from ingestion.integration import ServiceIntegration
from ingestion.source_factory import create_connectors_from_config
from notifications.channels import LogNotifier
from services.cache import ResultCache
from services.config import load_config
from services.data_processor import DataProcessingService
from services.logging import setup_logging
from workflows.sync_pipeline import SyncPipeline


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Hashtag Hub sync and report')
    parser.add_argument('--config', default=None,
                        help='Path to config.yml (default: resources/config.yml)')
    parser.add_argument('--query', default='',
                        help='Free-text query applied to synced items')
    parser.add_argument('--source', default=None,
                        help='Restrict stats and results to one source')
    parser.add_argument('--top', type=int, default=10,
                        help='Number of hashtags and items to print (default: 10)')
    return parser.parse_args(argv)


def format_stats(stats: List[HashtagStat], top: int) -> List[str]:
    lines = []
    for stat in stats[:top]:
        lines.append(
            f"{stat.hashtag:<20} {stat.count:>5}  {stat.trend:<9} "
            f"{stat.engagement:>3}%  {', '.join(stat.sources)}"
        )
    return lines


def format_items(items: List[DataItem], top: int) -> List[str]:
    lines = []
    for item in items[:top]:
        lines.append(
            f"[{item.source}] {item.title} | {item.category} | {item.priority} | "
            f"{item.sentiment or '-'} | {' '.join(item.hashtags)}"
        )
    return lines


async def run(args: argparse.Namespace) -> List[DataItem]:
    start_time = time.perf_counter()
    config = load_config(args.config)
    setup_logging(config.LOG_LEVEL)
    logger = logging.getLogger(__name__)

    logger.info("Starting hashtag sync run")

    # ----------------------------
    # Initialize shared services
    # ----------------------------
    processor = DataProcessingService(cache=ResultCache(config.cache.max_entries))
    integration = ServiceIntegration(create_connectors_from_config(config))
    pipeline = SyncPipeline(integration, processor, notifiers=[LogNotifier()])

    # ----------------------------
    # Connect and sync
    # ----------------------------
    await pipeline.connect_all(config.auth_codes)
    items = await pipeline.run([])

    # ----------------------------
    # Report
    # ----------------------------
    stats = processor.calculate_hashtag_stats(items, args.source)
    criteria = FilterCriteria(
        query=args.query,
        sources=[args.source] if args.source else [],
    )
    matches = processor.filter_data(items, criteria)

    print(f"\nTop hashtags ({len(items)} items)")
    for line in format_stats(stats, args.top):
        print(f"  {line}")

    print(f"\nMatching items ({len(matches)})")
    for line in format_items(matches, args.top):
        print(f"  {line}")

    cache_stats = processor.get_cache_stats()
    logger.info(f"Cache entries: {cache_stats['size']}")
    logger.info(f"Total time: {time.perf_counter() - start_time}")
    return matches


def main(argv: Optional[Sequence[str]] = None) -> None:
    asyncio.run(run(parse_args(argv)))


if __name__ == "__main__":
    main()
