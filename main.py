#!/usr/bin/env python3
"""
Wine Auto-Tagger
================
Generates flavour tags for winery inventory and reconciles them with the store.
"""

import argparse
import json
import sys

from wine_tagger import (
    BatchAutoTagger,
    Config,
    ConfigError,
    CsvInventory,
    InventoryClient,
    WineTextInput,
    auto_tag_wine,
    format_tags_for_display,
    get_suggested_tags,
    sanitize_tags,
    setup_logger,
)
from wine_tagger.csv_inventory import export_preview_to_csv


def parse_arguments(argv=None):
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        description='Wine Auto-Tagger - flavour tagging for winery inventory',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Tag a single wine
  python main.py tag --type "Red Wine" --flavor-notes "dark cherry and cedar"

  # Preview changes against the inventory API and export a report
  python main.py preview --export

  # Apply auto-tags to an exported inventory sheet
  python main.py apply --csv inventory.csv
        """
    )

    parser.add_argument('--config', '-c', type=str, help='Path to configuration file (config.env)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable verbose logging')
    parser.add_argument('--workers', '-w', type=int, help='Worker threads for batch updates')
    parser.add_argument('--no-parallel', action='store_true', help='Process wines one at a time')

    subparsers = parser.add_subparsers(dest='command', required=True)

    tag_parser = subparsers.add_parser('tag', help='Generate tags for one wine')
    tag_parser.add_argument('--name', default='', help='Wine name')
    tag_parser.add_argument('--type', '-t', default='', help='Wine type (e.g. "Red Wine")')
    tag_parser.add_argument('--flavor-notes', '-f', default='', help='Tasting notes')
    tag_parser.add_argument('--description', '-d', default='', help='Description')
    tag_parser.add_argument('--display', action='store_true', help='Capitalize tags for display')

    subparsers.add_parser('suggested', help='List the primary flavour vocabulary')

    for command, help_text in (('preview', 'Preview tag changes without writing'),
                               ('apply', 'Write auto-generated tags to the inventory')):
        sub = subparsers.add_parser(command, help=help_text)
        sub.add_argument('--csv', type=str, help='Use an inventory CSV instead of the API')
        if command == 'preview':
            sub.add_argument('--export', nargs='?', const='', default=None,
                             help='Write the preview to a CSV report (optional path)')
        else:
            sub.add_argument('--output', '-o', type=str,
                             help='Write the updated CSV here instead of overwriting --csv')

    return parser.parse_args(argv)


def build_store(args, config, logger):
    """Inventory store for the batch commands"""
    if args.csv:
        return CsvInventory(args.csv, logger)
    return InventoryClient(config, logger)


def main(argv=None):
    args = parse_arguments(argv)

    config = Config(args.config)
    if args.workers:
        config.max_workers = args.workers
        config.parallel_processing = True
    if args.no_parallel:
        config.parallel_processing = False

    logger = setup_logger(
        'wine-tagger',
        log_dir=config.logs_dir,
        level=config.log_level,
        verbose=args.verbose or config.verbose_logging
    )

    if args.command == 'tag':
        wine = WineTextInput(
            flavor_notes=args.flavor_notes,
            description=args.description,
            name=args.name,
            type=args.type,
        )
        tags = sanitize_tags(auto_tag_wine(wine))
        print(', '.join(format_tags_for_display(tags) if args.display else tags))
        return 0

    if args.command == 'suggested':
        print('\n'.join(get_suggested_tags()))
        return 0

    try:
        config.ensure_valid()
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        return 2

    store = build_store(args, config, logger)
    tagger = BatchAutoTagger(store, logger, config)

    if args.command == 'preview':
        preview = tagger.preview_auto_tags()
        if preview.error:
            logger.warning(preview.error)
        for item in preview.previews:
            marker = '*' if item.changed else ' '
            print(f"{marker} {item.name}: {', '.join(item.current_tags) or '-'} -> {', '.join(item.suggested_tags) or '-'}")
        logger.info(f"{preview.changed_count} of {len(preview.previews)} wines would change")
        if args.export is not None and preview.success:
            export_preview_to_csv(preview, config.output_dir, logger, output_path=args.export or None)
        return 0 if preview.success else 1

    result = tagger.batch_auto_tag_inventory()
    if isinstance(store, CsvInventory) and store.has_changes:
        store.save(args.output)
    print(json.dumps(result.to_dict(), indent=2))
    return 0 if result.success else 1


if __name__ == '__main__':
    sys.exit(main())
