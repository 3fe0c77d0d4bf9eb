"""Insert internal links between blog articles.

Usage::

    python manage.py add_internal_links                 # process all
    python manage.py add_internal_links --dry-run       # preview only
    python manage.py add_internal_links --slug restaurant-seo-google-gefunden-werden
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError, CommandParser

from autolinker.engine.config import load_config
from autolinker.services import process_all_articles
from autolinker.storage import ArticleStoreError, MarkdownArticleStore


class Command(BaseCommand):
    help = "Link phrases matching other articles' titles to those articles."

    def add_arguments(self, parser: CommandParser) -> None:
        parser.add_argument('--dry-run', action='store_true', help='Report links without writing files.')
        parser.add_argument('--slug', help='Only rewrite the article with this slug.')
        parser.add_argument('--content-dir', help='Directory holding the article files.')
        parser.add_argument('--config', help='Path to the linking YAML configuration.')
        parser.add_argument('--locale', help='Only link articles in this locale.')
        parser.add_argument('--link-prefix', help='Path prefix of article URLs, e.g. /de/blog.')

    def handle(self, *args: Any, **options: Any) -> None:
        content_dir = Path(options['content_dir'] or settings.AUTOLINKER_CONTENT_DIR)
        extension = getattr(settings, 'AUTOLINKER_FILE_EXTENSION', '.mdx')
        dry_run: bool = options['dry_run']

        try:
            config = load_config(options['config'] or settings.AUTOLINKER_CONFIG)
        except (OSError, ValueError) as exc:
            raise CommandError(f'Invalid linking configuration: {exc}') from exc
        config = config.with_overrides(locale=options['locale'], link_prefix=options['link_prefix'])

        store = MarkdownArticleStore(content_dir, extension=extension)
        try:
            summary = process_all_articles(store, config, slug=options['slug'], dry_run=dry_run)
        except ArticleStoreError as exc:
            raise CommandError(str(exc)) from exc

        self.stdout.write(f'Loaded {summary.index_size} articles into link index\n')

        for item in summary.results:
            filename = f'{item.article_id}{extension}'
            if not item.result.changed:
                self.stdout.write(f'  ✓ {filename}')
                continue
            self.stdout.write(f'  → {filename} (+{item.links_added} links)')
            for link in item.result.links:
                self.stdout.write(f'      "{link.phrase}" → {link.url}')

        if not summary.changed:
            self.stdout.write('No new links to add.')
        prefix = '[dry-run] ' if dry_run else ''
        self.stdout.write(
            self.style.SUCCESS(f'\n{prefix}Done! {summary.updated}/{summary.files} files updated.')
        )
