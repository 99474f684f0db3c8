"""
cli.py
======
Command line entry point for seopanel.
"""

import argparse
import asyncio
import os
import sys

import logfire
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from seopanel.config import TimingConfig
from seopanel.core.cache.metadata_cache import MetadataCache
from seopanel.core.fallback.generator import FallbackGenerator
from seopanel.core.generation.service import GenerativeService
from seopanel.core.lifecycle.controller import ACTIONS, InjectionController
from seopanel.core.page.static import StaticPage
from seopanel.core.scoring.scorer import SEOScorer
from seopanel.exceptions import GenerationError
from seopanel.models.metadata import ExtractedMetadata, FieldRole
from seopanel.models.payloads import GeneratedTags, GenerationRequest
from seopanel.outputs import FORMATTERS
from seopanel.panel.console import ConsolePanel, make_console
from seopanel.storage.settings import SettingsStorage
from seopanel.utils.logging import setup_local_logging


def load_page(source: str, url: str | None = None) -> StaticPage:
    """Load a page from a local HTML file or an http(s) URL."""
    if source.startswith(('http://', 'https://')):
        return StaticPage.from_url(source)
    return StaticPage.from_file(source, url=url or '')


async def read_metadata(page: StaticPage, timing: TimingConfig) -> ExtractedMetadata:
    """Scan a page once for its metadata."""
    return await MetadataCache(page, ttl=timing.cache_ttl).get()


def cmd_score(args: argparse.Namespace, console: Console, timing: TimingConfig) -> int:
    page = load_page(args.source, args.url)
    metadata = asyncio.run(read_metadata(page, timing))
    result = SEOScorer().score(metadata)

    ConsolePanel(console).render_score(result)
    if args.output:
        FORMATTERS[args.format](args.output, metadata, result)
        console.print(f'[success]✓ Saved report to: {escape(args.output)}[/success]')
    return 0


async def _suggest(
    metadata: ExtractedMetadata,
    role: FieldRole,
    service: GenerativeService | None,
    fallback: FallbackGenerator,
) -> tuple[str, str]:
    if service is not None:
        request = GenerationRequest(role=role, current_title=metadata.title, current_description=metadata.description)
        try:
            payload = await service.generate(request)
        except GenerationError as e:
            logfire.warn('Using heuristic fallback', role=role.field_name, reason=e.reason)
        else:
            if isinstance(payload, GeneratedTags):
                return ', '.join(payload.tags), 'ai'
            return str(getattr(payload, role.field_name)), 'ai'

    if role is FieldRole.KEYWORD_LIST:
        return ', '.join(fallback.tags(metadata.title, metadata.description)), 'fallback'
    if role is FieldRole.PRIMARY_TEXT:
        return fallback.title(metadata.title), 'fallback'
    return fallback.description(metadata.title, metadata.description), 'fallback'


def cmd_suggest(args: argparse.Namespace, console: Console, timing: TimingConfig) -> int:
    page = load_page(args.source, args.url)
    metadata = asyncio.run(read_metadata(page, timing))
    role = FieldRole.from_field_name(args.field)

    service = None
    if not args.no_ai:
        llm_config = SettingsStorage().llm_config()
        if llm_config is None:
            console.print('[info]No API key configured - using smart heuristics[/info]')
        else:
            service = GenerativeService(llm_config, timeout=timing.generation_timeout)

    value, source = asyncio.run(_suggest(metadata, role, service, FallbackGenerator()))
    label = 'AI' if source == 'ai' else 'heuristic'
    console.print(f'[step]Suggested {role.field_name} ({label}):[/step]')
    console.print(escape(value))
    return 0


async def _watch(args: argparse.Namespace, console: Console, timing: TimingConfig) -> None:
    try:
        from seopanel.core.page.playwright import open_page
    except ImportError as err:
        raise ImportError(
            'Playwright not installed. Install with: pip install "seopanel[browser]" && playwright install chromium'
        ) from err

    settings = SettingsStorage()
    panel = ConsolePanel(console, notifications_enabled=settings.load_settings().notifications_enabled)
    async with open_page(args.url, headless=not args.headed) as page:
        controller = InjectionController(page, panel, settings, timing=timing)
        runner = asyncio.create_task(controller.run())
        await controller.wait_started()
        for action in args.action or []:
            await controller.perform(action)
        if args.once:
            controller.stop()
        await runner


def cmd_watch(args: argparse.Namespace, console: Console, timing: TimingConfig) -> int:
    try:
        asyncio.run(_watch(args, console, timing))
    except KeyboardInterrupt:
        console.print('[info]Stopped[/info]')
    return 0


def cmd_config(args: argparse.Namespace, console: Console, timing: TimingConfig) -> int:
    storage = SettingsStorage()
    settings = storage.load_settings()

    updates = {}
    if args.provider:
        updates['provider'] = args.provider
    if args.model:
        updates['model_name'] = args.model
    if args.seo is not None:
        updates['seo_enabled'] = args.seo == 'on'
    if args.notifications is not None:
        updates['notifications_enabled'] = args.notifications == 'on'
    if updates:
        settings = settings.model_copy(update=updates)
        storage.save_settings(settings)
    if args.api_key is not None:
        storage.save_api_key(settings.provider, args.api_key)

    console.print(f'[step]Settings ({escape(str(storage.path))}):[/step]')
    for key, value in settings.model_dump().items():
        console.print(f'  {key}: {escape(str(value))}')
    has_key = 'yes' if storage.has_generation_credentials() else 'no'
    console.print(f'  api key configured: {has_key}')
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='seopanel', description='Score and improve video metadata for search')
    parser.add_argument('--log-level', default='INFO', help='Level for the local log file (default: INFO)')
    sub = parser.add_subparsers(dest='command', required=True)

    score = sub.add_parser('score', help='Score the metadata fields of a saved page or URL')
    score.add_argument('source', help='HTML file or http(s) URL')
    score.add_argument('--url', help='URL to record for a local file')
    score.add_argument('--output', help='Write a report to this path')
    score.add_argument('--format', choices=sorted(FORMATTERS), default='json', help='Report format (default: json)')
    score.set_defaults(handler=cmd_score)

    suggest = sub.add_parser('suggest', help='Suggest a replacement for one field')
    suggest.add_argument('source', help='HTML file or http(s) URL')
    suggest.add_argument('--field', choices=['title', 'description', 'tags'], required=True)
    suggest.add_argument('--url', help='URL to record for a local file')
    suggest.add_argument('--no-ai', action='store_true', help='Skip the generative service')
    suggest.set_defaults(handler=cmd_suggest)

    watch = sub.add_parser('watch', help='Attach the panel to a live page (needs the browser extra)')
    watch.add_argument('url', help='Editing page to open')
    watch.add_argument('--headed', action='store_true', help='Show the browser window')
    watch.add_argument('--action', action='append', choices=ACTIONS, help='Run an action once injected')
    watch.add_argument('--once', action='store_true', help='Exit after the initial injection and actions')
    watch.set_defaults(handler=cmd_watch)

    config = sub.add_parser('config', help='Show or change persisted settings')
    config.add_argument('--provider', choices=['gemini', 'groq', 'openai'])
    config.add_argument('--model', help='Model name for the provider')
    config.add_argument('--api-key', help='API key for the configured provider (empty string removes it)')
    config.add_argument('--seo', choices=['on', 'off'], help='Enable or disable scoring')
    config.add_argument('--notifications', choices=['on', 'off'], help='Enable or disable notifications')
    config.set_defaults(handler=cmd_config)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    load_dotenv()

    logfire_token = os.getenv('LOGFIRE_TOKEN')
    if logfire_token:
        logfire.configure(token=logfire_token, service_name='seopanel')
    else:
        logfire.configure(send_to_logfire=False, console=False)

    parser = build_parser()
    args = parser.parse_args(argv)

    console = make_console()
    setup_local_logging(args.log_level, console=console)

    try:
        timing = TimingConfig.from_env()
        return int(args.handler(args, console, timing))
    except (OSError, ValueError) as e:
        console.print(f'[danger]Error: {escape(str(e))}[/danger]')
        return 1


if __name__ == '__main__':
    sys.exit(main())
