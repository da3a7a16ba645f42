"""Console host for renaming a local folder of songs with AI-suggested names."""

import argparse
import asyncio
import sys

import structlog
from dotenv import load_dotenv

from .config import Settings, get_settings
from .core.exceptions import SongRenameError
from .core.models import BatchStatus, CandidateFile, FileStatus, ScanStatus
from .core.scanner import DirectoryScanner
from .filesystem.local import LocalDirectoryHandle
from .logging_config import configure_logging
from .notifications.base import Notification
from .notifications.sinks import CallbackNotificationSink
from .orchestrator import BatchRenameOrchestrator
from .suggestions.client import SuggestionClient
from .suggestions.gemini import GeminiSuggestionService

logger = structlog.get_logger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Rename audio files to AI-suggested 'Artist - Title' names")
    parser.add_argument("folder", help="Folder containing the audio files")
    parser.add_argument("--style", default=None, help="Free-text style guidance for the generated names")
    parser.add_argument(
        "--only",
        nargs="+",
        metavar="NAME",
        default=None,
        help="Rename only these files (all supported files are renamed by default)",
    )
    parser.add_argument("--single", metavar="NAME", default=None, help="Rename one file based on its current name")
    return parser.parse_args(argv)


def print_notification(notification: Notification) -> None:
    print(f"[{notification.severity.value}] {notification.title}: {notification.description}")


def print_status(candidate: CandidateFile) -> None:
    if candidate.status is FileStatus.RENAMED:
        print(f"  renamed  {candidate.name}")
    elif candidate.status is FileStatus.ERROR:
        print(f"  failed   {candidate.name}: {candidate.error}")


async def run(args: argparse.Namespace, settings: Settings) -> int:
    service = GeminiSuggestionService(
        api_key=settings.gemini_api_key,
        model=settings.gemini_model,
        base_url=settings.gemini_base_url,
        timeout=settings.request_timeout,
    )
    orchestrator = BatchRenameOrchestrator(
        SuggestionClient(service),
        scanner=DirectoryScanner(settings.supported_extensions),
        notifier=CallbackNotificationSink(print_notification),
    )
    orchestrator.subscribe(print_status)

    try:
        scan = await orchestrator.open_folder(LocalDirectoryHandle(args.folder))
        if scan.status is not ScanStatus.OK:
            return 1

        if args.single:
            outcome = await orchestrator.rename_file(args.single)
        else:
            if args.only:
                wanted = set(args.only)
                orchestrator.selection.set_all(False)
                for candidate in orchestrator.candidates:
                    if candidate.id in wanted:
                        orchestrator.toggle(candidate.id)
            outcome = await orchestrator.run_batch(args.style or settings.default_style_prompt)
    except SongRenameError as e:
        logger.error("Rename aborted", error=str(e))
        print(f"[error] {e}")
        return 1
    finally:
        await service.close()

    return 0 if outcome.status is BatchStatus.COMPLETED and outcome.failure_count == 0 else 1


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    load_dotenv()
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_json)

    args = parse_args(argv)
    if not settings.gemini_api_key:
        print("[error] GEMINI_API_KEY is not set")
        return 1
    return asyncio.run(run(args, settings))


if __name__ == "__main__":
    sys.exit(main())
