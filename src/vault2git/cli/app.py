"""
CLI Application - Command line entry point for vault2git.

Usage:
    # Sync the vault once
    vault2git --vault ~/Notes --repo notes --branch main

    # Keep syncing every --interval minutes
    vault2git --vault ~/Notes --repo notes --branch main --watch

    # Check the token, list repositories or branches
    vault2git --auth
    vault2git --list-repos
    vault2git --repo notes --list-branches

Environment Variables:
    VAULT2GIT_TOKEN: Personal access token (required)
    VAULT2GIT_PROVIDER: github (default) or gitlab
    VAULT2GIT_USERNAME: Repository owner (defaults to the token's user)
    VAULT2GIT_REPO, VAULT2GIT_BRANCH, VAULT2GIT_VAULT
    VAULT2GIT_DEVICE_NAME: Label used in commit messages
    VAULT2GIT_SYNC_INTERVAL: Minutes between passes (default 5)
    VAULT2GIT_AUTO_SYNC: Start watching without --watch
"""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Optional

from ..adapters.config import EnvironmentConfigProvider
from ..adapters.factory import create_remote
from ..adapters.vault import FileSystemVaultStore
from ..application.sync import Scheduler, SyncEngine, SyncSession
from ..core.domain.events import EventBus, PassAborted, TickSkipped
from ..core.exceptions import ConfigurationError, SyncBusyError
from ..core.ports.config_provider import AppConfig
from ..core.ports.local_store import LocalStoreError
from ..core.ports.remote_repository import (
    AuthenticationError,
    RemoteRepositoryError,
    RemoteRepositoryPort,
)
from .exit_codes import ExitCode
from .output import Console


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    # urllib3 is noisy at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vault2git",
        description="Sync a local vault to a GitHub or GitLab repository",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    parser.add_argument("--vault", type=str, help="Path to the vault directory")
    parser.add_argument(
        "--provider",
        choices=["github", "gitlab"],
        help="Git provider (or set VAULT2GIT_PROVIDER)",
    )
    parser.add_argument("--repo", type=str, help="Repository name or owner/name")
    parser.add_argument("--owner", type=str, help="Repository owner (defaults to the authenticated user)")
    parser.add_argument("--branch", "-b", type=str, help="Branch to commit to")
    parser.add_argument("--device", type=str, help="Device label used in commit messages")
    parser.add_argument("--interval", type=float, help="Minutes between passes in --watch mode")
    parser.add_argument("--workers", type=int, help="Files handled in parallel (default 4)")
    parser.add_argument("--api-url", type=str, help="API root for self-hosted instances")
    parser.add_argument("--env-file", type=Path, help="Path to a .env file")

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--watch", action="store_true", help="Keep syncing on the interval until interrupted")
    mode.add_argument("--auth", action="store_true", help="Check the access token and exit")
    mode.add_argument("--list-repos", action="store_true", help="List accessible repositories")
    mode.add_argument("--list-branches", action="store_true", help="List branches of --repo")

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        default=None,
        help="Enable verbose logging",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")

    return parser


# -----------------------------------------------------------------------------
# Modes
# -----------------------------------------------------------------------------

def run_once(engine: SyncEngine, config: AppConfig, console: Console) -> ExitCode:
    """Run one pass and print its summary."""
    result = engine.run_pass(config.sync)
    console.pass_result(result)
    return ExitCode.SUCCESS if result.success else ExitCode.PARTIAL_FAILURE


def run_watch(
    engine: SyncEngine,
    scheduler: Scheduler,
    config: AppConfig,
    console: Console,
) -> ExitCode:
    """Run a pass now, then on every scheduler tick until interrupted."""

    def on_tick() -> None:
        console.pass_result(engine.run_pass(config.sync))

    run_once(engine, config, console)
    scheduler.start(config.sync, on_tick)
    console.info(f"Watching {config.vault_path} every {config.sync.sync_interval:g} minute(s). Ctrl-C to stop.")

    try:
        while scheduler.is_running:
            time.sleep(1.0)
    except KeyboardInterrupt:
        console.print()
        console.info("Stopping...")
    finally:
        scheduler.stop()
        # Let an in-flight pass finish
        scheduler.join()

    return ExitCode.SUCCESS


def show_branches(remote: RemoteRepositoryPort, config: AppConfig, console: Console) -> ExitCode:
    principal = remote.authenticate()
    repository = config.sync.repository_slug(principal.login)
    console.branches(repository, remote.list_branches(repository))
    return ExitCode.SUCCESS


# -----------------------------------------------------------------------------
# Entry Point
# -----------------------------------------------------------------------------

def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    provider = EnvironmentConfigProvider(env_file=args.env_file, cli_overrides=vars(args))
    config = provider.load()

    setup_logging(config.verbose)
    logger = logging.getLogger("main")
    console = Console(color=not args.no_color, verbose=config.verbose)

    listing = args.auth or args.list_repos
    errors = provider.validate(
        require_repository=not listing,
        require_branch=not (listing or args.list_branches),
    )
    if errors:
        for error in errors:
            console.error(error)
        return ExitCode.CONFIG_ERROR

    try:
        remote = create_remote(config.remote)

        if args.auth:
            console.principal(remote.authenticate(), remote.name)
            return ExitCode.SUCCESS

        if args.list_repos:
            console.repositories(remote.list_repositories())
            return ExitCode.SUCCESS

        if args.list_branches:
            return show_branches(remote, config, console)

        if config.vault_path is None:
            console.error("Vault directory is required. Use --vault or set VAULT2GIT_VAULT.")
            return ExitCode.CONFIG_ERROR

        event_bus = EventBus()
        event_bus.subscribe(TickSkipped, lambda e: console.warning("Sync skipped: a pass is already running"))
        event_bus.subscribe(PassAborted, lambda e: console.error(f"Sync aborted: {e.reason}"))

        session = SyncSession()
        engine = SyncEngine(
            remote=remote,
            store=FileSystemVaultStore(config.vault_path),
            session=session,
            event_bus=event_bus,
        )

        console.header(f"vault2git {Path(config.vault_path).name} -> {remote.name}")

        if args.watch or config.sync.auto_sync:
            return run_watch(engine, Scheduler(session, event_bus), config, console)
        return run_once(engine, config, console)

    except ConfigurationError as e:
        console.error(str(e))
        return ExitCode.CONFIG_ERROR
    except AuthenticationError as e:
        console.error(str(e))
        return ExitCode.AUTH_ERROR
    except SyncBusyError as e:
        console.warning(str(e))
        return ExitCode.BUSY
    except (RemoteRepositoryError, LocalStoreError) as e:
        logger.debug("Sync failed", exc_info=True)
        console.error(str(e))
        return ExitCode.ERROR
    except KeyboardInterrupt:
        console.print()
        return ExitCode.INTERRUPTED


def run() -> None:
    """Console script entry point."""
    sys.exit(main())
