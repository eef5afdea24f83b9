"""
CLI Module

Architectural Intent:
- Command-line interface for hostsync
- Entry point for all user interactions
- Delegates to application use cases via composition root
- Supports --verbose/--debug flags for log level control
"""

import argparse
import asyncio
import dataclasses
import logging
import sys
import traceback
from hostsync import composition_root
from hostsync.application.dtos.run_dtos import RunReport, SyncRequest
from hostsync.domain.exceptions import DesiredStateError
from hostsync.domain.value_objects.key_value_record import KeyValueRecord
from hostsync.domain.value_objects.outcomes import RunMode, RunOutcome
from hostsync.infrastructure.config import load_config
from hostsync.infrastructure.logging import configure_logging
from hostsync.infrastructure.telemetry.otel_exporter import create_telemetry


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="hostsync: pin, deploy and roll back a host's component fleet"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose output"
    )
    parser.add_argument(
        "--debug", action="store_true", help="Enable debug output with tracebacks"
    )
    parser.add_argument(
        "--config", "-c", default=None, help="Path to hostsync.json settings"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    sync_parser = subparsers.add_parser(
        "sync", help="Bring the host to its desired state, rolling back on failure"
    )
    sync_parser.add_argument(
        "--state", "-s", default=None, help="Path to the desired-state file"
    )
    sync_parser.add_argument(
        "--check-only",
        action="store_true",
        default=None,
        help="Report what would change without changing anything",
    )
    sync_parser.add_argument(
        "--system-upgrade",
        action="store_true",
        default=None,
        help="Also upgrade system packages (never rolled back)",
    )

    resync_parser = subparsers.add_parser(
        "resync", help="Restart dependent services and push branding records"
    )
    resync_parser.add_argument(
        "--state", "-s", default=None, help="Desired-state file to take branding from"
    )
    return parser


def _print_summary(report: RunReport) -> None:
    if report.outcome is RunOutcome.COMPLETED:
        if report.changed:
            verb = "would change" if report.mode is RunMode.DRY_RUN else "changed"
            print(f"[+] Sync completed: host {verb}.")
        else:
            print("[+] Sync completed: no changes.")
        return

    if report.outcome is RunOutcome.ROLLED_BACK:
        print(f"[-] Sync failed: {report.error}")
        print("[-] Rollback attempted.")
        for item in report.restored:
            print(f"    restored: {item}")
        for item in report.not_restored:
            print(f"    not restored: {item}")
        if not report.restored and not report.not_restored:
            print("    nothing in the ledger to restore")
        return

    print(f"[-] Sync aborted: {report.error}")


async def async_main():
    parser = build_parser()
    args = parser.parse_args()

    config = load_config(args.config)

    # Configure logging based on flags
    if args.debug:
        level = logging.DEBUG
    elif args.verbose:
        level = logging.INFO
    else:
        level = logging.getLevelName(config.logging.level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    verbose = args.verbose or args.debug
    # Progress lines are already printed to stdout
    log_file = configure_logging(
        level=level,
        json_format=config.logging.json_format,
        log_file=config.logging.file or None,
        console_level=level if verbose else max(level, logging.WARNING),
    )

    if args.command == "sync":
        run = config.run
        overrides = {}
        if args.state:
            overrides["desired_state"] = args.state
        if args.check_only is not None:
            overrides["check_only"] = args.check_only
        if args.system_upgrade is not None:
            overrides["system_upgrade"] = args.system_upgrade
        if overrides:
            config = dataclasses.replace(
                config, run=dataclasses.replace(run, **overrides)
            )

        container = composition_root.create_container(config)
        telemetry = create_telemetry(
            config.telemetry.endpoint, insecure=config.telemetry.insecure
        )

        request = SyncRequest(
            desired_state_path=config.run.desired_state,
            check_only=config.run.check_only,
            system_upgrade=config.run.system_upgrade,
        )
        print("[*] hostsync update")
        if log_file:
            print(f"[*] Log: {log_file}")
        print(f"[*] Desired state: {request.desired_state_path}")
        print(f"[*] Check only: {request.check_only}")
        print(f"[*] System upgrade: {request.system_upgrade}")

        span = telemetry.start_span("hostsync.sync", {"mode": request.mode.value})
        try:
            report = await container.sync_host.execute(
                request, on_report=lambda line: print(f"    {line}")
            )
        except Exception as e:
            print(f"[-] Sync crashed: {e}")
            if verbose:
                traceback.print_exc()
            sys.exit(1)
        finally:
            telemetry.end_span(span)

        telemetry.record_run(report)
        telemetry.shutdown()
        _print_summary(report)
        if report.exit_code:
            sys.exit(report.exit_code)
        return

    if args.command == "resync":
        from hostsync.infrastructure.desired_state import (
            DEFAULT_BRANDING,
            load_desired_state,
        )

        if args.state:
            try:
                records = list(load_desired_state(args.state).branding)
            except DesiredStateError as e:
                print(f"[-] {e}")
                sys.exit(2)
        else:
            records = [KeyValueRecord(**item) for item in DEFAULT_BRANDING]

        container = composition_root.create_container(config)
        print("[*] Restarting dependent services...")
        result = await container.resync.execute(records)
        for service in result.restarted:
            print(f"[+] Restarted {service}")
        for service in result.failed:
            print(f"[-] Could not restart {service}")
        if not records:
            print("[*] No records to push.")
        elif result.service_ready:
            print(f"[+] Pushed {result.records_pushed}/{len(records)} records.")
        else:
            print("[-] Key-value service not reachable, records skipped.")
        return

    parser.print_help()


def main():
    asyncio.run(async_main())


if __name__ == "__main__":
    main()
