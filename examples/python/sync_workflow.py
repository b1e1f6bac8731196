#!/usr/bin/env python3
"""
Backstroke - Sync Workflow Example

This example walks one repository through a sync:
1. Load settings from the environment
2. Check whether a fork has diverged from its upstream
3. Replay a push webhook for the repository
4. Report what happened to each fork

Usage:
    GITHUB_TOKEN=ghp_... python examples/python/sync_workflow.py owner/repo
"""

import asyncio
import logging
import sys

from backstroke import BackstrokeError, SyncSettings, configure_logging, open_dispatcher


async def run(owner: str, name: str) -> int:
    # Step 1: Settings
    print("1. Loading settings...")
    settings = SyncSettings.from_env()
    print(f"   API: {settings.api_url}")
    print(f"   Ephemeral repos: {'enabled' if settings.bot_token else 'disabled'}")

    async with open_dispatcher(settings) as dispatcher:
        try:
            # Step 2: Look at the repository itself
            print(f"\n2. Fetching {owner}/{name}...")
            repo = await dispatcher.client.repos.get(owner, name)
            if repo.fork:
                divergence = await dispatcher.detector.detect("github", owner, name)
                print(f"   Fork of {repo.parent.full_name}")
                print(f"   Fork head:     {divergence.base_sha}")
                print(f"   Upstream head: {divergence.upstream_sha}")
                print(f"   Diverged: {divergence.diverged}")
            else:
                print("   Not a fork; every fork of it will be synced")

            # Step 3: Replay the push
            print("\n3. Handling push webhook...")
            outcome = await dispatcher.handle_webhook(
                {"repository": {"name": repo.name, "owner": {"login": repo.owner}, "fork": repo.fork}}
            )

        except BackstrokeError as e:
            print(f"\nError: [{e.code}] {e.message}")
            if e.request_id:
                print(f"Request ID: {e.request_id}")
            return 1

    # Step 4: Report
    print("\n4. Results:")
    for result in outcome.results:
        detail = result.reason or ""
        if result.pull_request is not None:
            detail = result.pull_request.html_url or f"#{result.pull_request.number}"
        elif result.ephemeral_repo is not None:
            detail = result.ephemeral_repo.full_name
        print(f"   - {result.fork}: {result.status} {detail}".rstrip())

    print(f"\n{outcome.acknowledgment()}")
    return 1 if outcome.errors else 0


def main() -> None:
    if len(sys.argv) != 2 or "/" not in sys.argv[1]:
        print(__doc__)
        sys.exit(2)

    configure_logging(level=logging.WARNING)
    owner, _, name = sys.argv[1].partition("/")
    sys.exit(asyncio.run(run(owner, name)))


if __name__ == "__main__":
    main()
