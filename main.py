"""
Job Sentinel - CLI Entry Point.

Headless monitor with persistent state. Activity is streamed via logging.

Usage:
    python main.py [resume.pdf|resume.txt] [--once]
"""

import asyncio
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

from sentinel.agents.pipeline import ClassificationPipeline, create_pipeline
from sentinel.config import settings
from sentinel.core.context import SentinelContext
from sentinel.core.models import Partition
from sentinel.core.monitor import MonitorLoop
from sentinel.db import SnapshotStore, init_db
from sentinel.errors import ExternalServiceError, ValidationError
from sentinel.tools.resume_import import read_resume_file


async def run(context: SentinelContext, pipeline: ClassificationPipeline, once: bool) -> None:
    """Lock a profile if needed, then run one cycle or monitor until stopped."""
    if context.profile is None:
        if not context.source_text.strip():
            print("No resume loaded. Pass a .pdf or .txt resume path.")
            return
        try:
            profile = await context.lock_profile(pipeline)
        except (ExternalServiceError, ValidationError) as e:
            print(f"Error: could not lock profile: {e}")
            return
        print(f"Profile locked: {profile.primary_role} ({', '.join(profile.skills[:5])})")

    monitor = MonitorLoop(context, pipeline)
    if once:
        report = await monitor.run_cycle()
        print(
            f"\nCycle done: {report.scanned} scanned, "
            f"{report.new_alerts} new alerts, {report.failures} failures"
        )
        return

    monitor.start()
    try:
        await monitor.wait_stopped()
    finally:
        await monitor.cancel()


def main():
    """Run the job sentinel CLI."""
    print("Job Sentinel")
    print("=" * 40)

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    args = [a for a in sys.argv[1:] if a != "--once"]
    once = "--once" in sys.argv[1:]

    # Initialize storage
    store = None
    try:
        init_db()
        store = SnapshotStore()
    except ValueError:
        print("Warning: DATABASE_URL not set, using in-memory state (no persistence)")

    context = SentinelContext(store=store)
    if context.hydrate():
        print(f"Restored {len(context.ledger)} alerts, {len(context.watchlist)} companies")

    # Resume argument (handle filenames with spaces)
    if args:
        resume_path = Path(" ".join(args))
        if not resume_path.exists():
            print(f"Error: {resume_path} not found")
            return
        try:
            context.replace_source_text(read_resume_file(str(resume_path)), origin=resume_path.name)
        except ValidationError as e:
            print(f"Error: {e}")
            return

    try:
        pipeline = create_pipeline()
    except ValueError as e:
        print(f"Error: {e}")
        return

    print("Monitoring... (Ctrl+C to stop)")
    print("-" * 40)
    try:
        asyncio.run(run(context, pipeline, once))
    except KeyboardInterrupt:
        pass

    alerts = context.ledger.view(Partition.ACTIVE)
    print(f"\n{len(alerts)} active alerts, {context.counters.total_scans} total scans")
    for alert in alerts[:10]:
        print(f"- [{alert.company_name}] {alert.title}: {alert.link}")
    print("Goodbye!")


if __name__ == "__main__":
    main()
