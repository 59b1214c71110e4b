"""
Standalone script to fetch both published sheets and report what the app would see.
Run with: python -m directory_app.scripts.check_sheets
"""

import asyncio

from directory_app.services.datasets import DirectorySession, LoadStatus


async def check_sheets() -> int:
    session = DirectorySession()
    await asyncio.gather(session.directory.reload(), session.faq.reload())

    failed = 0
    for slot in (session.directory, session.faq):
        if slot.status == LoadStatus.FAILED:
            failed += 1
            print(f"❌ {slot.name}: {slot.error}")
            continue
        print(f"✅ {slot.name}: {len(slot.records)} rows, fields {list(slot.records[0].keys()) if slot.records else []}")

    floors = [option["value"] for option in session.floor_options()]
    print(f"Floors: {', '.join(floors) or '(none)'}")
    return failed


if __name__ == "__main__":
    raise SystemExit(asyncio.run(check_sheets()))
