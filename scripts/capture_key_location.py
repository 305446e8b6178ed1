"""Live check - fetch real key locations and save them as fixtures."""

import sys
from pathlib import Path
from datetime import datetime

from qrsign.core.extractor import scrape_key_location
from qrsign.core.fetcher import BrowserPageReader
from qrsign.core.parser import classify_key_location
from qrsign.exceptions import KeyNotFoundError, MalformedMessageError
from qrsign.models.message import Message

FIXTURES_DIR = Path(__file__).parent.parent / "tests" / "fixtures" / "live"


def fixture_name(location: str) -> str:
    safe = "".join(c if c.isalnum() else "_" for c in location)
    return f"{safe.strip('_')[:80]}.html"


def capture(location: str, reader: BrowserPageReader, save_fixture: bool = True) -> dict:
    """Fetch one key location and report what was extracted."""
    print(f"\n{'='*60}")
    print(f"Checking {location}...")
    print(f"{'='*60}")

    try:
        message = Message(
            name=location,
            date=datetime.now().strftime("%Y-%m-%d"),
            key_type=classify_key_location(location),
            key_location=location,
        )
    except MalformedMessageError as e:
        print(f"❌ {e}")
        return {"location": location, "success": False, "error": str(e)}

    start = datetime.now()
    try:
        result = scrape_key_location(message, reader)
    except KeyNotFoundError as e:
        print(f"❌ {e}")
        return {"location": location, "success": False, "error": str(e)}

    duration_ms = (datetime.now() - start).total_seconds() * 1000
    print(f"✓ Fetched in {duration_ms:.0f}ms ({len(result.page_content)} chars)")
    print(f"  Key: {result.key}")
    print(f"  Verified: {result.is_verified.value}")

    if save_fixture:
        FIXTURES_DIR.mkdir(parents=True, exist_ok=True)
        fixture_path = FIXTURES_DIR / fixture_name(location)
        fixture_path.write_text(result.page_content, encoding="utf-8")
        print(f"✓ Saved fixture: {fixture_path}")

    return {
        "location": location,
        "success": True,
        "is_verified": result.is_verified.value,
        "duration_ms": duration_ms,
    }


def main(locations: list[str]) -> int:
    if not locations:
        print("usage: capture_key_location.py LOCATION [LOCATION ...]")
        print("  LOCATION is an http(s) URL or FB:<page id>")
        return 2

    reader = BrowserPageReader(headless=True)
    results = [capture(location, reader) for location in locations]

    print("\n" + "=" * 60)
    print("SUMMARY")
    print("=" * 60)
    success_count = sum(1 for r in results if r["success"])
    print(f"\nKeys found: {success_count}/{len(results)}")
    for r in results:
        mark = "✓" if r["success"] else "❌"
        print(f"  {mark} {r['location']} {r.get('is_verified', r.get('error', ''))}")

    return 0 if success_count == len(results) else 1


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
