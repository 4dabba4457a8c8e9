# ampd/cli.py
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from ampd.config import API_HOST, API_PORT, CACHE_MAX_AGE_S, DEFAULT_CACHE_FILE, REGION_TO_STORE_CODES
from ampd.scrape.orchestrator import resolve_all
from ampd.storage.csv_cache import load_previous, write_cache
from ampd.utils import normalize_url, safe_read_text_path


def read_urls(urls_file: Path) -> list[str]:
    """
    Supports:
      - url
      - label|url
    Returns:
      de-duplicated urls in file order
    """
    if not urls_file.exists():
        raise FileNotFoundError(f"URLs file not found: {urls_file}")

    out: list[str] = []
    seen: set[str] = set()
    for line in safe_read_text_path(urls_file).splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        url = line.split("|", 1)[1] if "|" in line else line
        url = normalize_url(url)
        if not url or url in seen:
            continue
        seen.add(url)
        out.append(url)

    return out


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Resolve App Store / Google Play listings, or serve the game info API.")
    p.add_argument("urls", nargs="*", help="Storefront listing URLs")
    p.add_argument("--urls-file", dest="urls_file", default="", help="File with one URL (or label|url) per line")
    p.add_argument("--region", choices=sorted(REGION_TO_STORE_CODES), help="Resolve against a regional storefront")
    p.add_argument("--cache", default="", help=f"CSV cache to reuse and update (e.g. {DEFAULT_CACHE_FILE})")
    p.add_argument("--max-age", type=int, default=CACHE_MAX_AGE_S, help="Seconds a cached row stays fresh")
    p.add_argument("--json", action="store_true", help="Print results as JSON lines")
    p.add_argument("--serve", action="store_true", help="Run the HTTP API")
    p.add_argument("--host", default=API_HOST)
    p.add_argument("--port", type=int, default=API_PORT)
    return p.parse_args(argv)


def _print_progress(idx: int, total: int, message: str) -> None:
    print(message.replace("\n", " "), file=sys.stderr)


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)

    if args.serve:
        import uvicorn

        uvicorn.run("ampd.web.app:app", host=args.host, port=args.port)
        return 0

    urls = [normalize_url(u) for u in args.urls if normalize_url(u)]
    if args.urls_file:
        urls.extend(read_urls(Path(args.urls_file).expanduser().resolve()))
    if not urls:
        print("No URLs given.", file=sys.stderr)
        return 2

    cache_file = Path(args.cache).expanduser().resolve() if args.cache else None
    previous = load_previous(cache_file) if cache_file else {}

    results = resolve_all(
        urls=urls,
        region=args.region,
        previous=previous,
        max_age_s=args.max_age,
        progress_cb=None if args.json else _print_progress,
    )

    if cache_file:
        write_cache(cache_file, results)

    for item in results:
        if args.json:
            print(json.dumps({"url": item.url, "data": item.result.to_dict(), "error": item.error or None}))
        else:
            r = item.result
            print(f"{item.url}\n  name: {r.game_name or '-'}\n  package: {r.package_identifier or '-'}\n  logo: {r.logo_url or '-'}")
            if item.error:
                print(f"  error: {item.error}")

    return 1 if any(item.error for item in results) else 0


if __name__ == "__main__":
    sys.exit(main())
