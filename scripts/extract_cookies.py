"""Extract site session cookies via patchright for authenticated detail pages.

Usage:
    .venv/bin/python scripts/extract_cookies.py [--config config/settings.yaml]

Opens a Chromium window on the site's login page. Log in manually, then
press Enter in the terminal. Cookies are saved to ``browser.cookies_path``.
"""

import argparse
import json
from pathlib import Path

from patchright.sync_api import sync_playwright

from job_search_widget.core.config import Settings


def main() -> None:
    parser = argparse.ArgumentParser(description="Save site cookies for detail pages")
    parser.add_argument("--config", default="config/settings.yaml")
    args = parser.parse_args()

    settings = Settings.from_yaml(args.config)
    output_path = Path(settings.browser.cookies_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with sync_playwright() as p:
        browser = p.chromium.launch(headless=False)
        context = browser.new_context()
        page = context.new_page()
        page.goto(f"{settings.site.base_url}/login")

        input("\n>>> Log in to the site, then press Enter here to save cookies...")

        cookies = context.cookies()
        output_path.write_text(json.dumps(cookies, indent=2))
        print(f"Saved {len(cookies)} cookies to {output_path}")

        browser.close()


if __name__ == "__main__":
    main()
