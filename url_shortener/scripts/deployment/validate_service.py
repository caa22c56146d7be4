#!/usr/bin/env python3
"""
Validation script for URL Shortener service.
Exercises a live running service to ensure all endpoints behave correctly.

Creates a few short links as a side effect; they stay in the data file.
"""

import sys
import time
import argparse
import requests
from typing import Callable, List, Optional, Tuple
from datetime import datetime


class ServiceValidator:
    """Validates URL shortener service functionality."""

    def __init__(self, base_url: str = "http://localhost:5000", timeout: float = 5):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()
        self.results: List[Tuple[str, bool]] = []

    def print_header(self, text: str):
        """Print a formatted header."""
        print(f"\n{'='*60}")
        print(f"  {text}")
        print(f"{'='*60}\n")

    def record(self, name: str, passed: bool, details: str = "") -> bool:
        """Record and print a check result."""
        status = "PASS" if passed else "FAIL"
        self.results.append((name, passed))
        print(f"[{status}] {name}")
        if details:
            print(f"       {details}")
        return passed

    def run_check(self, name: str, check: Callable[[], Tuple[bool, str]]) -> bool:
        try:
            passed, details = check()
        except requests.RequestException as e:
            passed, details = False, f"Error: {e}"
        return self.record(name, passed, details)

    def _post_shorten(self, payload: dict) -> requests.Response:
        return self.session.post(f"{self.base_url}/shorten", json=payload, timeout=self.timeout)

    def check_health(self) -> bool:
        def check():
            response = self.session.get(f"{self.base_url}/health", timeout=self.timeout)
            data = response.json() if response.ok else {}
            return (
                response.status_code == 200 and data.get("status") == "healthy",
                f"Status: {response.status_code}, links: {data.get('total', 'N/A')}",
            )

        return self.run_check("Health Check", check)

    def check_create(self) -> Optional[str]:
        created = {}

        def check():
            response = self._post_shorten({"url": f"https://example.com/validate/{int(time.time())}"})
            data = response.json()
            created["code"] = data.get("shortCode")
            ok = response.status_code == 200 and bool(created["code"]) and "validUntil" in data
            return ok, f"Code: {created['code']}, LogId: {data.get('LogId')}"

        self.run_check("Create Short URL", check)
        return created.get("code")

    def check_resolve(self, short_code: str) -> bool:
        def check():
            response = self.session.get(f"{self.base_url}/url/{short_code}", timeout=self.timeout)
            data = response.json()
            return response.status_code == 200 and "originalLink" in data, f"Status: {response.status_code}"

        return self.run_check("Resolve Short URL", check)

    def check_redirect(self, short_code: str) -> bool:
        def check():
            response = self.session.get(
                f"{self.base_url}/s/{short_code}",
                allow_redirects=False,
                timeout=self.timeout,
            )
            location = response.headers.get("Location", "")
            return response.status_code == 302 and bool(location), f"Redirects to: {location[:50]}"

        return self.run_check("URL Redirect", check)

    def check_duplicate_custom_code(self) -> bool:
        custom_code = f"validate{int(time.time())}"

        def check():
            first = self._post_shorten({"url": "https://example.com/custom", "customCode": custom_code})
            second = self._post_shorten({"url": "https://example.com/other", "customCode": custom_code})
            return (
                first.status_code == 200 and second.status_code == 409,
                f"Statuses: {first.status_code}, {second.status_code} (expected 200, 409)",
            )

        return self.run_check("Duplicate Code Rejection", check)

    def check_invalid_url(self) -> bool:
        def check():
            response = self._post_shorten({"url": "not-a-valid-url"})
            return response.status_code == 400, f"Status: {response.status_code} (expected 400)"

        return self.run_check("Invalid URL Rejection", check)

    def check_nonexistent_code(self) -> bool:
        def check():
            response = self.session.get(
                f"{self.base_url}/s/nonexistent-{int(time.time())}",
                allow_redirects=False,
                timeout=self.timeout,
            )
            return response.status_code == 404, f"Status: {response.status_code} (expected 404)"

        return self.run_check("Non-existent Code", check)

    def check_listing(self) -> bool:
        def check():
            response = self.session.get(f"{self.base_url}/urls", timeout=self.timeout)
            data = response.json()
            return response.status_code == 200 and isinstance(data.get("urls"), list), \
                f"Listed: {len(data.get('urls') or [])}"

        return self.run_check("List Short URLs", check)

    def run_all_checks(self) -> bool:
        """Run all validation checks."""
        self.print_header("URL Shortener Service Validation")
        print(f"Checking service at: {self.base_url}")
        print(f"Timestamp: {datetime.now().isoformat()}\n")

        # Basic connectivity
        if not self.check_health():
            print(f"\nHealth check failed. Make sure the service is accessible at {self.base_url}")
            return False

        short_code = self.check_create()
        if short_code:
            self.check_resolve(short_code)
            self.check_redirect(short_code)

        self.check_duplicate_custom_code()
        self.check_invalid_url()
        self.check_nonexistent_code()
        self.check_listing()

        self.print_summary()
        return all(passed for _, passed in self.results)

    def print_summary(self):
        """Print check summary."""
        total = len(self.results)
        passed = sum(1 for _, p in self.results if p)

        self.print_header("Summary")
        print(f"Total checks: {total}")
        print(f"Passed:       {passed}")
        print(f"Failed:       {total - passed}")

        for name, ok in self.results:
            if not ok:
                print(f"   - {name}")


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Validate URL Shortener service functionality"
    )
    parser.add_argument(
        "--url",
        default="http://localhost:5000",
        help="Base URL of the service (default: http://localhost:5000)"
    )

    args = parser.parse_args()

    validator = ServiceValidator(args.url)

    try:
        success = validator.run_all_checks()
    except KeyboardInterrupt:
        print("\nValidation interrupted by user")
        sys.exit(2)

    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
