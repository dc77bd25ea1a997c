#!/usr/bin/env python3
"""
Live smoke check for the Granny.AI speech-synthesis relay
Exercises a running deployment: pre-flight, validation errors, and (when the
provider key is configured) a real synthesis round trip.

Usage: python relay_smoke_check.py [BASE_URL]
"""

import sys
from typing import Any, Dict, Optional

import requests


class RelaySmokeChecker:
    def __init__(self, base_url: str = "http://localhost:8001"):
        self.base_url = base_url.rstrip("/")
        self.tests_run = 0
        self.tests_passed = 0
        self.test_results = []

    def log_test(self, name: str, success: bool, details: str = ""):
        """Log test result"""
        self.tests_run += 1
        if success:
            self.tests_passed += 1
            print(f"PASS {name}")
        else:
            print(f"FAIL {name} - {details}")

        if details and success:
            print(f"   Details: {details}")

        self.test_results.append({"name": name, "success": success, "details": details})

    def make_request(self, method: str, endpoint: str, data: Any = None,
                     headers: Optional[Dict] = None, timeout: int = 60) -> tuple:
        """Make HTTP request and return (success, response, status_code)"""
        url = f"{self.base_url}{endpoint}"
        try:
            if method == 'GET':
                response = requests.get(url, headers=headers, timeout=timeout)
            elif method == 'OPTIONS':
                response = requests.options(url, headers=headers, timeout=timeout)
            elif method == 'POST':
                if isinstance(data, (dict, list)):
                    response = requests.post(url, json=data, headers=headers, timeout=timeout)
                else:
                    response = requests.post(url, data=data, headers=headers, timeout=timeout)
            else:
                return False, None, 0
            return True, response, response.status_code
        except requests.RequestException as e:
            print(f"   Request error: {e}")
            return False, None, 0

    def test_health_endpoint(self) -> Optional[bool]:
        """Returns whether the provider key is configured, None on failure."""
        print("\nChecking health endpoint...")
        success, response, status_code = self.make_request('GET', '/api/health')
        if not success or status_code != 200:
            self.log_test("Health Check", False, f"Status code: {status_code}")
            return None
        data = response.json()
        configured = bool(data.get("tts_configured"))
        self.log_test("Health Check", data.get("status") == "healthy", f"tts_configured={configured}")
        return configured

    def test_preflight(self):
        print("\nChecking CORS pre-flight...")
        success, response, status_code = self.make_request(
            'OPTIONS', '/api/text-to-speech',
            headers={"Origin": "http://example.com", "Access-Control-Request-Method": "POST"},
        )
        if not success:
            self.log_test("Pre-flight", False, "Request failed")
            return
        ok = (
            status_code == 200
            and response.content == b""
            and response.headers.get("Access-Control-Allow-Origin") == "*"
        )
        self.log_test("Pre-flight", ok, f"Status code: {status_code}")

    def test_missing_text(self):
        print("\nChecking missing text handling...")
        success, response, status_code = self.make_request('POST', '/api/text-to-speech', data={})
        if not success:
            self.log_test("Missing Text", False, "Request failed")
            return
        ok = status_code == 400 and response.json() == {"error": "Missing text parameter"}
        self.log_test("Missing Text", ok, f"Status code: {status_code}")

    def test_malformed_body(self):
        print("\nChecking malformed body handling...")
        success, response, status_code = self.make_request(
            'POST', '/api/text-to-speech', data="{not json",
            headers={"Content-Type": "application/json"},
        )
        if not success:
            self.log_test("Malformed Body", False, "Request failed")
            return
        ok = status_code == 500 and response.json().get("error") == "Server error"
        self.log_test("Malformed Body", ok, f"Status code: {status_code}")

    def test_synthesis(self, configured: bool):
        print("\nChecking synthesis round trip...")
        success, response, status_code = self.make_request(
            'POST', '/api/text-to-speech', data={"text": "Hello dear, did you sleep well?"},
        )
        if not success:
            self.log_test("Synthesis", False, "Request failed")
            return
        if not configured:
            ok = status_code == 500 and response.json() == {"error": "TTS service not configured"}
            self.log_test("Synthesis (not configured)", ok, f"Status code: {status_code}")
            return
        if status_code != 200:
            self.log_test("Synthesis", False, f"Status code: {status_code}, body: {response.text[:200]}")
            return
        length = int(response.headers.get("Content-Length", -1))
        ok = (
            response.headers.get("Content-Type") == "audio/mpeg"
            and length == len(response.content)
            and response.headers.get("Cache-Control") == "no-store"
        )
        self.log_test("Synthesis", ok, f"Received {len(response.content)} bytes of audio")

    def run_all_tests(self) -> int:
        print("Starting relay smoke check...")
        print(f"Testing against: {self.base_url}")
        print("=" * 60)

        configured = self.test_health_endpoint()
        self.test_preflight()
        self.test_missing_text()
        self.test_malformed_body()
        if configured is not None:
            self.test_synthesis(configured)

        print("\n" + "=" * 60)
        print(f"Total Tests: {self.tests_run}")
        print(f"Passed: {self.tests_passed}")
        print(f"Failed: {self.tests_run - self.tests_passed}")
        return 0 if self.tests_passed == self.tests_run else 1


def main():
    base_url = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:8001"
    checker = RelaySmokeChecker(base_url)
    return checker.run_all_tests()


if __name__ == "__main__":
    sys.exit(main())
