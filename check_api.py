#!/usr/bin/env python3
"""
Smoke check for the dashboard API endpoints
Run this against a running server (python main.py) after seeding
"""

import os
import sys
import requests

BASE_URL = os.getenv("API_URL", "http://localhost:8000")

def check_endpoints() -> bool:
    """Hit the main dashboard endpoints and report what came back"""

    print("Checking Task Dashboard API endpoints...")
    print("=" * 50)

    checks = [
        ("Root", "/", {}),
        ("Health", "/health", {}),
        ("Admin analytics", "/api/dashboard/analytics", {"isAdmin": "true"}),
        ("Admin counts", "/api/dashboard/counts", {"isAdmin": "true"}),
        ("User analytics", "/api/dashboard/analytics", {"userId": 2, "isAdmin": "false"}),
        ("Missing userId", "/api/dashboard/counts", {"isAdmin": "false"}),
    ]

    ok = True
    for label, path, params in checks:
        try:
            response = requests.get(f"{BASE_URL}{path}", params=params, timeout=10)
            body = response.json()
            if path.endswith("/analytics") and response.ok:
                summary = f"{len(body['statusStats'])} statuses, {len(body['teamPerformance'])} members"
            else:
                summary = body
            print(f"✓ {label}: {response.status_code} - {summary}")
        except requests.RequestException as e:
            ok = False
            print(f"✗ {label} failed: {e}")

    print("\n" + "=" * 50)
    print("API check completed!")
    return ok

if __name__ == "__main__":
    sys.exit(0 if check_endpoints() else 1)
