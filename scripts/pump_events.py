"""Synthetic traffic generator for the order API.

Starts a pool of HTTP workers that hit the order endpoints until Ctrl+C.
Knobs (environment variables):

* HTTP_BASE_URL: base URL of the API, e.g. http://127.0.0.1:8000 (required)
* HTTP_PATHS: comma separated list of METHOD:/path entries. Defaults to
  "POST:/api/orders,GET:/api/orders".
* HTTP_WORKERS: number of concurrent workers (default 2).
* HTTP_SLEEP: pause between requests of one worker, in seconds (default 0.3).
* INVALID_RATIO: share of POSTs sent with a payload the API must reject
  (default 0.1), useful to watch the 400 path in the logs.

On exit every worker prints how many responses it got per status code.
"""
from __future__ import annotations

import os
import random
import string
import threading
import time
from collections import Counter
from typing import Dict, List, Tuple
from urllib.parse import urljoin

import requests

HTTP_BASE_URL = os.getenv("HTTP_BASE_URL")
HTTP_PATHS_RAW = os.getenv("HTTP_PATHS", "POST:/api/orders,GET:/api/orders").strip()
HTTP_WORKERS = int(os.getenv("HTTP_WORKERS", "2"))
HTTP_DELAY = float(os.getenv("HTTP_SLEEP", "0.3"))
INVALID_RATIO = float(os.getenv("INVALID_RATIO", "0.1"))

FIRST_NAMES = ["John", "Ana", "Luis", "María", "Wei", "Fatima", "Olu", "Sofía"]

INVALID_PAYLOADS = [
    {"customerName": "", "amount": 50},
    {"customerName": "   ", "amount": 10},
    {"customerName": "Ghost"},
    {"customerName": "Cheap", "amount": 0.05},
    {"amount": 12.5},
]


def _parse_http_paths(raw: str) -> List[Tuple[str, str]]:
    paths: List[Tuple[str, str]] = []
    if not raw:
        return paths
    for entry in raw.split(","):
        entry = entry.strip()
        if not entry:
            continue
        if ":" in entry:
            method, path = entry.split(":", 1)
        else:
            method, path = "GET", entry
        paths.append((method.upper(), path if path.startswith("/") else f"/{path}"))
    return paths


HTTP_PATHS = _parse_http_paths(HTTP_PATHS_RAW)


def random_customer_name() -> str:
    suffix = "".join(random.choices(string.ascii_uppercase, k=3))
    return f"{random.choice(FIRST_NAMES)} {suffix}"


def random_order_payload(invalid: bool = False) -> Dict:
    if invalid:
        return dict(random.choice(INVALID_PAYLOADS))
    return {
        "customerName": random_customer_name(),
        "amount": round(random.uniform(0.1, 500.0), 2),
    }


def http_worker(name: str, stats: Counter, stop: threading.Event) -> None:
    session = requests.Session()
    while not stop.is_set():
        method, path = random.choice(HTTP_PATHS)
        url = urljoin(HTTP_BASE_URL, path)

        try:
            if method == "POST":
                payload = random_order_payload(invalid=random.random() < INVALID_RATIO)
                resp = session.post(url, json=payload, timeout=5)
            else:
                resp = session.request(method, url, timeout=5)
            stats[resp.status_code] += 1
        except requests.RequestException as exc:
            stats["error"] += 1
            print(f"[http:{name}] error calling {method} {url}: {exc}")
        finally:
            time.sleep(HTTP_DELAY)


def main(workers: int = HTTP_WORKERS) -> None:
    if not HTTP_BASE_URL or not HTTP_PATHS:
        print("[error] HTTP_BASE_URL and HTTP_PATHS are required")
        return

    stop = threading.Event()
    threads: List[threading.Thread] = []
    stats: Dict[str, Counter] = {}

    for idx in range(workers):
        name = f"w{idx}"
        stats[name] = Counter()
        thread = threading.Thread(
            target=http_worker,
            name=f"http-{idx}",
            args=(name, stats[name], stop),
            daemon=True,
        )
        thread.start()
        threads.append(thread)
    print(f"[info] {workers} HTTP workers active against {HTTP_BASE_URL} with {len(HTTP_PATHS)} paths. Ctrl+C to stop.")

    try:
        while True:
            time.sleep(1.0)
    except KeyboardInterrupt:
        print("\n[info] Stopped by user")
    finally:
        stop.set()
        for thread in threads:
            thread.join(timeout=1.0)
        for name, counter in stats.items():
            summary = ", ".join(f"{status}={count}" for status, count in sorted(counter.items(), key=str))
            print(f"[{name}] {summary or 'no requests'}")


if __name__ == "__main__":
    main()
