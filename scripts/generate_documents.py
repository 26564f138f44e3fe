#!/usr/bin/env python3
"""Bulk-create DRAFT documents through the HTTP API.

Usage:
  export API_URL=http://localhost:8000
  python scripts/generate_documents.py [--count 1000] [--author "Generator Bot"]

Prints progress every 10 documents and the total time at the end.
"""
from __future__ import annotations

import argparse
import os
import sys
import time

import httpx


def main() -> int:
    parser = argparse.ArgumentParser(description="Generate test documents")
    parser.add_argument("--count", type=int, default=100, help="Number of documents to create")
    parser.add_argument("--author", type=str, default="Generator Bot", help="Author of created documents")
    args = parser.parse_args()

    if args.count < 1:
        print("--count must be positive", file=sys.stderr)
        return 1

    api_url = os.environ.get("API_URL", "http://localhost:8000").rstrip("/")

    print(f"Starting generation of {args.count} documents...")
    created = 0
    errors = 0
    start_total = time.perf_counter()
    with httpx.Client(timeout=30.0) as client:
        for i in range(1, args.count + 1):
            r = client.post(
                f"{api_url}/v1/documents",
                json={"author": args.author, "title": f"Generated document {i}"},
            )
            if r.status_code == 201:
                created += 1
            else:
                errors += 1
                print(f"Document {i} failed: {r.status_code} {r.text}", file=sys.stderr)
            if i % 10 == 0:
                print(f"Progress: {i}/{args.count} documents created")
    elapsed_ms = (time.perf_counter() - start_total) * 1000

    print(f"Completed! Created {created} documents in {elapsed_ms:.0f} ms (errors={errors})")
    return 0 if errors == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
