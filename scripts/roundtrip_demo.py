#!/usr/bin/env python3
"""
Round-trip demo against a real bucket: PUT, GET, DELETE, GET again.

Prerequisites:
    Credentials in ~/.oss/credentials.json, or OSS_ENDPOINT,
    OSS_ACCESS_KEY_ID and OSS_ACCESS_KEY_SECRET set in the environment or .env

Usage:
    python scripts/roundtrip_demo.py --bucket my-bucket

    # Upload a local file instead of generated text:
    python scripts/roundtrip_demo.py --bucket my-bucket --file notes.txt

    # Only print signed URLs, no network calls:
    python scripts/roundtrip_demo.py --bucket my-bucket --sign-only
"""

import argparse
import sys
import time
from pathlib import Path

from ossclient.core.logging import setup_logging
from ossclient.schemas.domain import Found
from ossclient.storage.contracts import ConfigError, TransportError
from ossclient.storage.factory import build_client

DEFAULT_PREFIX = "ossclient-demo"
URL_EXPIRE = 300  # seconds


def print_signed_urls(client, bucket: str, key: str) -> None:
    """Print one signed URL per verb."""
    for verb in ("GET", "PUT", "DELETE"):
        print(f"  {verb:<6} {client.generate_signed_url(verb, bucket, key, URL_EXPIRE)}")


def main():
    parser = argparse.ArgumentParser(description="Signed URL round-trip demo")
    parser.add_argument("--bucket", "-b", required=True, help="Target bucket")
    parser.add_argument("--key", "-k", help="Object key (default: generated under ossclient-demo/)")
    parser.add_argument("--file", "-f", type=Path, help="Local file to upload")
    parser.add_argument("--sign-only", action="store_true", help="Print signed URLs and exit")
    args = parser.parse_args()

    setup_logging()
    key = args.key or f"{DEFAULT_PREFIX}/{int(time.time())}.txt"

    try:
        client = build_client()
    except ConfigError as e:
        print(f"Error: {e}")
        sys.exit(1)

    with client:
        print("=" * 60)
        print(f"SIGNED URLS for {args.bucket}/{key} (valid {URL_EXPIRE}s)")
        print("=" * 60)
        print_signed_urls(client, args.bucket, key)
        if args.sign_only:
            return

        try:
            print("\n[1/4] Uploading...")
            if args.file:
                response = client.put_file(args.bucket, key, args.file, expire_in_seconds=URL_EXPIRE)
            else:
                response = client.put_object_text(args.bucket, key, f"hello from ossclient at {time.ctime()}")
            print(f"  Status: {response.status_code}")

            print("\n[2/4] Reading back...")
            result = client.get_object_content(args.bucket, key)
            if isinstance(result, Found):
                print(f"  Found {len(result.content)} bytes")
            else:
                print("  Error: object not found right after upload")
                sys.exit(1)

            print("\n[3/4] Deleting...")
            response = client.delete_object(args.bucket, key)
            print(f"  Status: {response.status_code}")

            print("\n[4/4] Confirming deletion...")
            gone = client.get_object_bytes(args.bucket, key) is None
            print(f"  Object gone: {gone}")
        except TransportError as e:
            print(f"  Error: {e}")
            sys.exit(1)

    print("\n" + "=" * 60)
    print("ROUND TRIP COMPLETED")
    print("=" * 60)


if __name__ == "__main__":
    main()
