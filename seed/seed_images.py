#!/usr/bin/env python3
"""
Seed script to populate the service with sample SVGs via the upload endpoint.

Run:
    python seed/seed_images.py \
      --base-url https://<API-ID>.execute-api.<REGION>.amazonaws.com/<STAGE> \
      [--dir path/to/svgs]
"""

import argparse
from pathlib import Path
import sys
from typing import Any, cast

from aws_lambda_powertools import Logger
import requests

logger = Logger(service="seed")

DEFAULT_BASE_URL = "http://localhost:3000"

SAMPLE_SHAPES: dict[str, str] = {
    "circle.svg": '<circle cx="50" cy="50" r="40" fill="#e4572e"/>',
    "square.svg": '<rect x="10" y="10" width="80" height="80" fill="#29335c"/>',
    "triangle.svg": '<polygon points="50,10 90,90 10,90" fill="#f3a712"/>',
    "ring.svg": '<circle cx="50" cy="50" r="35" fill="none" stroke="#669bbc" stroke-width="10"/>',
}


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed SVG images via the image API")

    parser.add_argument(
        "--base-url",
        default=DEFAULT_BASE_URL,
        help="API base URL (stage URL for API Gateway)",
    )
    parser.add_argument(
        "--dir",
        type=Path,
        default=None,
        help="Upload every .svg in this directory instead of the built-in samples",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=len(SAMPLE_SHAPES),
        help="Number of images to seed",
    )

    return parser.parse_args()


def sample_svg(shape: str) -> bytes:
    return (
        '<svg xmlns="http://www.w3.org/2000/svg" width="100" height="100" '
        f'viewBox="0 0 100 100">{shape}</svg>'
    ).encode("utf-8")


def collect_images(directory: Path | None) -> list[tuple[str, bytes]]:
    if directory is None:
        return [(name, sample_svg(shape)) for name, shape in SAMPLE_SHAPES.items()]

    return [(path.name, path.read_bytes()) for path in sorted(directory.glob("*.svg"))]


def seed_images() -> None:
    try:
        args = parse_args()
        base_url = args.base_url.rstrip("/")
        upload_url = f"{base_url}/upload"

        logger.info("Starting seeding process", extra={"api_base_url": base_url})

        for name, content in collect_images(args.dir)[: args.limit]:
            response = requests.post(
                upload_url,
                files={"image": (name, content, "image/svg+xml")},
                timeout=30,
            )

            response_json = cast(dict[str, Any], response.json())

            if response.status_code == 200:
                logger.info(
                    "Seeded image",
                    extra={"image": name, "url": response_json["data"]["url"]},
                )
            else:
                logger.error(
                    "Failed to seed image",
                    extra={
                        "image": name,
                        "status": response.status_code,
                        "response": response_json,
                    },
                )

        logger.info("Seeding completed")

        list_response = requests.get(f"{base_url}/images/list", timeout=30)

        logger.info(
            "List images response",
            extra={
                "status": list_response.status_code,
                "count": list_response.json().get("count") if list_response.ok else None,
            },
        )

    except Exception as exc:
        logger.exception("Seeding failed", exc_info=exc)
        sys.exit(1)


if __name__ == "__main__":
    seed_images()
