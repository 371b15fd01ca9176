#!/usr/bin/env python3
"""
Cleanup script to remove every stored image via API endpoints.

Run:
    python seed/cleanup_images.py \
      --base-url https://<API-ID>.execute-api.<REGION>.amazonaws.com/<STAGE>
"""

import argparse
import sys
from typing import Any, cast
from urllib.parse import quote

from aws_lambda_powertools import Logger
import requests

logger = Logger(service="cleanup")

DEFAULT_BASE_URL = "http://localhost:3000"


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Delete all images via the image API")

    parser.add_argument(
        "--base-url",
        default=DEFAULT_BASE_URL,
        help="API base URL (stage URL for API Gateway)",
    )

    return parser.parse_args()


def cleanup_images() -> None:
    try:
        args = parse_args()
        base_url = args.base_url.rstrip("/")

        logger.info("Starting cleanup process", extra={"api_base_url": base_url})

        response = requests.get(f"{base_url}/images/list", timeout=30)

        if not response.ok:
            logger.error(
                "Failed to list images",
                extra={"status": response.status_code, "response": response.text},
            )
            sys.exit(1)

        response_json = cast(dict[str, Any], response.json())
        images = cast(list[dict[str, Any]], response_json.get("images", []))

        if not images:
            logger.info("No images found for cleanup")
            return

        for image in images:
            name = image["filename"]

            delete_resp = requests.delete(
                f"{base_url}/images/{quote(name)}",
                timeout=30,
            )

            if delete_resp.ok:
                logger.info("Deleted image", extra={"image": name})
            else:
                logger.error(
                    "Failed to delete image",
                    extra={
                        "image": name,
                        "status": delete_resp.status_code,
                        "response": delete_resp.text,
                    },
                )

        logger.info("Cleanup completed successfully")

    except Exception as exc:
        logger.exception("Cleanup failed", exc_info=exc)
        sys.exit(1)


if __name__ == "__main__":
    cleanup_images()
