#!/usr/bin/env python3
"""
Smoke test for POST /payment-instructions.

Posts a DEBIT instruction between two USD accounts and prints the outcome.
Prints 'PAYMENT INSTRUCTION SMOKE: OK' on HTTP 200 and exits 0.

Usage:
  python scripts/smoke_payment_instruction.py --url http://127.0.0.1:3000
  python scripts/smoke_payment_instruction.py --in-process

Env:
  PAYMENT_API_URL: fallback for --url
"""

import argparse
import asyncio
import json
import os
import sys

import httpx

SAMPLE_PAYLOAD = {
    "accounts": [
        {"id": "a", "balance": 230, "currency": "USD"},
        {"id": "b", "balance": 300, "currency": "USD"},
    ],
    "instruction": "DEBIT 30 USD FROM ACCOUNT a FOR CREDIT TO ACCOUNT b",
}


async def post_instruction(client: httpx.AsyncClient, payload: dict) -> httpx.Response:
    return await client.post("/payment-instructions", json=payload)


async def run(url: str, in_process: bool, payload: dict) -> int:
    if in_process:
        from payinstruct.main import app

        transport = httpx.ASGITransport(app=app)
        client = httpx.AsyncClient(transport=transport, base_url="http://smoke")
    else:
        client = httpx.AsyncClient(base_url=url, timeout=5.0)

    async with client:
        try:
            resp = await post_instruction(client, payload)
        except httpx.HTTPError as e:
            print(f"SMOKE ERR: request failed - {e}", file=sys.stderr)
            return 1

    print(f"Status: {resp.status_code}")
    try:
        print("Response:", json.dumps(resp.json(), indent=2))
    except ValueError:
        print("Raw response:", resp.text)

    if resp.status_code != 200:
        print(f"SMOKE ERR: /payment-instructions {resp.status_code}", file=sys.stderr)
        return 1
    print("PAYMENT INSTRUCTION SMOKE: OK")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--url", default=os.getenv("PAYMENT_API_URL", "http://127.0.0.1:3000"),
    )
    parser.add_argument(
        "--in-process", action="store_true",
        help="call the ASGI app directly instead of a running server",
    )
    parser.add_argument(
        "--instruction", default=SAMPLE_PAYLOAD["instruction"],
        help="override the instruction sentence",
    )
    args = parser.parse_args()
    payload = {**SAMPLE_PAYLOAD, "instruction": args.instruction}
    return asyncio.run(run(args.url, args.in_process, payload))


if __name__ == "__main__":
    raise SystemExit(main())
