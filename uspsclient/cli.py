import argparse
import asyncio
import json
import os
import sys

from uspsclient.client import USPSClient
from uspsclient.exceptions import USPSError
from uspsclient.integrations.pydantic import from_dataclass
from uspsclient.models import Address


def handle_verify(client, args):
    """Handles the 'verify' subcommand: Standardizes an address."""
    address = Address(street1=args.street1, street2=args.street2, city=args.city, state=args.state, zip=args.zip)
    return from_dataclass(asyncio.run(client.verify(address))).model_dump()


def handle_zip(client, args):
    """Handles the 'zip' subcommand: Finds the ZIP+4 for an address."""
    address = Address(street1=args.street1, street2=args.street2, city=args.city, state=args.state)
    return from_dataclass(asyncio.run(client.zip_code_lookup(address))).model_dump()


def handle_citystate(client, args):
    """Handles the 'citystate' subcommand: Resolves city and state for a ZIP."""
    return from_dataclass(asyncio.run(client.city_state_lookup(args.zip))).model_dump()


def handle_rate(client, args):
    """Handles the 'rate' subcommand: Outputs the raw RateV4 response as JSON."""
    return asyncio.run(client.rate_v4(args.from_zip, args.to_zip, args.weight, args.service))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="uspsclient",
        description="uspsclient CLI - Query the USPS Web Tools address and rate APIs."
    )
    parser.add_argument("--server", default=os.environ.get("USPS_SERVER_URL"),
                        help="Web Tools endpoint URL (default: $USPS_SERVER_URL).")
    parser.add_argument("--user-id", default=os.environ.get("USPS_USER_ID"),
                        help="Web Tools USERID (default: $USPS_USER_ID).")
    parser.add_argument("--timeout-ms", type=int, default=None, help="Request deadline in milliseconds.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # Subcommand: verify
    verify_parser = subparsers.add_parser("verify", help="Verify and standardize an address.")
    _add_address_arguments(verify_parser)
    verify_parser.add_argument("zip", help="5-digit ZIP code.")
    verify_parser.set_defaults(func=handle_verify)

    # Subcommand: zip
    zip_parser = subparsers.add_parser("zip", help="Look up the ZIP+4 for an address.")
    _add_address_arguments(zip_parser)
    zip_parser.set_defaults(func=handle_zip)

    # Subcommand: citystate
    citystate_parser = subparsers.add_parser("citystate", help="Look up city and state by ZIP code.")
    citystate_parser.add_argument("zip", help="5-digit ZIP code.")
    citystate_parser.set_defaults(func=handle_citystate)

    # Subcommand: rate
    rate_parser = subparsers.add_parser("rate", help="Request domestic postage rates.")
    rate_parser.add_argument("from_zip", help="Origin ZIP code.")
    rate_parser.add_argument("to_zip", help="Destination ZIP code.")
    rate_parser.add_argument("weight", help="Package weight in ounces.")
    rate_parser.add_argument("--service", default=None, help="USPS service name (default: STANDARD POST).")
    rate_parser.set_defaults(func=handle_rate)

    return parser


def _add_address_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("street1", help="Street line.")
    parser.add_argument("city", help="City name.")
    parser.add_argument("state", help="Two-letter state code.")
    parser.add_argument("--street2", default="", help="Apartment, suite or unit.")


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        client = USPSClient(args.server, args.user_id, args.timeout_ms)
    except ValueError as e:
        print(f"{e} (use --server/--user-id or USPS_SERVER_URL/USPS_USER_ID)", file=sys.stderr)
        sys.exit(1)

    try:
        result = args.func(client, args)
    except USPSError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
