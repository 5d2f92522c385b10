#!/usr/bin/env python3
"""
Verify Farmer

Review farmer registrations from the command line.

Usage:
    python scripts/verify_farmer.py list [--status Pending]
    python scripts/verify_farmer.py set <farmerId> Verified --notes "Documents checked"
"""

import argparse
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from common.errors import MarketplaceError
from common.settings import Settings
from database.connection import Database
from database.models import VERIFICATION_STATES
from verification.farmer_status import ADMIN_DECISIONS, FarmerVerification


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Review farmer verification status")
    commands = parser.add_subparsers(dest="command", required=True)

    list_cmd = commands.add_parser("list", help="List farmers")
    list_cmd.add_argument("--status", choices=VERIFICATION_STATES, help="Only farmers with this status")

    set_cmd = commands.add_parser("set", help="Record a verification decision")
    set_cmd.add_argument("farmer_id")
    set_cmd.add_argument("status", choices=ADMIN_DECISIONS)
    set_cmd.add_argument("--notes", default=None, help="Admin notes stored with the decision")
    return parser


def main(argv=None, settings: Settings = None) -> int:
    args = build_parser().parse_args(argv)
    settings = settings or Settings.from_env()
    database = Database(settings.database_url)
    database.create_all()
    verification = FarmerVerification(database)

    try:
        if args.command == "list":
            farmers = verification.list_farmers(args.status)
            if not farmers:
                print("No farmers found")
            for farmer in farmers:
                print(f"{farmer['id']}  {farmer['verificationStatus']:<9} {farmer['name']} ({farmer['farmName']}, {farmer['location']})")
            print(f"\nTotal: {len(farmers)}")
            return 0

        farmer = verification.set_verification(args.farmer_id, args.status, args.notes)
        print(f"✅ Farmer {farmer['id']} ({farmer['name']}) is now {farmer['verificationStatus']}")
        if farmer["adminNotes"]:
            print(f"   Notes: {farmer['adminNotes']}")
        return 0
    except MarketplaceError as e:
        print(f"❌ {e.message}")
        return 1
    finally:
        database.dispose()


if __name__ == "__main__":
    sys.exit(main())
