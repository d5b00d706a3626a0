#!/usr/bin/env python3
r"""
Sign a registered document from the command line.

Runs the same pipeline as POST /api/sign-pdf against the configured audit
store and prints the result as JSON.

Usage:
    cd backend
    python scripts/sign_document.py sample signature.png --page 1 \
        --x 0.3 --y 0.3 --width 0.2 --height 0.1

    # Check a signed file against its audit record
    python scripts/sign_document.py --verify signed-<id>.pdf
"""

import sys
import argparse
import base64
import json
import logging
from pathlib import Path

# Add parent directory to path to import signature_engine modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from signature_engine.config import Settings
from signature_engine.database import create_db_engine, create_session_factory, init_db
from signature_engine.services.signing_service import PlacementRequest, SigningService
from signature_engine.utils.exceptions import SigningApiError
from signature_engine.utils.geometry import NormalizedRect


def build_data_url(image_path: Path) -> str:
    mime = "image/jpeg" if image_path.suffix.lower() in (".jpg", ".jpeg") else "image/png"
    encoded = base64.b64encode(image_path.read_bytes()).decode("ascii")
    return f"data:{mime};base64,{encoded}"


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Place a signature image on a PDF page")
    parser.add_argument("document_id", nargs="?", help="Registered document id (e.g. sample)")
    parser.add_argument("image", nargs="?", type=Path, help="PNG or JPEG signature image")
    parser.add_argument("--page", type=int, default=1, help="1-based page number")
    parser.add_argument("--x", type=float, default=0.3, help="Left edge as a fraction of page width")
    parser.add_argument("--y", type=float, default=0.3, help="Top edge as a fraction of page height")
    parser.add_argument("--width", type=float, default=0.2, help="Box width as a fraction of page width")
    parser.add_argument("--height", type=float, default=0.1, help="Box height as a fraction of page height")
    parser.add_argument("--verify", metavar="FILE_NAME", help="Verify a signed file instead of signing")
    args = parser.parse_args(argv)

    if not args.verify and (not args.document_id or not args.image):
        parser.error("document_id and image are required unless --verify is given")
    return args


def main(argv=None) -> int:
    logging.basicConfig(level=logging.INFO)
    args = parse_args(argv)

    settings = Settings()
    engine = create_db_engine(settings.database_url)
    init_db(engine)
    db = create_session_factory(engine)()

    try:
        service = SigningService(db, settings)
        if args.verify:
            print(json.dumps(service.verify_signed_file(args.verify), indent=2))
            return 0

        request = PlacementRequest(
            document_id=args.document_id,
            signature_data_url=build_data_url(args.image),
            page=args.page,
            rect=NormalizedRect(x=args.x, y=args.y, width=args.width, height=args.height),
        )
        result = service.sign(request, ip_address="cli")
        print(json.dumps({
            "url": result.url,
            "originalHash": result.original_hash,
            "signedHash": result.signed_hash,
            "auditId": result.audit_id,
        }, indent=2))
        return 0
    except SigningApiError as e:
        print(f"Error [{e.code}]: {e.message}", file=sys.stderr)
        return 1
    finally:
        db.close()
        engine.dispose()


if __name__ == "__main__":
    sys.exit(main())
