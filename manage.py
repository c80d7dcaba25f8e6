#!/usr/bin/env python3
"""
=============================================================================
CAMPGROUND API - OPERATIONS COMMANDER
=============================================================================
Single entry point for local operations.

Usage:
    python manage.py start       # Create tables, then serve the API (uvicorn)
    python manage.py init-db     # Create missing tables and exit
    python manage.py doctor      # Configuration summary and readiness checks
"""

import argparse
import sys
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from campground_api.adapters.persistence.database import init_db, ping, session_scope
from campground_api.shared.config import ImageStorageBackend, Settings
from campground_api.shared.container import Container


# Colors for terminal output
class Colors:
    HEADER = '\033[95m'
    CYAN = '\033[96m'
    GREEN = '\033[92m'
    WARNING = '\033[93m'
    FAIL = '\033[91m'
    ENDC = '\033[0m'


def log(msg, color=Colors.ENDC):
    print(f"{color}{msg}{Colors.ENDC}")


def _redact_url(url: str) -> str:
    """Hide the password part of a database URL."""
    scheme, sep, rest = url.partition("://")
    if not sep or "@" not in rest:
        return url
    credentials, _, host = rest.rpartition("@")
    user = credentials.split(":", 1)[0]
    return f"{scheme}://{user}:***@{host}"


# --- COMMANDS ---

def init_database(container: Container) -> int:
    log("\n🗄️  Creating tables", Colors.HEADER)
    try:
        init_db(container.engine())
    except Exception as e:
        log(f"   ❌ Could not create tables: {e}", Colors.FAIL)
        return 1
    log("   ✅ Schema is up to date.", Colors.GREEN)
    return 0


def doctor(container: Container) -> int:
    """Configuration summary and connectivity checks."""
    settings: Settings = container.settings()
    log("\n🩺 Running Doctor...", Colors.HEADER)
    log(f"   Environment:   {settings.APP_ENV.value}")
    log(f"   Database:      {_redact_url(settings.DATABASE_URL)}")
    log(f"   Image storage: {settings.IMAGE_STORAGE_BACKEND.value}")

    healthy = True

    try:
        ping(container.engine())
        log("   ✅ Database reachable.", Colors.GREEN)
    except Exception as e:
        log(f"   ❌ Database unreachable: {e}", Colors.FAIL)
        healthy = False

    if healthy:
        try:
            with session_scope(container.session_factory()) as db:
                log(
                    f"   Records:       {container.user_repo(session=db).count()} users, "
                    f"{container.campground_repo(session=db).count()} campgrounds, "
                    f"{container.review_repo(session=db).count()} reviews"
                )
        except SQLAlchemyError:
            log("   ⚠️  Tables missing; run `python manage.py init-db`.", Colors.WARNING)

    if container.geocoder().health_check():
        log("   ✅ Geocoder ready.", Colors.GREEN)
    else:
        log("   ⚠️  MAPBOX_TOKEN is not set; creating campgrounds will fail.", Colors.WARNING)

    if container.image_store().health_check():
        log("   ✅ Image store ready.", Colors.GREEN)
    elif settings.IMAGE_STORAGE_BACKEND == ImageStorageBackend.CLOUDINARY:
        log("   ❌ Cloudinary credentials are incomplete.", Colors.FAIL)
        healthy = False
    else:
        log(f"   ❌ Upload directory is unusable: {settings.UPLOAD_DIR}", Colors.FAIL)
        healthy = False

    if not settings.SESSION_SECRET:
        if settings.is_production:
            log("   ❌ SESSION_SECRET is required in production.", Colors.FAIL)
            healthy = False
        else:
            log("   ⚠️  SESSION_SECRET not set; using the development default.", Colors.WARNING)

    if healthy:
        log("   ✅ Doctor complete.", Colors.GREEN)
    return 0 if healthy else 1


def start(container: Container, host: str, port: Optional[int], reload: bool) -> int:
    import uvicorn

    settings: Settings = container.settings()
    if init_database(container) != 0:
        return 1

    port = port or settings.PORT
    log(f"\n🚀 Serving on http://{host}:{port}", Colors.CYAN)
    uvicorn.run(
        "campground_api.main:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=True,
    )
    return 0


# --- MAIN ---

def main(argv: Optional[List[str]] = None, container: Optional[Container] = None) -> int:
    parser = argparse.ArgumentParser(description="Campground API Commander")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    start_parser = subparsers.add_parser("start", help="Create tables and run the API server")
    start_parser.add_argument("--host", default="0.0.0.0")
    start_parser.add_argument("--port", type=int, default=None, help="Defaults to PORT")
    start_parser.add_argument("--reload", action="store_true", help="Auto-reload on code changes")

    subparsers.add_parser("init-db", help="Create missing database tables")
    subparsers.add_parser("doctor", help="Run diagnostics")

    args = parser.parse_args(argv)

    # Default to help
    if not args.command:
        parser.print_help()
        return 0

    container = container or Container()

    if args.command == "start":
        return start(container, args.host, args.port, args.reload)
    if args.command == "init-db":
        return init_database(container)
    if args.command == "doctor":
        return doctor(container)
    return 1


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        log("\n👋 Bye.", Colors.WARNING)
        sys.exit(130)
