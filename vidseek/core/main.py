"""
Main entry point for VidSeek.
"""

import argparse
import os
import sys

from ..api.client import BackendClient
from ..config import load_config


def main(argv=None):
    """Main entry point for VidSeek."""
    parser = argparse.ArgumentParser(description="VidSeek - Video Semantic Search client")
    parser.add_argument("video", nargs="?", help="Path to video file to preselect (optional - can load via UI)")
    parser.add_argument("--api-url", help="Backend base URL (default: $VIDSEEK_API_BASE_URL or http://localhost:8000)")
    parser.add_argument("--downloads-dir", help="Where downloaded .srt files are saved")
    parser.add_argument("--log-file", help="Also write a debug log to this file")
    parser.add_argument("--quiet", action="store_true", help="Don't log to the console")
    parser.add_argument("--check", action="store_true", help="Probe backend health once and exit")

    args = parser.parse_args(argv)

    config = load_config(
        api_base_url=args.api_url,
        downloads_dir=args.downloads_dir,
        log_file=args.log_file,
        verbose=not args.quiet
    )

    if args.check:
        client = BackendClient(config.api_base_url, health_timeout=config.health_timeout)
        healthy = client.check_health()
        print(f"{config.api_base_url}: {'healthy' if healthy else 'unavailable'}")
        return 0 if healthy else 1

    if args.video and not os.path.exists(args.video):
        print(f"Error: Video file not found: {args.video}")
        return 1

    # Tk is only needed for the window
    from .vidseek_app import VidSeek

    app = VidSeek(config, args.video)
    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
