"""A+ Compendium launcher. Imports data or starts the API server."""

import argparse
import logging
import os
import signal
import subprocess
import sys
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).parent
load_dotenv(ROOT / ".env")

HOST = os.getenv("HOST", "127.0.0.1")
PORT = os.getenv("PORT", "13015")


def main():
    parser = argparse.ArgumentParser(description="A+ Compendium launcher")
    parser.add_argument("--data-dir", type=Path, default=None,
                        help="Data storage directory (default: ./data)")
    parser.add_argument("--import-dir", type=Path, default=None,
                        help="Import every 5etools JSON file in a directory, then serve")
    parser.add_argument("--source", default=None,
                        help="Source for imported items that lack one (default: settings)")
    parser.add_argument("--extract-srd", nargs=2, type=Path, metavar=("DATA_DIR", "OUTPUT_DIR"),
                        help="Extract the SRD subset of a 5etools data tree and exit")
    parser.add_argument("--no-serve", action="store_true",
                        help="Run imports only, do not start the server")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    if args.extract_srd:
        from compendium.extract import extract_curated
        from compendium.parsers import discover

        input_dir, output_dir = args.extract_srd
        counts = extract_curated(discover(), input_dir, output_dir)
        for content_type, count in sorted(counts.items()):
            print(f"  {content_type}.json: {count} items")
        return

    if args.import_dir:
        from compendium import loader, storage
        from compendium.parsers import discover

        data_dir = args.data_dir or Path(os.getenv("DATA_DIR", "data"))
        storage.init_storage(data_dir)
        source = args.source or storage.get_config()["default_source"]
        total = loader.load_directory(discover(), args.import_dir, source)
        print(f"Imported {total} items from {args.import_dir}")

    if args.no_serve:
        return

    # Build env for the server so it picks up the same data dir
    env = os.environ.copy()
    if args.data_dir:
        env["DATA_DIR"] = str(args.data_dir.resolve())

    print(f"Starting API on http://{HOST}:{PORT} ...")
    proc = subprocess.Popen(
        ["uvicorn", "compendium.app:create_app", "--factory", "--reload",
         "--host", HOST, "--port", PORT],
        cwd=ROOT, env=env,
    )

    def shutdown(*_):
        print("\nShutting down...")
        proc.terminate()
        proc.wait()
        sys.exit(0)

    signal.signal(signal.SIGINT, shutdown)
    signal.signal(signal.SIGTERM, shutdown)

    proc.wait()


if __name__ == "__main__":
    main()
