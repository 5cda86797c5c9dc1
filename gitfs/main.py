# Imports
import argparse
import asyncio
import base64
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from gitfs.config import Config
from gitfs.exceptions import Conflict, ContentError, FileNotFound
from gitfs.github_client import GitHubContentClient

# Logger
logger = logging.getLogger(__name__)


# Helpers
def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Read and write files in a GitHub repository")
    parser.add_argument("-t", "--token", help="Access token (defaults to GITHUB_TOKEN)")
    parser.add_argument("--ref", help="Branch or ref (defaults to the configured ref)")
    parser.add_argument("-v", "--verbose", action="store_true")

    commands = parser.add_subparsers(dest="command", required=True)

    ls = commands.add_parser("ls", help="List the repository root")
    ls.add_argument("repo", help="Repository (owner/repo)")

    cat = commands.add_parser("cat", help="Print a file")
    cat.add_argument("repo")
    cat.add_argument("path")

    write = commands.add_parser("write", help="Upload a local file")
    write.add_argument("repo")
    write.add_argument("path")
    write.add_argument("source", type=Path, help="Local file to upload")
    write.add_argument("--sha", help="Current sha when updating an existing file")

    rm = commands.add_parser("rm", help="Delete a file")
    rm.add_argument("repo")
    rm.add_argument("path")
    rm.add_argument("sha")

    return parser


async def _run(args: argparse.Namespace, config: Config, token: str) -> None:
    async with GitHubContentClient(config) as client:
        if args.command == "ls":
            for entry in await client.list(token, args.repo, args.ref):
                print(f"{entry.sha}  {entry.path}")
        elif args.command == "cat":
            file = await client.read(token, args.repo, args.path, args.ref)
            print(file.content, end="")
            logger.info(f"sha: {file.sha}")
        elif args.command == "write":
            encoded = base64.b64encode(args.source.read_bytes()).decode("ascii")
            await client.write(token, args.repo, args.path, encoded, args.sha, args.ref)
        elif args.command == "rm":
            await client.rm(token, args.repo, args.path, args.sha, args.ref)


# Execution
def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)-7s | %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )

    args = _build_parser().parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    token = args.token or os.environ.get("GITHUB_TOKEN")
    if not token:
        logger.error("Configuration error: no token given and GITHUB_TOKEN is not set")
        return 5

    try:
        config = Config()
    except ValidationError as e:
        logger.error(f"Configuration error: {e}")
        return 5

    try:
        asyncio.run(_run(args, config, token))
        return 0

    except KeyboardInterrupt:
        logger.info("\nInterrupted")
        return 130
    except FileNotFound as e:
        logger.error(f"Not found: {e}")
        return 3
    except Conflict as e:
        logger.error(f"Conflict: {e}")
        return 4
    except ContentError as e:
        logger.error(f"Request failed: {e}")
        return 2
    except ValueError as e:
        logger.error(f"Invalid request: {e}")
        return 2
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
